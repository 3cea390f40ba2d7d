"""Status command for CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from libvault.cli.formatting import _display_path, _format_status_with_color
from libvault.cli.main import app, build_installer, load_descriptors, report_error
from libvault.core.exceptions import LibvaultError


@app.command()
def status(
    manifest: str | None = typer.Argument(
        None, help="Manifest file or name. Defaults to all discovered manifests."
    ),
    platform: str | None = typer.Option(
        None,
        "--platform",
        "-p",
        help="Platform identifier to resolve for (e.g. osx-arm64).",
    ),
    dest: str | None = typer.Option(
        None,
        "--dest",
        "-d",
        help="Libraries directory. Defaults to LIBVAULT_LIBRARIES_DIR or ./libraries.",
    ),
) -> None:
    """Show cache state (cached/refresh/missing) per artifact."""
    descriptors, root = load_descriptors(manifest)
    installer = build_installer(root, dest, platform)

    try:
        instructions = installer.plan(descriptors)
        missing = {instruction.local_path for instruction in installer.missing(descriptors)}
    except LibvaultError as e:
        report_error(e)
        raise typer.Exit(1) from None

    if not instructions:
        typer.echo(f"No artifacts needed on {installer.platform}.")
        return

    table = Table()
    table.add_column("Path")
    table.add_column("Status")

    for instruction in instructions:
        if instruction.force_refresh:
            state = "refresh"
        elif instruction.local_path in missing:
            state = "missing"
        else:
            state = "cached"
        table.add_row(
            _display_path(instruction, installer.base_dir),
            _format_status_with_color(state),
        )

    console = Console(force_terminal=True)
    console.print(table)
