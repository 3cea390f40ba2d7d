"""Locate command for CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from libvault.cli.formatting import _display_path, _format_size, _short_sha1
from libvault.cli.main import app, build_installer, load_descriptors, report_error
from libvault.core.exceptions import DescriptorError


@app.command()
def locate(
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
    """Show where each needed artifact comes from, without fetching."""
    descriptors, root = load_descriptors(manifest)
    installer = build_installer(root, dest, platform)

    try:
        instructions = installer.plan(descriptors)
    except DescriptorError as e:
        report_error(e)
        raise typer.Exit(1) from None

    if not instructions:
        typer.echo(f"No artifacts needed on {installer.platform}.")
        return

    table = Table(title=f"Artifacts for {installer.platform}")
    table.add_column("Path")
    table.add_column("URL", overflow="fold")
    table.add_column("SHA-1")
    table.add_column("Size", justify="right")
    table.add_column("Refresh")

    for instruction in instructions:
        table.add_row(
            _display_path(instruction, installer.base_dir),
            instruction.source_url,
            _short_sha1(instruction.expected_sha1),
            _format_size(instruction.size),
            "always" if instruction.force_refresh else "",
        )

    console = Console(force_terminal=True)
    console.print(table)
