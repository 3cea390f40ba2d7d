"""CLI commands for libvault."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import typer

from libvault.core.exceptions import LibvaultError, ManifestLoadError


if TYPE_CHECKING:
    from libvault import LibraryDescriptor, LibraryInstaller


app = typer.Typer(
    name="libvault",
    help="Resolve library descriptors into verified, locally cached artifacts.",
    no_args_is_help=True,
)


@app.callback()
def configure(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log resolution and cache decisions to stderr.",
    ),
) -> None:
    """Resolve library descriptors into verified, locally cached artifacts."""
    if verbose:
        from rich.console import Console
        from rich.logging import RichHandler

        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
            force=True,
        )
        # Keep third-party chatter out of the debug log
        for name in ("urllib3", "botocore", "boto3", "s3transfer"):
            logging.getLogger(name).setLevel(logging.WARNING)


def report_error(error: LibvaultError) -> None:
    """Print an error and its recovery hint to stderr."""
    typer.echo(f"Error: {error}", err=True)
    if error.recovery_hint:
        typer.echo(f"Hint: {error.recovery_hint}", err=True)


def load_descriptors(manifest: str | None = None) -> tuple[list[LibraryDescriptor], Path]:
    """Load descriptors for CLI commands.

    Args:
        manifest: A manifest file path, a discovered manifest name, or None
            for every discovered manifest.

    Returns:
        Tuple of (descriptors, project root Path).

    Raises:
        typer.Exit: If no manifest is found or one fails to load.
    """
    from libvault.config import find_project_root
    from libvault.manifest import discover_manifests, load_manifest

    root = find_project_root()

    if manifest is not None and Path(manifest).is_file():
        paths = [Path(manifest)]
    else:
        manifests = discover_manifests(root)
        if not manifests:
            typer.echo("No manifests found. Run 'libvault init' to get started.")
            raise typer.Exit(1)
        if manifest is not None:
            if manifest not in manifests:
                typer.echo(f"Manifest '{manifest}' not found.")
                typer.echo(f"Available manifests: {', '.join(sorted(manifests))}")
                raise typer.Exit(1)
            paths = [manifests[manifest]]
        else:
            paths = list(manifests.values())

    descriptors: list[LibraryDescriptor] = []
    for path in paths:
        try:
            descriptors.extend(load_manifest(path))
        except ManifestLoadError as e:
            report_error(e)
            raise typer.Exit(1) from None

    return descriptors, root


def build_installer(
    root: Path,
    dest: str | None,
    platform: str | None,
    max_workers: int | None = None,
) -> LibraryInstaller:
    """Create an installer rooted at the project with CLI overrides applied.

    Raises:
        typer.Exit: If the libraries directory setting is unusable.
    """
    from libvault import LibraryInstaller
    from libvault.adapters.executor import create_executor
    from libvault.core.exceptions import ConfigurationError

    try:
        return LibraryInstaller.from_directory(
            directory=root,
            libraries_dir=dest,
            executor=create_executor(max_workers),
            platform=platform,
        )
    except ConfigurationError as e:
        report_error(e)
        raise typer.Exit(1) from None


@app.command()
def init(
    directory: str | None = typer.Argument(
        None,
        help="Directory to initialize. Defaults to current directory.",
    ),
) -> None:
    """Initialize a new libvault project structure."""
    from libvault.config import DEFAULT_LIBRARIES_DIR

    target = Path(directory) if directory else Path.cwd()
    target = target.resolve()

    manifests_dir = target / ".libvault" / "manifests"
    if not manifests_dir.exists():
        manifests_dir.mkdir(parents=True)
        typer.echo(f"Created {manifests_dir.relative_to(target)}/")

    libraries_dir = target / DEFAULT_LIBRARIES_DIR
    if not libraries_dir.exists():
        libraries_dir.mkdir(parents=True)
        typer.echo(f"Created {libraries_dir.relative_to(target)}/")


@app.command(name="platform")
def show_platform() -> None:
    """Show the platform tags used for rule and natives matching."""
    from libvault.core.platform import current_arch, current_os, platform_identifier

    typer.echo(f"OS: {current_os()}")
    typer.echo(f"Architecture: {current_arch()}")
    typer.echo(f"Identifier: {platform_identifier()}")


@app.command(name="path")
def show_path(
    coordinate: str = typer.Argument(..., help="Library coordinate, e.g. org.ow2.asm:asm:9.2"),
    classifier: str | None = typer.Option(
        None,
        "--classifier",
        help="Classifier to use instead of the coordinate's own.",
    ),
) -> None:
    """Print the repository-relative path of a coordinate."""
    from libvault.core.exceptions import CoordinateParseError
    from libvault.core.models import LibraryCoordinate
    from libvault.core.path_utils import to_relative_path

    try:
        parsed = LibraryCoordinate.parse(coordinate)
    except CoordinateParseError as e:
        report_error(e)
        raise typer.Exit(1) from None

    typer.echo(to_relative_path(parsed, classifier))


@app.command()
def fetch(
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
    workers: int | None = typer.Option(
        None,
        "--workers",
        "-w",
        min=1,
        help="Maximum parallel downloads. Use 1 for sequential.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show the files that would be materialized without fetching anything.",
    ),
) -> None:
    """Fetch every artifact the manifest needs, reusing verified local copies."""
    from rich.console import Console

    from libvault import RichProgressReporter

    descriptors, root = load_descriptors(manifest)
    installer = build_installer(root, dest, platform, workers)

    try:
        with RichProgressReporter(console=Console(stderr=True)) as progress:
            paths = installer.install(
                descriptors, progress=progress, max_workers=workers, dry_run=dry_run
            )
    except LibvaultError as e:
        report_error(e)
        raise typer.Exit(1) from None
    except OSError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    for path in paths:
        typer.echo(str(path))


def main() -> None:
    """Entry point for the CLI."""
    app()
