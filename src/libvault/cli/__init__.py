"""CLI for libvault."""

# Import commands to register them with the app
# These imports have side effects (registering commands with @app.command())
from libvault.cli.commands import locate as _locate_module  # noqa: F401
from libvault.cli.commands import status as _status_module  # noqa: F401
from libvault.cli.main import app, main


__all__ = ["app", "main"]
