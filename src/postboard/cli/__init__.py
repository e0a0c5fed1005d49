"""CLI for postboard."""

# Import commands to register them with the app
# These imports have side effects (registering commands with @app.command())
from postboard.cli.commands import compose as _compose_module  # noqa: F401
from postboard.cli.commands import list as _list_module  # noqa: F401
from postboard.cli.main import app, main


__all__ = ["app", "main"]
