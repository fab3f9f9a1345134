from __future__ import annotations

import typer

from .base import configure_logging
from .commands.db import app as db_app
from .commands.devices import app as devices_app

configure_logging()
app = typer.Typer(
    help="GrabIt device inventory CLI",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(db_app, name="db")
app.add_typer(devices_app, name="devices")


def main() -> None:
    """Main entry point for package CLI.

    Invokes the Typer application, which handles command parsing and
    execution.

    Side Effects:
        - Processes CLI arguments and executes commands.
        - May exit with non-zero code on errors.
    """
    app()


if __name__ == "__main__":
    main()
