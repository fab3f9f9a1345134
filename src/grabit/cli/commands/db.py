"""CLI commands for database management."""

from typing import Any

import typer

from ..base import BaseCLI
from ...database import DatabaseConfig, initialize_database

db_app = typer.Typer(help="Database management commands.")


class DatabaseCLI(BaseCLI):
    """CLI helpers for database management."""

    def __init__(self) -> None:
        super().__init__("db")

    def init_db(self) -> dict[str, Any]:
        """Create the devices table using the CLI operation handler.

        Returns:
            Standardized result dictionary with success status.

        User Output:
            - "Initializing database..." pre-message.
            - Formatted result via BaseCLI.handle_cli_operation.
        """
        return self.handle_cli_operation(
            operation="db init",
            op_callable=self._init_operation,
            pre_message="Initializing database...",
        )

    def _init_operation(self) -> dict[str, Any]:
        """Internal init operation that returns standardized result.

        Exceptions are handled by handle_cli_operation via handle_errors.

        Raises:
            ConnectionFailedError: If the server is unreachable or rejects
                the credentials.
            DatabaseError: If schema execution fails.
        """
        config = DatabaseConfig.from_env()
        executed = initialize_database(config)
        return {
            "success": True,
            "message": f"Applied {executed} statement(s) to {config.database}",
        }


cli = DatabaseCLI()


@db_app.command("init")
def init_command() -> None:
    """Create the devices table if it does not exist.

    Connection settings come from GRABIT_DB_* environment variables.
    Exits with code 1 if the server cannot be reached or the schema fails.
    """
    result = cli.init_db()
    if not result.get("success"):
        raise typer.Exit(1)


app = db_app
