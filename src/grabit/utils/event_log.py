"""Human-readable connection/event log.

Every connect, disconnect, and failure event is echoed to stdout and
appended as one line to `error_log.txt` in the working directory:

    2026-10-19T12:00:00Z - Cannot connect to Server - (2003, "Can't connect ...")

The same event is also forwarded to the standard logging tree.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from .. import global_config as g
from .time import now_ts_utc_z

logger = logging.getLogger(__name__)


class EventLog:
    """Console plus append-only file sink for repository events."""

    def __init__(self, path: Path | None = None, *, echo: bool = True) -> None:
        """Create an event log.

        Args:
            path: File to append to. Defaults to `error_log.txt` resolved
                against the working directory at write time.
            echo: Whether to also print events to stdout.
        """
        self._path = path
        self.echo = echo

    @property
    def path(self) -> Path:
        return self._path or Path.cwd() / g.ERROR_LOG_FILENAME

    def record(self, message: str, exc: BaseException | None = None) -> str:
        """Record one event and return the line written to the file.

        Args:
            message: Event description.
            exc: Exception that caused the event, if any.

        Returns:
            The file line (without trailing newline).

        User Output:
            - Prints message (and "Error: {exc}" when exc is given) via typer.echo().

        Logs:
            - INFO: message when exc is None.
            - ERROR: "{message}: {exc}" otherwise.

        Side Effects:
            - Appends one line to the log file. Write failures are logged,
              never raised.
        """
        detail = str(exc) if exc is not None else ""
        line = f"{now_ts_utc_z()} - {message} - {detail}"

        if self.echo:
            typer.echo(message if exc is None else f"{message}\nError: {detail}")

        if exc is None:
            logger.info(message)
        else:
            logger.error("%s: %s", message, detail)

        try:
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")
        except OSError:
            logger.exception("Could not append to event log %s", self.path)

        return line
