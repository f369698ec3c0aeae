"""Coloured console output for csvpost runs."""

from __future__ import annotations

import json
import logging
from typing import IO, Any

import typer

from .logger import get_logger

DIVIDER = "-" * 40


class ConsoleReporter:
    """Leveled console messages mirrored into the file log.

    Debug lines are only printed in verbose mode; they still reach the logger,
    whose own level decides whether they are written.
    """

    def __init__(
        self,
        *,
        verbose: bool = False,
        stream: IO[str] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.verbose = verbose
        self._stream = stream
        self._logger = logger or get_logger("console")

    def info(self, message: str) -> None:
        self._emit("INFO: ", typer.colors.BLUE, message)
        self._logger.info(message)

    def success(self, message: str) -> None:
        self._emit("SUCCESS: ", typer.colors.GREEN, message)
        self._logger.info(message)

    def warn(self, message: str) -> None:
        self._emit("WARNING: ", typer.colors.YELLOW, message)
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._emit("ERROR: ", typer.colors.RED, message)
        self._logger.error(message)

    def debug(self, message: str) -> None:
        if self.verbose:
            self._emit("DEBUG: ", typer.colors.BRIGHT_BLACK, message)
        self._logger.debug(message)

    def divider(self) -> None:
        typer.echo(typer.style(DIVIDER, fg=typer.colors.BRIGHT_BLACK), file=self._stream)

    def json(self, label: str, data: Any) -> None:
        typer.echo(typer.style(f"{label}:", fg=typer.colors.CYAN), file=self._stream)
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False, default=str), file=self._stream)

    def _emit(self, prefix: str, color: str, message: str) -> None:
        typer.echo(typer.style(prefix, fg=color) + message, file=self._stream)


__all__ = ["ConsoleReporter", "DIVIDER"]
