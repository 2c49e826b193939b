from __future__ import annotations

import io
from typing import Protocol, runtime_checkable

import typer


@runtime_checkable
class Reporter(Protocol):
    def write(self, text: str) -> None: ...

    def write_status(self, passed: bool) -> None: ...

    def buffered_text(self) -> str | None: ...


class ConsoleReporter:
    """Live coloured output, or an uncoloured in-memory buffer when quiet."""

    def __init__(self, *, quiet: bool = False) -> None:
        self.quiet = quiet
        self._buffer: io.StringIO | None = io.StringIO() if quiet else None

    def write(self, text: str) -> None:
        if self._buffer is not None:
            self._buffer.write(text)
            return
        typer.echo(text, nl=False)

    def write_status(self, passed: bool) -> None:
        label = "ok" if passed else "FAILED"
        if self._buffer is not None:
            self._buffer.write(label)
            return
        colour = typer.colors.GREEN if passed else typer.colors.RED
        typer.echo(typer.style(label, fg=colour), nl=False)

    def buffered_text(self) -> str | None:
        if self._buffer is None:
            return None
        return self._buffer.getvalue()
