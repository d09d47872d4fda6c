"""Rich-powered console sink.

Purpose
-------
Print flushed batches to a terminal through Rich so colour handling follows
the same ``force_color`` / ``no_color`` switches as the rest of the toolchain.

Contents
--------
* :class:`RichConsoleSink` - sink printing each batch with an optional style.

System Role
-----------
Default human-facing sink of the ``pipe`` CLI command.
"""

from __future__ import annotations

from rich.console import Console

from lib_async_writer.application.ports.sink import SinkPort


class RichConsoleSink(SinkPort):
    """Print each batch using Rich, without markup or highlighting.

    Examples
    --------
    >>> from io import StringIO
    >>> console = Console(file=StringIO(), record=True, width=80)
    >>> sink = RichConsoleSink(console=console)
    >>> sink("[bold]literal[/bold]")
    >>> "[bold]literal[/bold]" in console.export_text()
    True
    """

    def __init__(
        self,
        *,
        console: Console | None = None,
        style: str | None = None,
        force_color: bool = False,
        no_color: bool = False,
    ) -> None:
        """Configure the console and the style applied to every batch."""
        if console is not None:
            self._console = console
        else:
            self._console = Console(force_terminal=force_color or None, no_color=no_color)
        self._style = style if not no_color else None

    @property
    def console(self) -> Console:
        return self._console

    def __call__(self, text: str) -> None:
        self._console.print(text, style=self._style or "", markup=False, highlight=False, soft_wrap=True)


__all__ = ["RichConsoleSink"]
