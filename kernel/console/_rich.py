"""kernel.console._rich -- Rich backend for interactive terminals."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

_THEME = Theme(
    {
        "info": "blue",
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "progress": "bold cyan",
        "heading": "bold",
    }
)


class RichBackend:
    """ConsoleProtocol implementation backed by Rich.

    Warnings and errors go to a second Console bound to stderr so that
    stdout stays clean for redirection.
    """

    def __init__(self) -> None:
        self._out = Console(theme=_THEME, highlight=False)
        self._err = Console(theme=_THEME, highlight=False, stderr=True)

    def info(self, message: str) -> None:
        self._out.print(f"  {escape(message)}", style="info")

    def success(self, message: str) -> None:
        self._out.print(f"  ✓ {escape(message)}", style="success")

    def warning(self, message: str) -> None:
        self._err.print(f"  ⚠ {escape(message)}", style="warning")

    def error(self, message: str) -> None:
        self._err.print(f"  ✗ {escape(message)}", style="error")

    def table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[str]],
        *,
        title: str = "",
        numeric: Collection[int] = (),
    ) -> None:
        grid = Table(
            title=title or None,
            title_style="heading",
            title_justify="left",
            box=box.SIMPLE_HEAD,
            show_edge=False,
        )
        for i, header in enumerate(headers):
            grid.add_column(header, justify="right" if i in numeric else "left")
        for row in rows:
            grid.add_row(*(escape(cell) for cell in row))
        self._out.print(grid)

    def kv(self, data: dict[str, str], *, title: str = "") -> None:
        grid = Table.grid(padding=(0, 1))
        grid.add_column(style="heading", justify="right")
        grid.add_column()
        for key, value in data.items():
            grid.add_row(f"{escape(key)}:", escape(value))
        if title:
            self._out.print(f"\n[heading]{escape(title)}[/]")
        self._out.print(grid)

    def step(self, current: int, total: int, description: str) -> None:
        self._out.print(f"  [progress]\\[{current}/{total}][/] {escape(description)}")

    def line(self, text: str) -> None:
        self._out.out(text, highlight=False)
