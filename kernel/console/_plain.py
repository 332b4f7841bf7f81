"""kernel.console._plain -- print()-based backend.

Selected for pipes, CI logs and ``--plain``. Output carries no escape codes,
so dry-run listings can be consumed by other tools.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

_INDENT = "  "
_GAP = "  "


class PlainBackend:
    """ConsoleProtocol implementation writing plain text."""

    def info(self, message: str) -> None:
        print(f"{_INDENT}{message}")

    def success(self, message: str) -> None:
        print(f"{_INDENT}[ok] {message}")

    def warning(self, message: str) -> None:
        print(f"{_INDENT}[warn] {message}", file=sys.stderr)

    def error(self, message: str) -> None:
        print(f"{_INDENT}[error] {message}", file=sys.stderr)

    def table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[str]],
        *,
        title: str = "",
        numeric: Collection[int] = (),
    ) -> None:
        if title:
            print(f"\n{_INDENT}{title}:")
        if not headers:
            return

        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row[: len(headers)]):
                widths[i] = max(widths[i], len(cell))

        def render(cells: Sequence[str]) -> str:
            padded = []
            for i, width in enumerate(widths):
                cell = cells[i] if i < len(cells) else ""
                padded.append(cell.rjust(width) if i in numeric else cell.ljust(width))
            return (_INDENT + _GAP.join(padded)).rstrip()

        print(render(headers))
        print(_INDENT + _GAP.join("-" * w for w in widths))
        for row in rows:
            print(render(row))

    def kv(self, data: dict[str, str], *, title: str = "") -> None:
        if title:
            print(f"\n{_INDENT}{title}:")
        width = max((len(k) for k in data), default=0)
        for key, value in data.items():
            print(f"{_INDENT}{key.rjust(width)}: {value}")

    def step(self, current: int, total: int, description: str) -> None:
        print(f"{_INDENT}[{current}/{total}] {description}", flush=True)

    def line(self, text: str) -> None:
        print(text)
