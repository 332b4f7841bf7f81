"""kernel.console._protocol -- what every console backend must provide.

Stdlib only; the Rich import stays in ``_rich.py``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence


class ConsoleProtocol(Protocol):
    """Output surface used by kernel/cli.py.

    Messages::

        console.warning("numba is not installed; fast cases are skipped")
        console.error("case 'vincenty.pure' failed: ValueError('math domain error')")

    Tables, with numeric columns right-aligned by index::

        console.table(["Rank", "Case", "Iter/s"], rows, title="Results", numeric={0, 2})
        console.kv({"Iterations": "5,000,000"}, title="Benchmark")

    Progress while cases are timed::

        console.step(1, 12, "haversine.pure")
    """

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None:
        """Report a problem on stderr; the run continues."""
        ...

    def error(self, message: str) -> None:
        """Report a failure on stderr."""
        ...

    def table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[str]],
        *,
        title: str = "",
        numeric: Collection[int] = (),
    ) -> None:
        """Render *rows* under *headers*; columns in *numeric* align right."""
        ...

    def kv(self, data: dict[str, str], *, title: str = "") -> None: ...

    def step(self, current: int, total: int, description: str) -> None:
        """Announce that case *current* of *total* is being timed."""
        ...

    def line(self, text: str) -> None:
        """Write *text* to stdout exactly as given."""
        ...
