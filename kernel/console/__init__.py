"""kernel.console -- terminal output for gcbench.

Modules import the proxy once and never hold a backend directly::

    from kernel.console import console

    console.step(1, 6, "haversine.pure")

``kernel/cli.py`` picks the backend at startup, and again after the config
file has been read::

    from kernel.console import configure

    configure(backend="auto")  # or "rich" / "plain"
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from kernel.console._plain import PlainBackend

if TYPE_CHECKING:
    from kernel.console._protocol import ConsoleProtocol

BACKENDS: tuple[str, ...] = ("auto", "rich", "plain")

_backend: ConsoleProtocol = PlainBackend()


def configure(*, backend: str = "auto") -> None:
    """Install the backend named *backend*.

    ``"auto"`` resolves to Rich when stdout is a terminal and to plain text
    otherwise.

    Raises:
        ValueError: If *backend* is not one of ``BACKENDS``.
    """
    global _backend  # noqa: PLW0603

    if backend not in BACKENDS:
        msg = f"unknown console backend {backend!r} (expected one of {', '.join(BACKENDS)})"
        raise ValueError(msg)

    if backend == "auto":
        backend = "rich" if sys.stdout.isatty() else "plain"

    if backend == "rich":
        from kernel.console._rich import RichBackend

        _backend = RichBackend()
    else:
        _backend = PlainBackend()


def get_console() -> ConsoleProtocol:
    """Return the installed backend."""
    return _backend


class _ConsoleProxy:
    """Forwards attribute lookups to whichever backend is installed now."""

    def __getattr__(self, name: str) -> object:
        return getattr(_backend, name)


console: ConsoleProtocol = _ConsoleProxy()  # type: ignore[assignment]
