"""Core data types for gcbench.

All types are frozen dataclasses with complete type annotations.
This module has ZERO imports from outside the Python standard library.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class CallStyle(Enum):
    """Calling convention through which a formula is exercised."""

    PURE = "pure"
    METHOD = "method"
    FAST = "fast"


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lon: float


# ---------------------------------------------------------------------------
# Benchmark types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BenchmarkCase:
    """One named, directly callable unit of work to be timed.

    ``thunk`` takes no arguments and returns a numeric distance.
    """

    name: str
    thunk: Callable[[], float] = field(compare=False)


@dataclass(frozen=True)
class BenchmarkResult:
    """Timing outcome for a single case."""

    name: str
    iterations: int
    elapsed_seconds: float
    rate: float


@dataclass(frozen=True)
class Comparison:
    """Relative speed of two cases; ``ratio`` is always >= 1."""

    faster: str
    slower: str
    ratio: float


# ---------------------------------------------------------------------------
# Run configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BenchConfig:
    """Fully resolved configuration for one benchmark run.

    An empty ``formulas`` tuple selects every registered family.
    """

    iterations: int
    formulas: tuple[str, ...] = ()
    styles: tuple[CallStyle, ...] = (CallStyle.PURE, CallStyle.METHOD, CallStyle.FAST)
    origin: Coordinate = Coordinate(51.5007, -0.1246)
    destination: Coordinate = Coordinate(40.6892, -74.0445)
    console: str = "auto"
