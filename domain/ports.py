"""Callable ports the harness and registry depend on.

Plain functions and objects with a matching ``__call__`` both satisfy them.
"""

from __future__ import annotations

from typing import Protocol


class DistanceFormula(Protocol):
    """A great-circle distance function over decimal-degree coordinates."""

    def __call__(self, lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Return the distance in metres between two points."""
        ...


class Clock(Protocol):
    """A monotonic clock returning fractional seconds."""

    def __call__(self) -> float:
        """Return the current reading."""
        ...
