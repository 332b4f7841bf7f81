"""Shared pytest fixtures and test factories for gcbench.

Provides:
- A fake monotonic clock for deterministic timing
- Factory functions for the benchmark domain models
- Pytest fixtures wrapping the most commonly used factories
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from domain.models import BenchmarkCase, BenchmarkResult, Coordinate

if TYPE_CHECKING:
    from collections.abc import Callable


# ── Fake Port Implementations ─────────────────────────────────────────────


class FakeClock:
    """Clock port that advances by a fixed step on every reading.

    Tracks the number of readings via ``calls``.
    """

    def __init__(self, step: float = 0.5, start: float = 100.0) -> None:
        self._now = start
        self._step = step
        self.calls = 0

    def __call__(self) -> float:
        """Return the current reading, then advance."""
        self.calls += 1
        reading = self._now
        self._now += self._step
        return reading


class CountingThunk:
    """Zero-argument callable returning a constant and counting calls."""

    def __init__(self, value: object = 42.0) -> None:
        self._value = value
        self.calls = 0

    def __call__(self) -> object:
        self.calls += 1
        return self._value


# ── Domain Model Factories ───────────────────────────────────────────────


def make_case(name: str = "haversine.pure", value: object = 42.0) -> BenchmarkCase:
    """Create a BenchmarkCase whose thunk is a ``CountingThunk``."""
    return BenchmarkCase(name=name, thunk=CountingThunk(value))


def make_result(
    name: str = "haversine.pure",
    rate: float = 1000.0,
    iterations: int = 1000,
) -> BenchmarkResult:
    """Create a BenchmarkResult consistent with *rate* and *iterations*."""
    return BenchmarkResult(
        name=name,
        iterations=iterations,
        elapsed_seconds=iterations / rate,
        rate=rate,
    )


# ── Pytest Fixtures ──────────────────────────────────────────────────────


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a clock advancing 0.5 s per reading."""
    return FakeClock()


@pytest.fixture
def case_factory() -> Callable[..., BenchmarkCase]:
    """Provide the make_case factory function."""
    return make_case


@pytest.fixture
def result_factory() -> Callable[..., BenchmarkResult]:
    """Provide the make_result factory function."""
    return make_result


@pytest.fixture
def london() -> Coordinate:
    """Big Ben."""
    return Coordinate(51.5007, -0.1246)


@pytest.fixture
def new_york() -> Coordinate:
    """Statue of Liberty."""
    return Coordinate(40.6892, -74.0445)
