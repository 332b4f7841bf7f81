"""Benchmark harness — smoke-test and time a set of cases.

A run is a single linear phase: validate → smoke pass → time → return.

The smoke pass calls every case once before any timing starts, so a broken
implementation aborts the whole run instead of polluting the timing table.
Cases are then timed strictly one after another; the clock is sampled
immediately before and after each case's iteration loop.
"""

from __future__ import annotations

import itertools
import logging
import numbers
import time
from typing import TYPE_CHECKING

from domain.errors import CaseExecutionError, ConfigurationError, DuplicateCaseError
from domain.models import BenchmarkResult

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from domain.models import BenchmarkCase
    from domain.ports import Clock

logger = logging.getLogger("gcbench.harness")


def validate_run(cases: Sequence[BenchmarkCase], iterations: int) -> None:
    """Check run preconditions without executing anything.

    Raises:
        ConfigurationError: If *iterations* is not a positive integer or
            *cases* is empty.
        DuplicateCaseError: If two cases share a name.
    """
    if isinstance(iterations, bool) or not isinstance(iterations, int):
        msg = f"iterations must be an integer, got {type(iterations).__name__}"
        raise ConfigurationError(msg)
    if iterations <= 0:
        msg = f"iterations must be positive, got {iterations}"
        raise ConfigurationError(msg)
    if not cases:
        msg = "at least one benchmark case is required"
        raise ConfigurationError(msg)

    seen: set[str] = set()
    for case in cases:
        if case.name in seen:
            msg = f"duplicate case name: {case.name}"
            raise DuplicateCaseError(msg)
        seen.add(case.name)


def _is_number(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


class BenchmarkHarness:
    """Runs benchmark cases and measures their throughput.

    Args:
        clock: Monotonic clock returning seconds. Defaults to
            ``time.perf_counter``.
        on_case_start: Optional ``(index, total, name)`` callback invoked
            before each case is timed; used for progress output.
        resolution: Smallest elapsed time a measurement may report. Defaults
            to the resolution of ``time.perf_counter``. Keeps ``rate`` finite
            when a loop finishes within one clock tick.
    """

    def __init__(
        self,
        clock: Clock = time.perf_counter,
        *,
        on_case_start: Callable[[int, int, str], None] | None = None,
        resolution: float | None = None,
    ) -> None:
        self._clock = clock
        self._on_case_start = on_case_start
        if resolution is None:
            resolution = time.get_clock_info("perf_counter").resolution
        self._resolution = resolution

    def run(self, cases: Iterable[BenchmarkCase], iterations: int) -> dict[str, BenchmarkResult]:
        """Smoke-test then time every case.

        Args:
            cases: Cases to run, in execution order.
            iterations: Number of timed calls per case.

        Returns:
            One result per case keyed by case name, in input order.

        Raises:
            ConfigurationError: If the preconditions do not hold. Nothing
                is executed.
            CaseExecutionError: If a case fails its smoke call or a timed
                call. No results are produced.
        """
        cases = tuple(cases)
        validate_run(cases, iterations)

        logger.info("Smoke pass over %d case(s)", len(cases))
        self.smoke_test(cases)

        results: dict[str, BenchmarkResult] = {}
        total = len(cases)
        for index, case in enumerate(cases, start=1):
            if self._on_case_start is not None:
                self._on_case_start(index, total, case.name)
            results[case.name] = self.time_case(case, iterations)
        return results

    def smoke_test(self, cases: Iterable[BenchmarkCase]) -> None:
        """Call each case once, failing fast on the first error.

        A case fails if its thunk raises or returns anything other than a
        real number. An exception instance returned by the thunk is treated
        like one it raised.

        Raises:
            CaseExecutionError: Wrapping the original exception.
        """
        for case in cases:
            try:
                value = case.thunk()
            except Exception as exc:
                logger.error("Smoke call failed for %s: %r", case.name, exc)
                raise CaseExecutionError(case.name, exc) from exc

            if _is_number(value):
                logger.debug("Smoke %s -> %r", case.name, value)
                continue

            if isinstance(value, BaseException):
                cause: BaseException = value
            else:
                cause = TypeError(f"expected a number, got {type(value).__name__}")
            logger.error("Smoke call failed for %s: %r", case.name, cause)
            raise CaseExecutionError(case.name, cause) from cause

    def time_case(self, case: BenchmarkCase, iterations: int) -> BenchmarkResult:
        """Time *iterations* calls of one case.

        Raises:
            CaseExecutionError: If a call raises after the smoke pass
                succeeded. No result is produced for the case.
        """
        thunk = case.thunk
        loop = itertools.repeat(None, iterations)

        start = self._clock()
        try:
            for _ in loop:
                thunk()
        except Exception as exc:
            logger.error("Timed call failed for %s: %r", case.name, exc)
            raise CaseExecutionError(case.name, exc) from exc
        end = self._clock()

        elapsed = max(end - start, self._resolution)
        rate = iterations / elapsed
        logger.info("%s: %d iterations in %.6fs (%.0f/s)", case.name, iterations, elapsed, rate)
        return BenchmarkResult(
            name=case.name,
            iterations=iterations,
            elapsed_seconds=elapsed,
            rate=rate,
        )
