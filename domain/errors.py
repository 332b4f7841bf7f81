"""Exception hierarchy for gcbench."""

from __future__ import annotations


class BenchError(Exception):
    """Base class for every error raised by gcbench."""


class ConfigurationError(BenchError):
    """Raised when options or configuration values are invalid.

    Raised before any benchmark case executes.
    """


class DuplicateCaseError(ConfigurationError):
    """Raised when a case or formula name is registered twice."""


class CaseExecutionError(BenchError):
    """Raised when a case fails during the smoke pass.

    The original exception is kept on ``cause`` and chained as
    ``__cause__``.
    """

    def __init__(self, case_name: str, cause: BaseException) -> None:
        super().__init__(f"case {case_name!r} failed: {cause!r}")
        self.case_name = case_name
        self.cause = cause


class ConvergenceError(BenchError, ArithmeticError):
    """Raised when an iterative formula fails to converge."""
