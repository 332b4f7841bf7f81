"""Adapter: numba-compiled formulas implement DistanceFormula.

Provides the ``fast`` call style. The pure-Python formula bodies from
``modules.formulas.core`` are compiled with ``numba.njit`` in nopython mode.
Compilation is lazy: the first call of each function compiles it, which the
harness smoke pass absorbs before any timing starts.

numba is an optional dependency (``pip install gcbench[fast]``). When it is
not importable ``HAS_NUMBA`` is False and ``FAST_FORMULAS`` is empty, so the
registry simply does not offer the fast style.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from modules.formulas.core import FORMULAS

if TYPE_CHECKING:
    from domain.ports import DistanceFormula

logger = logging.getLogger("gcbench.adapters")

try:
    from numba import njit

    HAS_NUMBA = True
except ImportError:
    HAS_NUMBA = False


def compile_formula(formula: DistanceFormula) -> DistanceFormula:
    """Return a nopython-mode compiled version of *formula*.

    Raises:
        RuntimeError: If numba is not installed.
    """
    if not HAS_NUMBA:
        msg = "numba is not installed; install the 'fast' extra"
        raise RuntimeError(msg)
    return njit(nogil=True)(formula)


def _compile_all() -> dict[str, DistanceFormula]:
    if not HAS_NUMBA:
        logger.info("numba not available; fast formulas disabled")
        return {}
    return {name: compile_formula(fn) for name, fn in FORMULAS.items()}


FAST_FORMULAS: dict[str, DistanceFormula] = _compile_all()
