"""Formula registry — static registration of benchmarkable implementations.

Maps each formula family (``haversine``, ``vincenty``, ...) to one
case-building factory per call style. The registry is populated explicitly
at startup; nothing is discovered by reflection.

A factory takes the origin and destination coordinates and returns a
zero-argument thunk that computes the distance between them.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

from domain.errors import ConfigurationError, DuplicateCaseError
from domain.models import BenchmarkCase, CallStyle
from modules.formulas.core import FORMULAS, GreatCircle

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from domain.models import Coordinate
    from domain.ports import DistanceFormula

    CaseFactory = Callable[[Coordinate, Coordinate], Callable[[], float]]

logger = logging.getLogger("gcbench.registry")


def case_name(family: str, style: CallStyle) -> str:
    """Return the benchmark label for a family/style pair."""
    return f"{family}.{style.value}"


# ---------------------------------------------------------------------------
# Factory builders
# ---------------------------------------------------------------------------


def function_factory(formula: DistanceFormula) -> CaseFactory:
    """Build a factory whose thunks call *formula* with plain floats."""

    def factory(origin: Coordinate, destination: Coordinate) -> Callable[[], float]:
        lat1, lon1 = origin.lat, origin.lon
        lat2, lon2 = destination.lat, destination.lon
        return lambda: formula(lat1, lon1, lat2, lon2)

    return factory


def method_factory(formula: DistanceFormula) -> CaseFactory:
    """Build a factory whose thunks go through ``GreatCircle.distance``."""

    def factory(origin: Coordinate, destination: Coordinate) -> Callable[[], float]:
        calculator = GreatCircle(formula)
        return lambda: calculator.distance(origin, destination)

    return factory


def alias_factory(target: CaseFactory) -> CaseFactory:
    """Wrap *target* so it can be registered under another label."""

    @functools.wraps(target)
    def factory(origin: Coordinate, destination: Coordinate) -> Callable[[], float]:
        return target(origin, destination)

    return factory


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class FormulaRegistry:
    """Registry of formula families and their per-style factories."""

    def __init__(self) -> None:
        self._factories: dict[str, dict[CallStyle, CaseFactory]] = {}
        self._aliases: dict[str, str] = {}

    def register(self, family: str, style: CallStyle, factory: CaseFactory) -> None:
        """Register *factory* for *family* under *style*.

        Raises:
            DuplicateCaseError: If the family already has that style.
        """
        styles = self._factories.setdefault(family, {})
        if style in styles:
            msg = f"duplicate registration: {case_name(family, style)}"
            raise DuplicateCaseError(msg)
        styles[style] = factory
        logger.debug("Registered %s", case_name(family, style))

    def alias(self, label: str, target: str) -> None:
        """Register *label* as an adapter over every style of *target*.

        The target's own entries are left untouched.

        Raises:
            DuplicateCaseError: If *label* is already a family.
            ConfigurationError: If *target* is not registered.
        """
        if label in self._factories:
            msg = f"duplicate registration: {label}"
            raise DuplicateCaseError(msg)
        if target not in self._factories:
            msg = f"cannot alias unknown formula {target!r}"
            raise ConfigurationError(msg)
        self._factories[label] = {
            style: alias_factory(factory) for style, factory in self._factories[target].items()
        }
        self._aliases[label] = target
        logger.debug("Aliased %s -> %s", label, target)

    def families(self) -> list[str]:
        """Return every registered family name, sorted."""
        return sorted(self._factories)

    def styles_for(self, family: str) -> tuple[CallStyle, ...]:
        """Return the styles registered for *family*, in enum order."""
        styles = self._factories.get(family, {})
        return tuple(s for s in CallStyle if s in styles)

    def alias_target(self, family: str) -> str | None:
        """Return the family *family* aliases, or None."""
        return self._aliases.get(family)

    def __contains__(self, family: object) -> bool:
        return family in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def build_cases(
        self,
        families: Iterable[str],
        styles: Iterable[CallStyle],
        origin: Coordinate,
        destination: Coordinate,
    ) -> list[BenchmarkCase]:
        """Build one case per selected family/style pair.

        Args:
            families: Family names to include; empty selects all of them.
                Repeated names are included once.
            styles: Call styles to include.
            origin: First point of every distance computation.
            destination: Second point of every distance computation.

        Returns:
            Cases ordered by family selection, then by style.

        Raises:
            ConfigurationError: If a family is unknown or nothing is selected.
        """
        selected = list(dict.fromkeys(families)) or self.families()
        unknown = [f for f in selected if f not in self._factories]
        if unknown:
            msg = f"unknown formula(s): {', '.join(unknown)} (known: {', '.join(self.families())})"
            raise ConfigurationError(msg)

        wanted = set(styles)
        cases: list[BenchmarkCase] = []
        for family in selected:
            registered = self._factories[family]
            for style in CallStyle:
                if style not in wanted:
                    continue
                factory = registered.get(style)
                if factory is None:
                    logger.warning("%s has no %s implementation; skipped", family, style.value)
                    continue
                cases.append(
                    BenchmarkCase(name=case_name(family, style), thunk=factory(origin, destination))
                )

        if not cases:
            msg = "no benchmark cases selected"
            raise ConfigurationError(msg)
        return cases


def default_registry() -> FormulaRegistry:
    """Return a registry holding every built-in formula.

    The ``fast`` style is present only when numba is installed.
    ``great_circle`` is an alias for ``haversine``.
    """
    from adapters.numba_formulas import FAST_FORMULAS

    registry = FormulaRegistry()
    for name, formula in FORMULAS.items():
        registry.register(name, CallStyle.PURE, function_factory(formula))
        registry.register(name, CallStyle.METHOD, method_factory(formula))
    for name, formula in FAST_FORMULAS.items():
        registry.register(name, CallStyle.FAST, function_factory(formula))
    registry.alias("great_circle", "haversine")
    return registry
