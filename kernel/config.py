"""
kernel/config.py — Defaults and configuration-file loading.

Run settings come from three layers, later ones winning: the constants
below, an optional ``gcbench.yaml`` file, and command-line flags.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import yaml

from domain.errors import ConfigurationError
from domain.models import BenchConfig, CallStyle, Coordinate
from kernel.console import BACKENDS

if TYPE_CHECKING:
    import argparse
    from pathlib import Path

logger = logging.getLogger("gcbench.config")

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

CONFIG_FILE = "gcbench.yaml"

DEFAULT_ITERATIONS = 5_000_000

# Big Ben -> Statue of Liberty
DEFAULT_ORIGIN = Coordinate(51.5007, -0.1246)
DEFAULT_DESTINATION = Coordinate(40.6892, -74.0445)

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_ALLOWED_KEYS = frozenset({"iterations", "formulas", "styles", "origin", "destination", "console"})


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def check_iterations(value: Any, source: str = "iterations") -> int:
    """Return *value* if it is a positive integer.

    Raises:
        ConfigurationError: Otherwise.
    """
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        msg = f"{source} must be a positive integer, got {value!r}"
        raise ConfigurationError(msg)
    return value


def parse_style(value: Any) -> CallStyle:
    """Convert a style name such as ``"pure"`` into a ``CallStyle``."""
    try:
        return CallStyle(value)
    except ValueError:
        known = ", ".join(s.value for s in CallStyle)
        msg = f"unknown call style {value!r} (known: {known})"
        raise ConfigurationError(msg) from None


def parse_coordinate(value: Any, key: str) -> Coordinate:
    """Convert a ``{lat: .., lon: ..}`` mapping into a ``Coordinate``."""
    if not isinstance(value, dict) or set(value) != {"lat", "lon"}:
        msg = f"{key} must be a mapping with 'lat' and 'lon' keys"
        raise ConfigurationError(msg)
    lat, lon = value["lat"], value["lon"]
    for part in (lat, lon):
        if isinstance(part, bool) or not isinstance(part, (int, float)):
            msg = f"{key} coordinates must be numbers, got {part!r}"
            raise ConfigurationError(msg)
    if not -90 <= lat <= 90 or not -180 <= lon <= 180:
        msg = f"{key} out of range: lat={lat}, lon={lon}"
        raise ConfigurationError(msg)
    return Coordinate(float(lat), float(lon))


def _string_list(value: Any, key: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        msg = f"{key} must be a list of strings"
        raise ConfigurationError(msg)
    return tuple(value)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def find_config(directory: Path) -> Path | None:
    """Return ``directory/gcbench.yaml`` if it exists."""
    candidate = directory / CONFIG_FILE
    return candidate if candidate.is_file() else None


def load_config(path: Path) -> dict[str, Any]:
    """Load and validate a YAML configuration file.

    Args:
        path: File to read.

    Returns:
        Validated values keyed like ``BenchConfig`` fields. Keys absent from
        the file are absent from the result.

    Raises:
        ConfigurationError: If the file is unreadable, is not valid YAML, or
            holds unknown keys or badly typed values.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"cannot read config file {path}: {exc}"
        raise ConfigurationError(msg) from exc

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        msg = f"invalid YAML in {path}: {exc}"
        raise ConfigurationError(msg) from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        msg = f"{path} must contain a mapping at the top level"
        raise ConfigurationError(msg)

    if not all(isinstance(key, str) for key in raw):
        msg = f"config keys in {path} must be strings"
        raise ConfigurationError(msg)

    unknown = sorted(set(raw) - _ALLOWED_KEYS)
    if unknown:
        msg = f"unknown config key(s) in {path}: {', '.join(unknown)}"
        raise ConfigurationError(msg)

    values: dict[str, Any] = {}
    if "iterations" in raw:
        values["iterations"] = check_iterations(raw["iterations"])
    if "formulas" in raw:
        values["formulas"] = _string_list(raw["formulas"], "formulas")
    if "styles" in raw:
        values["styles"] = tuple(parse_style(s) for s in _string_list(raw["styles"], "styles"))
    for key in ("origin", "destination"):
        if key in raw:
            values[key] = parse_coordinate(raw[key], key)
    if "console" in raw:
        if raw["console"] not in BACKENDS:
            msg = f"console must be one of {', '.join(BACKENDS)}, got {raw['console']!r}"
            raise ConfigurationError(msg)
        values["console"] = raw["console"]

    logger.debug("Loaded config from %s: %s", path, sorted(values))
    return values


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def resolve_config(args: argparse.Namespace, file_values: dict[str, Any]) -> BenchConfig:
    """Merge defaults, file values, and CLI flags into a ``BenchConfig``.

    Style toggles (``--pure/--no-pure`` ...) left unset keep the file's or
    default selection; set ones add or remove that style.
    """
    iterations = args.iters if args.iters is not None else file_values.get("iterations")
    iterations = check_iterations(
        DEFAULT_ITERATIONS if iterations is None else iterations, "--iters"
    )

    formulas = tuple(args.formula) if args.formula else file_values.get("formulas", ())

    styles = list(file_values.get("styles", tuple(CallStyle)))
    for style in CallStyle:
        toggle = getattr(args, style.value, None)
        if toggle is True and style not in styles:
            styles.append(style)
        elif toggle is False and style in styles:
            styles.remove(style)
    if not styles:
        msg = "every call style is disabled; nothing to benchmark"
        raise ConfigurationError(msg)

    console_backend = "plain" if args.plain else file_values.get("console", "auto")

    return BenchConfig(
        iterations=iterations,
        formulas=formulas,
        styles=tuple(s for s in CallStyle if s in styles),
        origin=file_values.get("origin", DEFAULT_ORIGIN),
        destination=file_values.get("destination", DEFAULT_DESTINATION),
        console=console_backend,
    )
