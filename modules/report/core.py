"""Benchmark reporting — ranking, speed ratios, and output rows.

Pure functions over ``BenchmarkResult`` values. Rendering to the terminal is
left to the caller (see ``kernel/cli.py``); ``export_results`` is the only
function here that performs I/O.
"""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING

import yaml

from domain.models import Comparison

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import Path

    from domain.models import BenchmarkCase, BenchmarkResult

logger = logging.getLogger("gcbench.report")

DRY_RUN_MARKER = "* "

TABLE_HEADERS: list[str] = ["Rank", "Case", "Iter/s", "Relative"]
# Column indices holding numbers.
NUMERIC_COLUMNS = frozenset({0, 2})


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------


def rank(results: Iterable[BenchmarkResult]) -> list[BenchmarkResult]:
    """Sort results fastest first; ties are broken by name."""
    return sorted(results, key=lambda r: (-r.rate, r.name))


def speed_ratio(a: BenchmarkResult, b: BenchmarkResult) -> float:
    """Return how many times faster *a* ran than *b*."""
    return a.rate / b.rate


def pairwise(results: Iterable[BenchmarkResult]) -> list[Comparison]:
    """Compare every unordered pair of results.

    Each comparison names the faster case first, so ``ratio >= 1``.
    Pairs follow rank order.
    """
    ranked = rank(results)
    return [
        Comparison(faster=fast.name, slower=slow.name, ratio=speed_ratio(fast, slow))
        for fast, slow in itertools.combinations(ranked, 2)
    ]


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_ratio(ratio: float) -> str:
    """Render a speed ratio, e.g. ``"2.3x faster"``.

    Factors below 1.1 get two decimals so near-ties stay distinguishable.
    """
    if ratio == 1:
        return "same"
    factor, word = (ratio, "faster") if ratio > 1 else (1 / ratio, "slower")
    digits = 2 if factor < 1.1 else 1
    return f"{factor:.{digits}f}x {word}"


def format_rate(rate: float) -> str:
    """Render iterations per second with thousands separators."""
    return f"{rate:,.0f}"


def comparison_rows(results: Iterable[BenchmarkResult]) -> list[list[str]]:
    """Build table rows, one per case, in rank order.

    The relative column compares each case against the fastest one.
    """
    ranked = rank(results)
    if not ranked:
        return []
    fastest = ranked[0]
    rows: list[list[str]] = []
    for position, result in enumerate(ranked, start=1):
        if result is fastest:
            relative = "fastest"
        else:
            relative = format_ratio(speed_ratio(result, fastest))
        rows.append([str(position), result.name, format_rate(result.rate), relative])
    return rows


def dry_run_lines(cases: Iterable[BenchmarkCase]) -> list[str]:
    """List case names sorted alphabetically, each with the dry-run marker."""
    return [f"{DRY_RUN_MARKER}{name}" for name in sorted(c.name for c in cases)]


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------


def results_to_dict(results: Mapping[str, BenchmarkResult]) -> dict[str, object]:
    """Serialise results into plain data, fastest first."""
    ranked = rank(results.values())
    return {
        "results": [
            {
                "name": r.name,
                "iterations": r.iterations,
                "elapsed_seconds": r.elapsed_seconds,
                "rate": r.rate,
            }
            for r in ranked
        ],
        "comparisons": [
            {"faster": c.faster, "slower": c.slower, "ratio": c.ratio} for c in pairwise(ranked)
        ],
    }


def export_results(results: Mapping[str, BenchmarkResult], path: Path) -> None:
    """Write results to *path* as YAML, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = results_to_dict(results)
    path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))
    logger.info("Exported %d result(s) to %s", len(results), path)
