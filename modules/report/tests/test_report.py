"""Tests for modules/report/core.py — ranking, ratios, rows, export."""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

import pytest
import yaml

from modules.report.core import (
    DRY_RUN_MARKER,
    comparison_rows,
    dry_run_lines,
    export_results,
    format_rate,
    format_ratio,
    pairwise,
    rank,
    results_to_dict,
    speed_ratio,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from domain.models import BenchmarkCase, BenchmarkResult


@pytest.fixture
def results(result_factory: Callable[..., BenchmarkResult]) -> list[BenchmarkResult]:
    return [
        result_factory("vincenty.pure", rate=100.0),
        result_factory("haversine.fast", rate=2300.0),
        result_factory("haversine.pure", rate=1000.0),
    ]


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------


def test_rank_fastest_first(results: list[BenchmarkResult]) -> None:
    assert [r.name for r in rank(results)] == [
        "haversine.fast",
        "haversine.pure",
        "vincenty.pure",
    ]


def test_rank_ties_broken_by_name(result_factory: Callable[..., BenchmarkResult]) -> None:
    tied = [result_factory("b", rate=5.0), result_factory("a", rate=5.0)]
    assert [r.name for r in rank(tied)] == ["a", "b"]


def test_speed_ratio(results: list[BenchmarkResult]) -> None:
    fast, pure, _ = rank(results)
    assert speed_ratio(fast, pure) == pytest.approx(2.3)


def test_speed_ratio_is_symmetric(results: list[BenchmarkResult]) -> None:
    for a, b in itertools.permutations(results, 2):
        assert speed_ratio(a, b) == pytest.approx(1 / speed_ratio(b, a))


def test_pairwise_covers_every_pair(results: list[BenchmarkResult]) -> None:
    comparisons = pairwise(results)
    assert len(comparisons) == 3
    pairs = {(c.faster, c.slower) for c in comparisons}
    assert pairs == {
        ("haversine.fast", "haversine.pure"),
        ("haversine.fast", "vincenty.pure"),
        ("haversine.pure", "vincenty.pure"),
    }
    assert all(c.ratio >= 1 for c in comparisons)


def test_pairwise_single_result(result_factory: Callable[..., BenchmarkResult]) -> None:
    assert pairwise([result_factory()]) == []


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("ratio", "expected"),
    [
        (2.3, "2.3x faster"),
        (1.0, "same"),
        (0.5, "2.0x slower"),
        (10.04, "10.0x faster"),
        (1.03, "1.03x faster"),
        (1 / 1.04, "1.04x slower"),
        (1.1, "1.1x faster"),
    ],
)
def test_format_ratio(ratio: float, expected: str) -> None:
    assert format_ratio(ratio) == expected


def test_format_rate() -> None:
    assert format_rate(1234567.8) == "1,234,568"


def test_comparison_rows(results: list[BenchmarkResult]) -> None:
    assert comparison_rows(results) == [
        ["1", "haversine.fast", "2,300", "fastest"],
        ["2", "haversine.pure", "1,000", "2.3x slower"],
        ["3", "vincenty.pure", "100", "23.0x slower"],
    ]


def test_comparison_rows_empty() -> None:
    assert comparison_rows([]) == []


# ---------------------------------------------------------------------------
# Dry run
# ---------------------------------------------------------------------------


def test_dry_run_lines_sorted_with_marker(case_factory: Callable[..., BenchmarkCase]) -> None:
    cases = [case_factory(n) for n in ["vincenty.pure", "haversine.method", "haversine.fast"]]
    assert dry_run_lines(cases) == [
        f"{DRY_RUN_MARKER}haversine.fast",
        f"{DRY_RUN_MARKER}haversine.method",
        f"{DRY_RUN_MARKER}vincenty.pure",
    ]


def test_dry_run_lists_each_case_once(case_factory: Callable[..., BenchmarkCase]) -> None:
    names = ["c", "a", "b", "e", "d"]
    lines = dry_run_lines(case_factory(n) for n in names)
    assert len(lines) == len(names)
    assert sorted(line.removeprefix(DRY_RUN_MARKER) for line in lines) == sorted(names)


def test_dry_run_does_not_call_thunks(case_factory: Callable[..., BenchmarkCase]) -> None:
    case = case_factory("a")
    dry_run_lines([case])
    assert case.thunk.calls == 0  # type: ignore[attr-defined]


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------


def test_results_to_dict(results: list[BenchmarkResult]) -> None:
    data = results_to_dict({r.name: r for r in results})
    assert [r["name"] for r in data["results"]] == [  # type: ignore[index,union-attr]
        "haversine.fast",
        "haversine.pure",
        "vincenty.pure",
    ]
    assert len(data["comparisons"]) == 3  # type: ignore[arg-type]


def test_export_results_writes_yaml(tmp_path: Path, results: list[BenchmarkResult]) -> None:
    path = tmp_path / "out" / "results.yaml"
    export_results({r.name: r for r in results}, path)

    data = yaml.safe_load(path.read_text())
    first = data["results"][0]
    assert first["name"] == "haversine.fast"
    assert first["iterations"] == 1000
    assert first["rate"] == pytest.approx(2300.0)
    assert data["comparisons"][0]["faster"] == "haversine.fast"
