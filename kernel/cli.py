#!/usr/bin/env python3
"""
gcbench CLI -- compare the speed of great-circle distance implementations.

Usage:
  gcbench [--formula NAME ...] [--no-pure] [--no-method] [--no-fast]
          [--iters N] [--dry-run] [--list-formulas]
          [--config PATH] [--output PATH] [--plain]
          [--verbose | --quiet] [--log-file PATH]

Exit status is 0 on success, 2 when the options cannot be parsed, and 1
for invalid configuration or a case that fails its smoke call.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from domain.errors import CaseExecutionError, ConfigurationError
from domain.models import CallStyle
from kernel.console import configure, console

if TYPE_CHECKING:
    from domain.models import BenchConfig, BenchmarkCase
    from modules.registry.core import FormulaRegistry

logger = logging.getLogger("gcbench")

# ---------------------------------------------------------------------------
# CLI commands
# ---------------------------------------------------------------------------


def cmd_list_formulas(registry: FormulaRegistry) -> None:
    """Display every registered formula and its call styles."""
    rows: list[list[str]] = []
    for family in registry.families():
        styles = " ".join(s.value for s in registry.styles_for(family))
        target = registry.alias_target(family)
        rows.append([family, styles, f"alias of {target}" if target else ""])
    console.table(["Formula", "Styles", "Notes"], rows, title="Registered formulas")


def cmd_dry_run(cases: list[BenchmarkCase]) -> None:
    """Print the selected case names without executing anything."""
    from modules.report.core import dry_run_lines

    for line in dry_run_lines(cases):
        console.line(line)


def cmd_run(config: BenchConfig, cases: list[BenchmarkCase], output: Path | None) -> None:
    """Smoke-test, time, and rank *cases*."""
    from modules.harness.core import BenchmarkHarness
    from modules.report.core import (
        NUMERIC_COLUMNS,
        TABLE_HEADERS,
        comparison_rows,
        export_results,
    )

    console.kv(
        {
            "Cases": str(len(cases)),
            "Iterations": f"{config.iterations:,}",
            "From": f"{config.origin.lat}, {config.origin.lon}",
            "To": f"{config.destination.lat}, {config.destination.lon}",
        },
        title="Benchmark",
    )

    harness = BenchmarkHarness(on_case_start=console.step)
    results = harness.run(cases, config.iterations)

    console.table(
        TABLE_HEADERS,
        comparison_rows(results.values()),
        title="Results",
        numeric=NUMERIC_COLUMNS,
    )

    if output is not None:
        export_results(results, output)
        console.info(f"Results written to {output}")
    console.success(f"Benchmarked {len(results)} case(s)")


def _run(args: argparse.Namespace) -> None:
    """Resolve configuration and dispatch to the selected command."""
    from adapters.numba_formulas import HAS_NUMBA
    from kernel.config import find_config, load_config, resolve_config
    from modules.registry.core import default_registry

    config_path = args.config or find_config(Path.cwd())
    file_values = load_config(config_path) if config_path is not None else {}
    config = resolve_config(args, file_values)
    configure(backend=config.console)
    logger.debug("Resolved configuration: %s", config)

    registry = default_registry()

    if args.list_formulas:
        cmd_list_formulas(registry)
        return

    if CallStyle.FAST in config.styles and not HAS_NUMBA:
        console.warning("numba is not installed; fast cases are skipped")

    cases = registry.build_cases(
        config.formulas, config.styles, config.origin, config.destination
    )

    if args.dry_run:
        cmd_dry_run(cases)
        return

    cmd_run(config, cases, args.output)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def positive_int(value: str) -> int:
    """argparse type for ``--iters``."""
    try:
        number = int(value)
    except ValueError:
        msg = f"invalid integer: {value!r}"
        raise argparse.ArgumentTypeError(msg) from None
    if number <= 0:
        msg = f"must be a positive integer, got {number}"
        raise argparse.ArgumentTypeError(msg)
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gcbench",
        description="Benchmark great-circle distance formulas",
    )
    parser.add_argument(
        "--formula",
        action="append",
        metavar="NAME",
        help="Formula family to include (repeatable; default: all)",
    )
    for style in CallStyle:
        parser.add_argument(
            f"--{style.value}",
            action=argparse.BooleanOptionalAction,
            default=None,
            help=f"Include {style.value} call-style cases (default: on)",
        )
    parser.add_argument(
        "--iters",
        type=positive_int,
        default=None,
        metavar="N",
        help="Timed calls per case (default: 5,000,000)",
    )
    parser.add_argument("--dry-run", action="store_true", help="List cases without running them")
    parser.add_argument(
        "--list-formulas", action="store_true", help="Show registered formulas and exit"
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML config file")
    parser.add_argument("--output", type=Path, default=None, help="Write results as YAML")
    parser.add_argument("--plain", action="store_true", help="Plain-text output (no colour)")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Enable debug logging")
    verbosity.add_argument("--quiet", action="store_true", help="Only log errors")
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file")
    return parser


def _setup_logging(args: argparse.Namespace) -> None:
    """Configure the audit log; user-facing output goes through the console."""
    from kernel.config import LOG_FORMAT

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    elif args.log_file is not None:
        level = logging.INFO
    else:
        level = logging.WARNING

    if args.log_file is not None:
        args.log_file.parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(filename=str(args.log_file), format=LOG_FORMAT, level=level)
    else:
        # Keep the log off stdout so dry-run listings stay machine-readable.
        logging.basicConfig(stream=sys.stderr, format=LOG_FORMAT, level=level)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    # -- Console configuration (refined once the config file is read) -------
    configure(backend="plain" if args.plain else "auto")

    _setup_logging(args)

    try:
        _run(args)
    except ConfigurationError as exc:
        console.error(str(exc))
        sys.exit(1)
    except CaseExecutionError as exc:
        logger.error("Run aborted: %s", exc)
        console.error(str(exc))
        console.info("No results reported; fix the failing implementation and retry.")
        sys.exit(1)


if __name__ == "__main__":
    main()
