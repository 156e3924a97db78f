"""CLI argument parsing and main entry point."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

import quilt_planner.config as qp_config
import quilt_planner.manifest as qp_manifest
from quilt_planner.config_defaults import (
    DEFAULT_LOOKAHEAD,
    DEFAULT_NUM_COLS,
    DEFAULT_ROW_HEIGHT,
)
from quilt_planner.gallery import (
    ExportOptions,
    export_plan,
    positive_int,
    unit_float,
)
from quilt_planner.layout import plan_quilt, summarize_plan
from quilt_planner.logging_utils import logger, set_verbosity
from quilt_planner.version import resolve_project_version

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence

T = TypeVar("T")


def _wrap_validator(
    validator: Callable[[str], T],
    error_cls: type[argparse.ArgumentTypeError] = argparse.ArgumentTypeError,
) -> Callable[[str], T]:
    """Convert ``ValueError`` from a validator into ``ArgumentTypeError``."""

    def wrapper(text: str) -> T:
        try:
            return validator(text)
        except ValueError as exc:
            raise error_cls(str(exc)) from exc

    return wrapper


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the command-line interface."""
    p = argparse.ArgumentParser(
        description="Plan a quilted image grid layout",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "quilt-planner --input photos/ --cols 4\n"
            "quilt-planner --input manifest.json --seed 7 --out plan.json\n"
            "quilt-planner --input manifest.json --strategy row "
            "--min-heroes 1 --force-hero-on-first-row"
        ),
    )
    p.add_argument(
        "--version", action="version",
        version=f"%(prog)s {resolve_project_version()}")

    inp = p.add_argument_group("input")
    inp.add_argument(
        "--input", type=Path,
        help="JSON manifest or directory of images")

    output = p.add_argument_group("output")
    output.add_argument(
        "--out", type=Path, default=None,
        help="Write the plan JSON here instead of stdout")
    output.add_argument(
        "--row-height", type=_wrap_validator(positive_int),
        help=f"Row height used for sized image URLs "
             f"(default: {DEFAULT_ROW_HEIGHT})")
    output.add_argument(
        "--summary", action="store_true",
        help="Log plan figures after planning")
    output.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging")

    grid = p.add_argument_group("grid")
    grid.add_argument(
        "--cols", type=_wrap_validator(positive_int),
        help=f"Grid width in columns (default: {DEFAULT_NUM_COLS})")
    grid.add_argument(
        "--max-cols-per-item", type=_wrap_validator(positive_int))
    grid.add_argument(
        "--max-rows-per-item", type=_wrap_validator(positive_int))

    packing = p.add_argument_group("packing")
    packing.add_argument(
        "--strategy", choices=["skyline", "row"],
        help="Placement policy")
    packing.add_argument(
        "--lookahead", type=int,
        help=f"Queued items scored per step (default: {DEFAULT_LOOKAHEAD})")
    packing.add_argument(
        "--no-reorder", action="store_true",
        help="Keep strict input order")
    packing.add_argument(
        "--ignore-explicit-spans", action="store_true",
        help="Ignore rows/cols given in the manifest")
    packing.add_argument(
        "--seed", type=int,
        help="Seed for reproducible plans")

    hero = p.add_argument_group("hero")
    hero.add_argument(
        "--hero-ratio", type=_wrap_validator(unit_float),
        help="Fraction of items promoted to heroes")
    hero.add_argument("--hero-min-cols", type=_wrap_validator(positive_int))
    hero.add_argument("--hero-max-cols", type=_wrap_validator(positive_int))
    hero.add_argument("--hero-rows-max", type=_wrap_validator(positive_int))
    hero.add_argument("--hero-cols-max", type=_wrap_validator(positive_int))
    hero.add_argument(
        "--highlight-prob", type=_wrap_validator(unit_float),
        help="Per-item hero chance for the row strategy")
    hero.add_argument("--max-highlights-per-row", type=int)
    hero.add_argument(
        "--min-heroes", type=int,
        help="Minimum number of heroes to guarantee")
    hero.add_argument(
        "--force-hero-on-first-row", action="store_true",
        help="Prefer placing the guaranteed heroes in the first row")

    orient = p.add_argument_group("orientation")
    orient.add_argument("--portrait-threshold", type=float)
    orient.add_argument("--landscape-threshold", type=float)

    cfg = p.add_argument_group("config")
    cfg.add_argument(
        "--config", type=str,
        help="Path to config.toml file")
    cfg.add_argument(
        "--validate-config-only", action="store_true",
        help="Validate config file and exit without planning")

    return p


def log_parameters(
    args: argparse.Namespace,
    cfg: qp_config.QuiltPlannerConfig,
) -> None:
    """Log the effective planning parameters."""
    if getattr(args, "config", None):
        logger.info("Loaded config from: %s", args.config)
    logger.info("Input: %s", args.input)
    logger.info("Columns: %d", cfg.grid.num_cols)
    logger.info("Strategy: %s", cfg.packing.strategy)
    logger.info("Lookahead: %d", cfg.packing.lookahead)
    logger.info("Reorder: %s",
                "Enabled" if cfg.packing.allow_reorder else "Disabled")
    logger.info("Hero Ratio: %g", cfg.hero.ratio)
    logger.info("Minimum Heroes: %d", cfg.hero.min_total)
    logger.info("Seed: %s",
                cfg.packing.seed if cfg.packing.seed is not None
                else "(random)")


def run_from_args(args: argparse.Namespace) -> None:
    """Load items, plan the layout and export it."""
    base_cfg: qp_config.QuiltPlannerConfig | None = None
    if args.config:
        base_cfg = qp_config.ConfigLoader.load(args.config)
        if args.validate_config_only:
            logger.info("Config %s validated successfully.", args.config)
            sys.exit(0)

    cfg = qp_config.build_config_from_cli(vars(args), base_config=base_cfg)
    log_parameters(args, cfg)

    items = qp_manifest.load_items(args.input)
    planner_cfg = cfg.planner()
    plan = plan_quilt(items, planner_cfg)

    if args.summary:
        summary = summarize_plan(plan, planner_cfg)
        logger.info("Items: %d, Heroes: %d, Grid Rows: %d",
                    summary.items, summary.heroes, summary.height)
        for note in summary.notes:
            logger.info("Note: %s", note)

    export_plan(plan, items, ExportOptions(
        out_path=args.out,
        row_height=cfg.grid.row_height,
    ))


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command-line interface."""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)
    if args.validate_config_only and not args.config:
        arg_parser.error("--validate-config-only requires --config")
    if not args.validate_config_only and args.input is None:
        arg_parser.error("the following arguments are required: --input")
    if args.verbose:
        set_verbosity(verbose=True)

    try:
        run_from_args(args)
    except (FileNotFoundError, ValueError) as exc:
        arg_parser.error(str(exc))
    return 0


if __name__ == "__main__":  # pragma: no cover
    main()
