"""Planning entry point tying hero selection, placement and upgrades."""

from __future__ import annotations

from typing import TYPE_CHECKING

from quilt_planner.config import PlannerConfig
from quilt_planner.layout.guarantee import ensure_min_heroes
from quilt_planner.layout.heroes import QueueEntry, interleave, select_heroes
from quilt_planner.layout.skyline import PlacementEngine
from quilt_planner.logging_utils import logger
from quilt_planner.random_utils import make_random
from quilt_planner.type_defs import Plan, PlanSummary

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from quilt_planner.type_defs import QuiltItem


def plan_quilt(
    items: Sequence[QuiltItem],
    config: PlannerConfig | None = None,
) -> Plan:
    """
    Compute the quilt layout for ``items``.

    Returns one placement per item. With reordering enabled the plan is
    not in input order; map tiles back through ``item_index``. The same
    items, config and seed always give the same plan. Never raises for
    malformed items.
    """
    cfg = config or PlannerConfig()
    if not items:
        return Plan(num_cols=cfg.cols)

    rng = make_random(cfg.seed)
    engine = PlacementEngine(items, cfg, rng)

    if cfg.strategy == "skyline":
        heroes = select_heroes(items, cfg, rng)
        entries = interleave(
            [QueueEntry(i, heroes.get(i)) for i in range(len(items))],
            rng,
        )
    else:
        entries = [QueueEntry(i) for i in range(len(items))]

    placements = engine.run(entries)
    placements = ensure_min_heroes(placements, items, engine.aspects, cfg)

    plan = Plan(
        placements=tuple(placements),
        num_cols=cfg.cols,
        heroes_requested=min(cfg.min_total_heroes, len(items)),
    )
    logger.debug(
        "Planned %d items on %d columns (%s): %d heroes, %d rows",
        len(plan), plan.num_cols, cfg.strategy, plan.hero_count, plan.height,
    )
    return plan


def summarize_plan(plan: Plan, config: PlannerConfig) -> PlanSummary:
    """Collect headline figures for logging and CLI output."""
    summary = PlanSummary(
        items=len(plan),
        heroes=plan.hero_count,
        height=plan.height,
        shortfall=plan.heroes_shortfall,
        strategy=config.strategy,
    )
    if config.num_cols < 1:
        summary.notes.append(f"num_cols {config.num_cols} clamped to 1")
    if plan.heroes_shortfall:
        summary.notes.append(
            f"{plan.heroes_shortfall} hero(es) short of the minimum",
        )
    return summary
