"""
Minimum hero guarantee.

Runs after placement and promotes committed normal tiles until the
configured minimum number of heroes is reached. Growth is only applied
where it keeps the grid free of overlaps and gaps:

- growing rows requires the tile to top every column it covers;
- growing columns requires each new column to be filled exactly up to
  the tile's top row.

A promoted tile must also keep its orientation lock and may not sit
next to another hero in plan order. Grids narrower than two columns
never gain heroes. When nothing qualifies the shortfall is accepted.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

import numpy as np

from quilt_planner.constants import SQUARE_HERO_SIDE
from quilt_planner.layout.aspect import item_orientation, leaning
from quilt_planner.layout.heroes import orientation_ok
from quilt_planner.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from quilt_planner.config import PlannerConfig
    from quilt_planner.type_defs import Placement, QuiltItem


@dataclass(frozen=True, slots=True)
class Upgrade:
    """A feasible promotion of one committed placement."""

    plan_pos: int
    rows: int
    cols: int
    x: int
    gain: int
    first_row: bool


def column_heights(placements: Sequence[Placement], num_cols: int) -> np.ndarray:
    """Recover the final skyline from committed placements."""
    heights = np.zeros(max(1, num_cols), dtype=np.int64)
    for p in placements:
        span = heights[p.x:p.x_end]
        heights[p.x:p.x_end] = np.maximum(span, p.y_end)
    return heights


def _growth_targets(p: Placement, aspect: float) -> list[tuple[int, int]]:
    """Candidate ``(rows, cols)`` in preference order for this tile."""
    lean = leaning(aspect)
    if lean == "landscape":
        return [(p.rows + 1, p.cols), (p.rows + 1, p.cols + 1),
                (p.rows, p.cols + 1)]
    if lean == "portrait":
        return [(p.rows, p.cols + 1), (p.rows + 1, p.cols + 1),
                (p.rows + 1, p.cols)]
    side = SQUARE_HERO_SIDE
    return [(max(p.rows, side), max(p.cols, side))]


def _new_x(
    p: Placement,
    rows: int,
    cols: int,
    heights: np.ndarray,
) -> int | None:
    """Return the tile's x after growth, or None if it would collide."""
    if rows > p.rows and np.any(heights[p.x:p.x_end] != p.y_end):
        return None
    extra = cols - p.cols
    if extra == 0:
        return p.x
    right = heights[p.x_end:p.x_end + extra]
    if right.size == extra and np.all(right == p.y):
        return p.x
    if p.x - extra >= 0 and np.all(heights[p.x - extra:p.x] == p.y):
        return p.x - extra
    return None


def _hero_neighbour(placements: Sequence[Placement], pos: int) -> bool:
    before = pos > 0 and placements[pos - 1].is_hero
    after = pos + 1 < len(placements) and placements[pos + 1].is_hero
    return before or after


def find_upgrade(
    placements: Sequence[Placement],
    items: Sequence[QuiltItem],
    aspects: Sequence[float],
    config: PlannerConfig,
    heights: np.ndarray,
) -> Upgrade | None:
    """Return the best feasible promotion, or None."""
    if config.cols < 2:  # noqa: PLR2004
        return None
    best: Upgrade | None = None
    for pos, p in enumerate(placements):
        if p.is_hero or _hero_neighbour(placements, pos):
            continue
        orientation = item_orientation(
            items[p.item_index],
            config.portrait_threshold,
            config.landscape_threshold,
        )
        for rows, cols in _growth_targets(p, aspects[p.item_index]):
            if rows * cols <= p.area:
                continue
            if rows > config.hero_rows_cap or cols > config.hero_cols_cap:
                continue
            if not orientation_ok(orientation, cols, rows):
                continue
            x = _new_x(p, rows, cols, heights)
            if x is None:
                continue
            cand = Upgrade(
                plan_pos=pos, rows=rows, cols=cols, x=x,
                gain=rows * cols - p.area,
                first_row=config.force_hero_on_first_row and p.row_index == 0,
            )
            if best is None or _better(cand, best):
                best = cand
            break
    return best


def _better(a: Upgrade, b: Upgrade) -> bool:
    """First-row preference, then larger gain, then earlier in plan."""
    return (not a.first_row, -a.gain, a.plan_pos) < (
        not b.first_row, -b.gain, b.plan_pos)


def ensure_min_heroes(
    placements: Sequence[Placement],
    items: Sequence[QuiltItem],
    aspects: Sequence[float],
    config: PlannerConfig,
) -> list[Placement]:
    """
    Promote normal tiles until ``min(min_total_heroes, len(items))``.

    Works on a copy of the placement list addressed by plan position and
    returns it. Never raises; a remaining shortfall is logged at DEBUG.
    """
    arena = list(placements)
    target = min(config.min_total_heroes, len(arena))
    heroes = sum(1 for p in arena if p.is_hero)
    if heroes >= target:
        return arena

    heights = column_heights(arena, config.cols)
    while heroes < target:
        up = find_upgrade(arena, items, aspects, config, heights)
        if up is None:
            logger.debug(
                "Minimum heroes not reachable: %d of %d placed",
                heroes, target,
            )
            break
        p = arena[up.plan_pos]
        span = heights[up.x:up.x + up.cols]
        heights[up.x:up.x + up.cols] = np.maximum(span, p.y + up.rows)
        arena[up.plan_pos] = replace(
            p, rows=up.rows, cols=up.cols, x=up.x, is_hero=True,
        )
        heroes += 1
    return arena
