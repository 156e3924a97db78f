"""
Hero selection, orientation locking and interleaving.

Heroes are tiles promoted to an above-normal span. Their footprint keeps
the source image's orientation: portrait heroes are never wider than
tall, landscape and square heroes are never taller than wide.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from quilt_planner.constants import EXTREME_PORTRAIT_FACTOR
from quilt_planner.layout.aspect import height_ratio, item_orientation

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from quilt_planner.config import PlannerConfig
    from quilt_planner.random_utils import RandomSource
    from quilt_planner.type_defs import Orientation, QuiltItem


@dataclass(frozen=True, slots=True)
class HeroSpec:
    """Primary hero footprint chosen for one item."""

    cols: int
    rows: int
    orientation: Orientation


@dataclass(frozen=True, slots=True)
class QueueEntry:
    """One item waiting for placement."""

    item_index: int
    hero: HeroSpec | None = None
    demoted: bool = False

    @property
    def is_hero(self) -> bool:
        """True while the entry carries a hero footprint."""
        return self.hero is not None


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def round_half_up(value: float) -> int:
    """Round halves away from zero for non-negative values."""
    return math.floor(value + 0.5)


def enforce_orientation(
    orientation: Orientation,
    cols: int,
    rows: int,
    cols_cap: int,
    rows_cap: int,
) -> tuple[int, int]:
    """
    Clamp a hero footprint to its caps and lock its orientation.

    Returns ``(cols, rows)``. Portrait footprints end with
    ``rows >= cols``; landscape and square ones with ``rows <= cols``.
    """
    cols = _clamp(cols, 1, max(1, cols_cap))
    rows = _clamp(rows, 1, max(1, rows_cap))

    if orientation == "portrait":
        if cols > rows:
            rows = min(cols, max(1, rows_cap))
        # rows capped below cols: narrow instead
        cols = min(cols, rows)
    elif rows > cols:
        rows = cols
    return cols, rows


def orientation_ok(orientation: Orientation, cols: int, rows: int) -> bool:
    """Return True if the footprint respects the orientation lock."""
    if orientation == "portrait":
        return rows >= cols
    return rows <= cols


def hero_count_for(n_items: int, hero_ratio: float) -> int:
    """Number of heroes requested for ``n_items``."""
    return _clamp(round_half_up(n_items * hero_ratio), 0, n_items)


def hero_span_bounds(config: PlannerConfig) -> tuple[int, int]:
    """Inclusive ``(lo, hi)`` column span range for heroes."""
    cap = config.hero_cols_cap
    lo = max(1, min(config.hero_min_cols, cap))
    hi = max(lo, min(config.hero_max_cols, cap))
    return lo, hi


def base_hero_rows(
    item: QuiltItem,
    orientation: Orientation,
    config: PlannerConfig,
) -> int:
    """Starting row span for a hero of the given orientation."""
    if orientation == "portrait":
        extra = 0
        ratio = height_ratio(item.width, item.height)
        if ratio > config.portrait_threshold * EXTREME_PORTRAIT_FACTOR:
            extra = 1
        return config.base_rows_portrait + extra
    if orientation == "landscape":
        return config.base_rows_landscape
    return config.base_rows_square


def select_heroes(
    items: Sequence[QuiltItem],
    config: PlannerConfig,
    rng: RandomSource,
) -> dict[int, HeroSpec]:
    """
    Choose hero items and their primary footprints.

    A Fisher-Yates shuffle of all indices picks the first
    ``round(N * hero_ratio)`` as heroes. Grids narrower than two
    columns get no heroes.
    """
    shuffled = rng.shuffle(range(len(items)))
    n_heroes = hero_count_for(len(items), config.hero_ratio)
    if config.cols < 2 or n_heroes == 0:  # noqa: PLR2004
        return {}

    hero_set = set(shuffled[:n_heroes])
    lo, hi = hero_span_bounds(config)
    return {
        index: hero_spec_for(item, config, lo + rng.randrange(hi - lo + 1))
        for index, item in enumerate(items)
        if index in hero_set
    }


def hero_spec_for(
    item: QuiltItem,
    config: PlannerConfig,
    cols: int,
) -> HeroSpec:
    """Build the orientation-locked primary footprint for a hero."""
    orientation = item_orientation(
        item, config.portrait_threshold, config.landscape_threshold,
    )
    rows = base_hero_rows(item, orientation, config)
    cols, rows = enforce_orientation(
        orientation, cols, rows, config.hero_cols_cap, config.hero_rows_cap,
    )
    return HeroSpec(cols=cols, rows=rows, orientation=orientation)


def interleave(
    entries: Sequence[QueueEntry],
    rng: RandomSource,
) -> list[QueueEntry]:
    """
    Order entries so no two heroes are consecutive.

    While heroes outnumber normals plus one, a random hero is demoted.
    Both groups are shuffled and heroes are spread evenly across the
    ``len(normals) + 1`` gaps. Without heroes the order is kept.
    """
    heroes = [e for e in entries if e.is_hero]
    normals = [e for e in entries if not e.is_hero]
    if not heroes:
        return list(entries)

    while len(heroes) > len(normals) + 1:
        demoted = heroes.pop(rng.randrange(len(heroes)))
        normals.append(replace(demoted, hero=None, demoted=True))

    heroes = rng.shuffle(heroes)
    normals = rng.shuffle(normals)

    n_slots = len(normals) + 1
    slots: list[list[QueueEntry]] = [[] for _ in range(n_slots)]
    for i, entry in enumerate(heroes):
        slot = min((i * n_slots) // len(heroes), n_slots - 1)
        slots[slot].append(entry)

    out: list[QueueEntry] = []
    for slot, normal in zip(slots, normals, strict=False):
        out.extend(slot)
        out.append(normal)
    out.extend(slots[-1])
    return out
