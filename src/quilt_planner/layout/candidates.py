"""
Footprint candidates for a single item.

Candidates are proposals only; the placement engine scores them and
shrinks any that do not fit the current skyline.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from quilt_planner.constants import MIN_ASPECT, ROW_NORMAL_MAX_ROWS
from quilt_planner.layout.heroes import (
    enforce_orientation,
    hero_span_bounds,
    round_half_up,
)
from quilt_planner.type_defs import Candidate

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

    from quilt_planner.config import PlannerConfig
    from quilt_planner.layout.heroes import HeroSpec
    from quilt_planner.type_defs import QuiltItem


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def _whole(value: float | None) -> int:
    """Round an explicit span to a grid count; unusable values give 1."""
    if not value or not math.isfinite(value):
        return 1
    return round_half_up(value)


def _unique(candidates: Iterable[Candidate]) -> list[Candidate]:
    """Drop repeated footprints, keeping first occurrence order."""
    seen: set[Candidate] = set()
    out: list[Candidate] = []
    for cand in candidates:
        if cand not in seen:
            seen.add(cand)
            out.append(cand)
    return out


def normal_candidates(  # noqa: PLR0913
    item: QuiltItem,
    aspect: float,
    width_limit: int,
    config: PlannerConfig,
    *,
    multi_row: bool = False,
    demoted: bool = False,
) -> list[Candidate]:
    """
    Propose footprints for a normal tile.

    Explicit spans win when honoured. Otherwise the width follows the
    rounded aspect ratio within ``width_limit``, with a one column
    narrower fallback. ``multi_row`` adds two-row variants for the row
    strategy. Demoted heroes are always 1x1.
    """
    if demoted:
        return [Candidate(rows=1, cols=1)]

    col_cap = max(1, min(width_limit, config.normal_cols_cap))
    row_cap = config.normal_rows_cap

    if config.respect_explicit_spans and item.has_explicit_spans:
        return [Candidate(
            rows=_clamp(_whole(item.explicit_rows), 1, row_cap),
            cols=_clamp(_whole(item.explicit_cols), 1, col_cap),
        )]

    cols = _clamp(round_half_up(aspect), 1, col_cap)
    out = [Candidate(rows=1, cols=cols)]
    if cols > 1:
        out.append(Candidate(rows=1, cols=cols - 1))

    if multi_row:
        for rows in range(2, min(ROW_NORMAL_MAX_ROWS, row_cap) + 1):
            wide = _clamp(round_half_up(aspect * rows), 1, col_cap)
            out.append(Candidate(rows=rows, cols=wide))
    return _unique(out)


def shrink_hero(
    spec: HeroSpec,
    cols: int,
    rows: int,
    config: PlannerConfig,
) -> tuple[int, int]:
    """Re-lock a hero footprint after its width changed."""
    return enforce_orientation(
        spec.orientation, cols, rows,
        config.hero_cols_cap, config.hero_rows_cap,
    )


def hero_candidates(
    spec: HeroSpec,
    aspect: float,
    width_limit: int,
    config: PlannerConfig,
) -> list[Candidate]:
    """
    Propose footprints for a hero tile.

    The primary footprint comes first, narrowed to ``width_limit`` when
    needed. A sweep from the largest hero span down to the smallest
    follows; every proposal keeps the orientation lock and covers more
    than one cell.
    """
    col_max = max(1, min(config.hero_cols_cap, width_limit))
    row_max = config.hero_rows_cap
    lo, _ = hero_span_bounds(config)
    col_min = min(lo, col_max)
    safe = max(aspect, MIN_ASPECT)

    cols, rows = shrink_hero(spec, min(spec.cols, col_max), spec.rows, config)
    out = [Candidate(rows=rows, cols=cols, is_hero=True)]

    sweep: list[tuple[int, int]] = []
    if spec.orientation == "landscape":
        for r in range(row_max, 0, -1):
            sweep.append((_clamp(round_half_up(safe * r), col_min, col_max), r))
    elif spec.orientation == "portrait":
        for c in range(col_max, col_min - 1, -1):
            sweep.append((c, max(1, round_half_up(c / safe))))
    else:
        for s in range(min(col_max, row_max), col_min - 1, -1):
            sweep.append((s, s))

    for c, r in sweep:
        c, r = shrink_hero(spec, c, r, config)
        if c <= col_max and c * r > 1:
            out.append(Candidate(rows=r, cols=c, is_hero=True))
    return _unique(out)
