"""
Skyline placement engine.

The skyline holds, per column, the next free grid row. Tiles are only
committed onto level slots (every covered column at the same height),
so a column's occupied rows always form one contiguous run from row 0.
Each step evaluates a lookahead window of queued items, scores every
(item, candidate) pair and commits the best one, so every step places
exactly one item and the loop cannot stall.

Two policies share the engine:

- ``"skyline"``: the widest level run at the lowest tier bounds the
  candidates; heroes come pre-selected and pre-interleaved.
- ``"row"``: tiles fill the leftmost open run of the lowest tier, the
  per-tier hero cap applies and hero wishes are drawn per item.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from quilt_planner.constants import (
    HERO_SCORE_BONUS,
    SCORE_ASPECT_WEIGHT,
    SCORE_X_WEIGHT,
    SCORE_Y_WEIGHT,
)
from quilt_planner.layout.aspect import item_aspect
from quilt_planner.layout.candidates import (
    hero_candidates,
    normal_candidates,
    shrink_hero,
)
from quilt_planner.layout.heroes import (
    QueueEntry,
    hero_count_for,
    hero_span_bounds,
    hero_spec_for,
)
from quilt_planner.type_defs import Candidate, Placement

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from quilt_planner.config import PlannerConfig
    from quilt_planner.random_utils import RandomSource
    from quilt_planner.type_defs import QuiltItem


class Skyline:
    """Per-column height map for one planning pass."""

    def __init__(self, num_cols: int) -> None:
        self.heights = np.zeros(max(1, num_cols), dtype=np.int64)

    @property
    def num_cols(self) -> int:
        """Grid width."""
        return int(self.heights.size)

    def min_height(self) -> int:
        """Lowest column height."""
        return int(self.heights.min())

    def min_runs(self) -> list[tuple[int, int]]:
        """Return ``(start, length)`` of every run at the lowest height."""
        low = self.min_height()
        runs: list[tuple[int, int]] = []
        start = -1
        for col, height in enumerate(self.heights.tolist()):
            if height == low:
                if start < 0:
                    start = col
            elif start >= 0:
                runs.append((start, col - start))
                start = -1
        if start >= 0:
            runs.append((start, self.num_cols - start))
        return runs

    def widest_min_run(self) -> int:
        """Length of the longest run of columns at the lowest height."""
        return max(length for _, length in self.min_runs())

    def leftmost_min_run(self) -> int:
        """Length of the leftmost run of columns at the lowest height."""
        return self.min_runs()[0][1]

    def find_position(self, cols: int) -> tuple[int, int] | None:
        """
        Best-fit scan for a level slot ``cols`` wide.

        Returns ``(x, y)`` with minimum ``y``, ties broken by smallest
        ``x``, or None when no level slot of that width exists.
        """
        if cols < 1 or cols > self.num_cols:
            return None
        windows = sliding_window_view(self.heights, cols)
        tops = windows.max(axis=1)
        level = tops == windows.min(axis=1)
        if not level.any():
            return None
        masked = np.where(level, tops, np.iinfo(np.int64).max)
        x = int(np.argmin(masked))
        return x, int(tops[x])

    def place(self, x: int, cols: int, rows: int) -> None:
        """Raise columns ``[x, x + cols)`` by a tile ``rows`` tall."""
        top = int(self.heights[x:x + cols].max())
        self.heights[x:x + cols] = top + rows


@dataclass(frozen=True, slots=True)
class _Choice:
    """Best scored option within one step."""

    queue_pos: int
    rows: int
    cols: int
    x: int
    y: int
    is_hero: bool
    score: float


def score_candidate(
    cols: int,
    rows: int,
    aspect: float,
    x: int,
    y: int,
    *,
    is_hero: bool = False,
) -> float:
    """Aspect error dominates; ``y`` then ``x`` only break ties."""
    err = abs(cols / rows - aspect) - (HERO_SCORE_BONUS if is_hero else 0.0)
    return err * SCORE_ASPECT_WEIGHT + y * SCORE_Y_WEIGHT + x * SCORE_X_WEIGHT


class PlacementEngine:
    """
    Commits queued items onto a skyline, one per step.

    ``rng`` is only consulted by the row strategy, which draws one hero
    wish per item up front in item order.
    """

    def __init__(
        self,
        items: Sequence[QuiltItem],
        config: PlannerConfig,
        rng: RandomSource | None = None,
    ) -> None:
        self.items = items
        self.config = config
        self.skyline = Skyline(config.cols)
        self.aspects = [item_aspect(item) for item in items]
        self.placements: list[Placement] = []
        self._row_mode = config.strategy == "row"
        self._row_index = 0
        self._row_y = 0
        self._heroes_this_row = 0
        self._hero_budget = hero_count_for(len(items), config.hero_ratio)
        self._wishes: list[bool] = []
        if self._row_mode and rng is not None:
            self._wishes = [
                rng.random() < config.highlight_prob for _ in items
            ]

    @property
    def hero_count(self) -> int:
        """Heroes committed so far."""
        return sum(1 for p in self.placements if p.is_hero)

    def run(self, entries: Sequence[QueueEntry]) -> list[Placement]:
        """Place every entry and return placements in commit order."""
        queue = list(entries)
        while queue:
            self._advance_row()
            choice = self._choose(queue)
            entry = queue.pop(choice.queue_pos)
            self._commit(entry, choice)
        return self.placements

    def _advance_row(self) -> None:
        low = self.skyline.min_height()
        if low != self._row_y:
            self._row_y = low
            self._row_index += 1
            self._heroes_this_row = 0

    def _width_limit(self) -> int:
        if self._row_mode:
            run = self.skyline.leftmost_min_run()
        else:
            run = self.skyline.widest_min_run()
        return max(1, min(run, self.config.normal_cols_cap))

    def _heroes_allowed(self) -> bool:
        if self.placements and self.placements[-1].is_hero:
            return False
        if self.config.cols < 2:  # noqa: PLR2004
            return False
        if self._row_mode:
            return self._heroes_this_row < self.config.max_highlights_per_row
        return True

    def _wants_hero(self, entry: QueueEntry) -> bool:
        """Row strategy: hero wish, budget and first-row rule."""
        cfg = self.config
        if entry.demoted or not self._wishes:
            return False
        if (cfg.force_hero_on_first_row and self._row_index == 0
                and self.hero_count < cfg.min_total_heroes):
            return True
        return (self._wishes[entry.item_index]
                and self.hero_count < self._hero_budget)

    def _options(
        self,
        entry: QueueEntry,
        width_limit: int,
        *,
        heroes_allowed: bool,
        normal_in_window: bool,
    ) -> list[Candidate]:
        idx = entry.item_index
        item = self.items[idx]
        aspect = self.aspects[idx]

        if self._row_mode:
            out = normal_candidates(
                item, aspect, width_limit, self.config,
                multi_row=True, demoted=entry.demoted,
            )
            if heroes_allowed and self._wants_hero(entry):
                _, hi = hero_span_bounds(self.config)
                spec = hero_spec_for(item, self.config, hi)
                out += hero_candidates(spec, aspect, width_limit, self.config)
            return out

        if entry.hero is None:
            return normal_candidates(
                item, aspect, width_limit, self.config, demoted=entry.demoted,
            )
        if heroes_allowed:
            return hero_candidates(entry.hero, aspect, width_limit, self.config)
        if normal_in_window:
            return []
        # only heroes left to follow a hero: place this one as a 1x1
        return normal_candidates(
            item, aspect, width_limit, self.config, demoted=True,
        )

    def _fit(
        self,
        entry: QueueEntry,
        cand: Candidate,
    ) -> tuple[int, int, tuple[int, int]] | None:
        """Shrink ``cand`` one column at a time until it fits."""
        cols, rows = cand.cols, cand.rows
        while cols >= 1:
            pos = self.skyline.find_position(cols)
            if pos is not None:
                return cols, rows, pos
            cols -= 1
            if cols < 1:
                break
            if cand.is_hero and entry.hero is not None:
                cols, rows = shrink_hero(entry.hero, cols, rows, self.config)
            else:
                rows = min(rows, cols)
        return None

    def _choose(self, queue: list[QueueEntry]) -> _Choice:
        window = queue[:self.config.window]
        width_limit = self._width_limit()
        heroes_allowed = self._heroes_allowed()
        normal_in_window = any(not e.is_hero for e in window)

        best: _Choice | None = None
        for pos, entry in enumerate(window):
            aspect = self.aspects[entry.item_index]
            options = self._options(
                entry, width_limit,
                heroes_allowed=heroes_allowed,
                normal_in_window=normal_in_window,
            )
            for cand in options:
                fitted = self._fit(entry, cand)
                if fitted is None:
                    continue
                cols, rows, (x, y) = fitted
                score = score_candidate(
                    cols, rows, aspect, x, y, is_hero=cand.is_hero,
                )
                if best is None or score < best.score:
                    best = _Choice(pos, rows, cols, x, y, cand.is_hero, score)

        if best is None:
            # unreachable in practice: width 1 always has a level slot
            x, y = self.skyline.find_position(1) or (0, 0)
            best = _Choice(0, 1, 1, x, y, False, 0.0)
        return best

    def _commit(self, entry: QueueEntry, choice: _Choice) -> None:
        is_hero = choice.is_hero and choice.rows * choice.cols > 1
        self.skyline.place(choice.x, choice.cols, choice.rows)
        self.placements.append(Placement(
            item_index=entry.item_index,
            rows=choice.rows,
            cols=choice.cols,
            x=choice.x,
            y=choice.y,
            is_hero=is_hero,
            row_index=self._row_index,
        ))
        if is_hero:
            self._heroes_this_row += 1
