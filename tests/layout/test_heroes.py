"""Tests for hero selection, orientation locking and interleaving."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from quilt_planner.config import PlannerConfig
from quilt_planner.layout import heroes
from quilt_planner.layout.heroes import HeroSpec, QueueEntry
from quilt_planner.random_utils import SeededRandom
from quilt_planner.type_defs import Orientation, QuiltItem


class TestEnforceOrientation:
    @pytest.mark.parametrize(
        ("orientation", "cols", "rows", "caps", "expected"),
        [
            ("portrait", 3, 2, (3, 4), (3, 3)),
            ("portrait", 3, 2, (3, 2), (2, 2)),
            ("portrait", 1, 3, (4, 4), (1, 3)),
            ("landscape", 2, 3, (4, 4), (2, 2)),
            ("landscape", 9, 9, (3, 4), (3, 3)),
            ("square", 3, 3, (4, 4), (3, 3)),
            ("square", 2, 4, (4, 4), (2, 2)),
            ("landscape", 0, 0, (4, 4), (1, 1)),
        ],
    )
    def test_lock_and_caps(
        self,
        orientation: Orientation,
        cols: int,
        rows: int,
        caps: tuple[int, int],
        expected: tuple[int, int],
    ) -> None:
        """Footprints are clamped to caps and keep their orientation."""
        assert heroes.enforce_orientation(
            orientation, cols, rows, *caps,
        ) == expected

    def test_orientation_ok(self) -> None:
        """Portrait needs rows >= cols, the rest rows <= cols."""
        assert heroes.orientation_ok("portrait", 2, 3)
        assert not heroes.orientation_ok("portrait", 3, 2)
        assert heroes.orientation_ok("landscape", 3, 2)
        assert not heroes.orientation_ok("square", 1, 2)


@pytest.mark.parametrize(
    ("n_items", "ratio", "expected"),
    [(10, 0.25, 3), (5, 0.5, 3), (4, 0.0, 0), (4, 1.0, 4), (0, 0.5, 0)],
)
def test_hero_count_rounds_half_up(
    n_items: int,
    ratio: float,
    expected: int,
) -> None:
    """Hero counts round halves up and stay within [0, N]."""
    assert heroes.hero_count_for(n_items, ratio) == expected


class TestSelectHeroes:
    def test_count_follows_ratio(
        self,
        mixed_items: list[QuiltItem],
        make_config: Callable[..., PlannerConfig],
    ) -> None:
        """round(N * ratio) items are promoted."""
        cfg = make_config(hero_ratio=0.25)
        specs = heroes.select_heroes(mixed_items, cfg, SeededRandom(7))
        assert len(specs) == 5  # noqa: PLR2004
        assert all(0 <= i < len(mixed_items) for i in specs)

    def test_specs_respect_bounds_and_lock(
        self,
        mixed_items: list[QuiltItem],
        make_config: Callable[..., PlannerConfig],
    ) -> None:
        """Every primary footprint respects caps and orientation."""
        cfg = make_config(hero_ratio=1.0, num_cols=6)
        specs = heroes.select_heroes(mixed_items, cfg, SeededRandom(3))
        assert len(specs) == len(mixed_items)
        for spec in specs.values():
            assert 1 <= spec.cols <= cfg.hero_cols_cap
            assert 1 <= spec.rows <= cfg.hero_rows_cap
            assert heroes.orientation_ok(spec.orientation, spec.cols,
                                         spec.rows)

    def test_no_heroes_on_single_column(
        self,
        mixed_items: list[QuiltItem],
        make_config: Callable[..., PlannerConfig],
    ) -> None:
        """A one-column grid never promotes heroes."""
        cfg = make_config(hero_ratio=1.0, num_cols=1)
        assert heroes.select_heroes(mixed_items, cfg, SeededRandom(3)) == {}

    def test_same_seed_same_selection(
        self,
        mixed_items: list[QuiltItem],
        make_config: Callable[..., PlannerConfig],
    ) -> None:
        """Selection is reproducible for one seed."""
        cfg = make_config(hero_ratio=0.4)
        first = heroes.select_heroes(mixed_items, cfg, SeededRandom(21))
        second = heroes.select_heroes(mixed_items, cfg, SeededRandom(21))
        assert first == second

    def test_extreme_portrait_gets_extra_row(
        self,
        make_config: Callable[..., PlannerConfig],
    ) -> None:
        """Very tall images start one row above the portrait base."""
        cfg = make_config(max_rows_per_item=6, hero_rows_max=6)
        tall = QuiltItem(src="tall.jpg", width=400, height=1600)
        mild = QuiltItem(src="mild.jpg", width=1000, height=1300)
        assert heroes.base_hero_rows(tall, "portrait", cfg) == 4  # noqa: PLR2004
        assert heroes.base_hero_rows(mild, "portrait", cfg) == 3  # noqa: PLR2004

    def test_hero_span_bounds_clamped_to_grid(
        self,
        make_config: Callable[..., PlannerConfig],
    ) -> None:
        """Hero span range never exceeds the grid."""
        assert heroes.hero_span_bounds(make_config(num_cols=2)) == (2, 2)
        assert heroes.hero_span_bounds(make_config(num_cols=8)) == (2, 3)


def _spec() -> HeroSpec:
    return HeroSpec(cols=2, rows=2, orientation="square")


class TestInterleave:
    def test_no_heroes_keeps_order(self) -> None:
        """Without heroes the queue order is untouched."""
        entries = [QueueEntry(i) for i in range(6)]
        assert heroes.interleave(entries, SeededRandom(1)) == entries

    def test_heroes_never_adjacent(self) -> None:
        """Heroes are separated by at least one normal."""
        entries = [QueueEntry(i, _spec() if i < 4 else None)
                   for i in range(10)]
        out = heroes.interleave(entries, SeededRandom(5))
        assert sorted(e.item_index for e in out) == list(range(10))
        for a, b in zip(out, out[1:], strict=False):
            assert not (a.is_hero and b.is_hero)

    def test_excess_heroes_are_demoted(self) -> None:
        """Heroes beyond normals + 1 become demoted normals."""
        entries = [QueueEntry(i, _spec() if i < 5 else None)
                   for i in range(6)]
        out = heroes.interleave(entries, SeededRandom(8))
        hero_entries = [e for e in out if e.is_hero]
        demoted = [e for e in out if e.demoted]
        assert len(out) == 6  # noqa: PLR2004
        assert len(hero_entries) == 3  # noqa: PLR2004
        assert len(demoted) == 2  # noqa: PLR2004
        assert all(e.hero is None for e in demoted)
        for a, b in zip(out, out[1:], strict=False):
            assert not (a.is_hero and b.is_hero)

    def test_single_hero_single_slot(self) -> None:
        """One hero and no normals is returned as is."""
        entries = [QueueEntry(0, _spec())]
        assert heroes.interleave(entries, SeededRandom(1)) == entries
