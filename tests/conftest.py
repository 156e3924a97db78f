"""
Test configuration and shared fixtures for quilt_planner.

This module defines reusable pytest fixtures for building items and
configurations and a checker that asserts the structural guarantees of
a plan. These fixtures support all test modules in the test suite.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest
from PIL import Image

from quilt_planner.config import PlannerConfig
from quilt_planner.layout.aspect import item_orientation
from quilt_planner.logging_utils import logger
from quilt_planner.type_defs import Plan, QuiltItem

# (width, height) pairs covering every orientation band
MIXED_SIZES: list[tuple[int, int]] = [
    (1600, 900), (900, 1600), (1000, 1000), (2000, 500), (400, 1600),
    (1200, 800), (800, 1200), (1024, 1024), (3000, 1000), (600, 900),
    (1920, 1080), (1080, 1350), (500, 500), (1500, 1000), (700, 1400),
    (1280, 720), (640, 960), (2048, 1536), (1536, 2048), (1000, 1100),
]


@pytest.fixture
def make_items() -> Callable[..., list[QuiltItem]]:
    """Factory for items from ``(width, height)`` pairs."""

    def _build(sizes: Sequence[tuple[float | None, float | None]],
               **extra: Any) -> list[QuiltItem]:
        return [
            QuiltItem(src=f"img-{i}.jpg", width=w, height=h, **extra)
            for i, (w, h) in enumerate(sizes)
        ]

    return _build


@pytest.fixture
def mixed_items(make_items: Callable[..., list[QuiltItem]]) -> list[QuiltItem]:
    """Twenty items spanning portrait, landscape and square images."""
    return make_items(MIXED_SIZES)


@pytest.fixture
def make_config() -> Callable[..., PlannerConfig]:
    """Build seeded PlannerConfig instances with optional overrides."""

    def _build(**overrides: Any) -> PlannerConfig:
        data: dict[str, Any] = {"seed": 1234}
        data.update(overrides)
        return PlannerConfig(**data)

    return _build


def check_plan(
    plan: Plan,
    items: Sequence[QuiltItem],
    config: PlannerConfig,
) -> None:
    """Assert every structural guarantee of a plan."""
    n_cols = config.cols

    # completeness
    assert len(plan) == len(items)
    assert sorted(p.item_index for p in plan) == list(range(len(items)))

    for p in plan:
        # span caps
        col_cap = config.hero_cols_cap if p.is_hero else config.normal_cols_cap
        row_cap = config.hero_rows_cap if p.is_hero else config.normal_rows_cap
        assert 1 <= p.cols <= col_cap
        assert 1 <= p.rows <= row_cap
        assert 0 <= p.x
        assert p.x_end <= n_cols
        assert p.y >= 0

        # hero orientation lock
        if p.is_hero:
            orient = item_orientation(
                items[p.item_index],
                config.portrait_threshold,
                config.landscape_threshold,
            )
            if orient == "portrait":
                assert p.rows >= p.cols
            else:
                assert p.rows <= p.cols

    # no overlap and gap-free columns
    for col in range(n_cols):
        spans = sorted((p.y, p.y_end) for p in plan if p.x <= col < p.x_end)
        cursor = 0
        for start, end in spans:
            assert start == cursor, f"gap or overlap in column {col}"
            cursor = end

    # no adjacent heroes
    for a, b in zip(plan, plan[1:], strict=False):
        assert not (a.is_hero and b.is_hero)


@pytest.fixture
def assert_valid_plan() -> Callable[
        [Plan, Sequence[QuiltItem], PlannerConfig], None]:
    """Expose :func:`check_plan` to tests."""
    return check_plan


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    """Directory with three small images and one non-image file."""
    folder = tmp_path / "images"
    folder.mkdir()
    Image.new("RGB", (200, 100), color="red").save(folder / "b_wide.png")
    Image.new("RGB", (100, 200), color="blue").save(folder / "a_tall.jpg")
    Image.new("RGB", (64, 64), color="green").save(folder / "c_square.png")
    (folder / "notes.txt").write_text("not an image", encoding="utf-8")
    return folder


@pytest.fixture(autouse=True)
def enable_logger_propagation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable propagation for the planner logger to allow caplog to work."""
    monkeypatch.setattr(logger, "propagate", True)
