"""
Configuration schema and loader for the quilt planner.

Defines Pydantic models for the structured configuration sections, the
flat ``PlannerConfig`` value object consumed by the layout engine, and
a TOML-based config loader with validation support.
"""

from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel, ConfigDict, Field

from quilt_planner.config_defaults import (
    DEFAULT_ALLOW_REORDER,
    DEFAULT_BASE_ROWS_LANDSCAPE,
    DEFAULT_BASE_ROWS_PORTRAIT,
    DEFAULT_BASE_ROWS_SQUARE,
    DEFAULT_FORCE_HERO_ON_FIRST_ROW,
    DEFAULT_HERO_COLS_MAX,
    DEFAULT_HERO_MAX_COLS,
    DEFAULT_HERO_MIN_COLS,
    DEFAULT_HERO_RATIO,
    DEFAULT_HERO_ROWS_MAX,
    DEFAULT_HIGHLIGHT_PROB,
    DEFAULT_LANDSCAPE_THRESHOLD,
    DEFAULT_LOOKAHEAD,
    DEFAULT_MAX_COLS_PER_ITEM,
    DEFAULT_MAX_HIGHLIGHTS_PER_ROW,
    DEFAULT_MAX_ROWS_PER_ITEM,
    DEFAULT_MIN_TOTAL_HEROES,
    DEFAULT_NUM_COLS,
    DEFAULT_PORTRAIT_THRESHOLD,
    DEFAULT_RESPECT_EXPLICIT_SPANS,
    DEFAULT_ROW_HEIGHT,
    DEFAULT_SEED,
    DEFAULT_STRATEGY,
)
from quilt_planner.constants import LOOKAHEAD_MAX
from quilt_planner.type_defs import PackingStrategy


class PlannerConfig(BaseModel):
    """
    Flat, immutable settings for one planning pass.

    ``num_cols`` is unconstrained; the engine clamps values
    below one instead of rejecting them.
    """

    model_config = ConfigDict(frozen=True)

    num_cols: int = DEFAULT_NUM_COLS
    max_cols_per_item: int = Field(DEFAULT_MAX_COLS_PER_ITEM, ge=1)
    max_rows_per_item: int = Field(DEFAULT_MAX_ROWS_PER_ITEM, ge=1)
    strategy: PackingStrategy = DEFAULT_STRATEGY
    lookahead: int = Field(DEFAULT_LOOKAHEAD, ge=0, le=LOOKAHEAD_MAX)
    respect_explicit_spans: bool = DEFAULT_RESPECT_EXPLICIT_SPANS
    allow_reorder: bool = DEFAULT_ALLOW_REORDER
    hero_ratio: float = Field(DEFAULT_HERO_RATIO, ge=0.0, le=1.0)
    hero_min_cols: int = Field(DEFAULT_HERO_MIN_COLS, ge=1)
    hero_max_cols: int = Field(DEFAULT_HERO_MAX_COLS, ge=1)
    hero_rows_max: int = Field(DEFAULT_HERO_ROWS_MAX, ge=1)
    hero_cols_max: int = Field(DEFAULT_HERO_COLS_MAX, ge=1)
    highlight_prob: float = Field(DEFAULT_HIGHLIGHT_PROB, ge=0.0, le=1.0)
    max_highlights_per_row: int = Field(DEFAULT_MAX_HIGHLIGHTS_PER_ROW, ge=0)
    min_total_heroes: int = Field(DEFAULT_MIN_TOTAL_HEROES, ge=0)
    force_hero_on_first_row: bool = DEFAULT_FORCE_HERO_ON_FIRST_ROW
    portrait_threshold: float = Field(DEFAULT_PORTRAIT_THRESHOLD, gt=0)
    landscape_threshold: float = Field(DEFAULT_LANDSCAPE_THRESHOLD, gt=0)
    base_rows_portrait: int = Field(DEFAULT_BASE_ROWS_PORTRAIT, ge=1)
    base_rows_landscape: int = Field(DEFAULT_BASE_ROWS_LANDSCAPE, ge=1)
    base_rows_square: int = Field(DEFAULT_BASE_ROWS_SQUARE, ge=1)
    seed: int | None = Field(DEFAULT_SEED, ge=0)

    @property
    def cols(self) -> int:
        """Grid width clamped to at least one column."""
        return max(1, self.num_cols)

    @property
    def normal_cols_cap(self) -> int:
        """Widest span allowed for a normal tile."""
        return max(1, min(self.cols, self.max_cols_per_item))

    @property
    def normal_rows_cap(self) -> int:
        """Tallest span allowed for a normal tile."""
        return max(1, self.max_rows_per_item)

    @property
    def hero_cols_cap(self) -> int:
        """Widest span allowed for a hero tile."""
        return max(1, min(self.normal_cols_cap, self.hero_cols_max))

    @property
    def hero_rows_cap(self) -> int:
        """Tallest span allowed for a hero tile."""
        return max(1, min(self.normal_rows_cap, self.hero_rows_max))

    @property
    def window(self) -> int:
        """Items considered per placement step."""
        if not self.allow_reorder:
            return 1
        return max(1, self.lookahead)


class GridConfig(BaseModel):
    """Grid width and per-tile span caps."""

    num_cols: int = Field(DEFAULT_NUM_COLS, ge=1)
    row_height: int = Field(DEFAULT_ROW_HEIGHT, ge=1)
    max_cols_per_item: int = Field(DEFAULT_MAX_COLS_PER_ITEM, ge=1)
    max_rows_per_item: int = Field(DEFAULT_MAX_ROWS_PER_ITEM, ge=1)


class PackingConfig(BaseModel):
    """Placement policy, lookahead and reproducibility settings."""

    strategy: PackingStrategy = Field(DEFAULT_STRATEGY)
    lookahead: int = Field(DEFAULT_LOOKAHEAD, ge=0, le=LOOKAHEAD_MAX)
    respect_explicit_spans: bool = DEFAULT_RESPECT_EXPLICIT_SPANS
    allow_reorder: bool = DEFAULT_ALLOW_REORDER
    seed: int | None = Field(DEFAULT_SEED, ge=0)


class HeroConfig(BaseModel):
    """Hero promotion and span limits."""

    ratio: float = Field(DEFAULT_HERO_RATIO, ge=0.0, le=1.0)
    min_cols: int = Field(DEFAULT_HERO_MIN_COLS, ge=1)
    max_cols: int = Field(DEFAULT_HERO_MAX_COLS, ge=1)
    rows_max: int = Field(DEFAULT_HERO_ROWS_MAX, ge=1)
    cols_max: int = Field(DEFAULT_HERO_COLS_MAX, ge=1)
    highlight_prob: float = Field(DEFAULT_HIGHLIGHT_PROB, ge=0.0, le=1.0)
    max_per_row: int = Field(DEFAULT_MAX_HIGHLIGHTS_PER_ROW, ge=0)
    min_total: int = Field(DEFAULT_MIN_TOTAL_HEROES, ge=0)
    force_on_first_row: bool = DEFAULT_FORCE_HERO_ON_FIRST_ROW


class OrientationConfig(BaseModel):
    """Aspect thresholds and base hero rows per orientation."""

    portrait_threshold: float = Field(DEFAULT_PORTRAIT_THRESHOLD, gt=0)
    landscape_threshold: float = Field(DEFAULT_LANDSCAPE_THRESHOLD, gt=0)
    base_rows_portrait: int = Field(DEFAULT_BASE_ROWS_PORTRAIT, ge=1)
    base_rows_landscape: int = Field(DEFAULT_BASE_ROWS_LANDSCAPE, ge=1)
    base_rows_square: int = Field(DEFAULT_BASE_ROWS_SQUARE, ge=1)


class QuiltPlannerConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of config.toml, grouping related parameters
    under logical categories.
    """

    grid: GridConfig = Field(
        default_factory=lambda: GridConfig.model_validate({}),
    )
    packing: PackingConfig = Field(
        default_factory=lambda: PackingConfig.model_validate({}),
    )
    hero: HeroConfig = Field(
        default_factory=lambda: HeroConfig.model_validate({}),
    )
    orientation: OrientationConfig = Field(
        default_factory=lambda: OrientationConfig.model_validate({}),
    )

    def planner(self) -> PlannerConfig:
        """Flatten the sections into the engine's value object."""
        return PlannerConfig(
            num_cols=self.grid.num_cols,
            max_cols_per_item=self.grid.max_cols_per_item,
            max_rows_per_item=self.grid.max_rows_per_item,
            strategy=self.packing.strategy,
            lookahead=self.packing.lookahead,
            respect_explicit_spans=self.packing.respect_explicit_spans,
            allow_reorder=self.packing.allow_reorder,
            seed=self.packing.seed,
            hero_ratio=self.hero.ratio,
            hero_min_cols=self.hero.min_cols,
            hero_max_cols=self.hero.max_cols,
            hero_rows_max=self.hero.rows_max,
            hero_cols_max=self.hero.cols_max,
            highlight_prob=self.hero.highlight_prob,
            max_highlights_per_row=self.hero.max_per_row,
            min_total_heroes=self.hero.min_total,
            force_hero_on_first_row=self.hero.force_on_first_row,
            portrait_threshold=self.orientation.portrait_threshold,
            landscape_threshold=self.orientation.landscape_threshold,
            base_rows_portrait=self.orientation.base_rows_portrait,
            base_rows_landscape=self.orientation.base_rows_landscape,
            base_rows_square=self.orientation.base_rows_square,
        )


# CLI destination name -> (section, field)
_CLI_OVERRIDES: dict[str, tuple[str, str]] = {
    "cols": ("grid", "num_cols"),
    "row_height": ("grid", "row_height"),
    "max_cols_per_item": ("grid", "max_cols_per_item"),
    "max_rows_per_item": ("grid", "max_rows_per_item"),
    "strategy": ("packing", "strategy"),
    "lookahead": ("packing", "lookahead"),
    "seed": ("packing", "seed"),
    "hero_ratio": ("hero", "ratio"),
    "hero_min_cols": ("hero", "min_cols"),
    "hero_max_cols": ("hero", "max_cols"),
    "hero_rows_max": ("hero", "rows_max"),
    "hero_cols_max": ("hero", "cols_max"),
    "highlight_prob": ("hero", "highlight_prob"),
    "max_highlights_per_row": ("hero", "max_per_row"),
    "min_heroes": ("hero", "min_total"),
    "portrait_threshold": ("orientation", "portrait_threshold"),
    "landscape_threshold": ("orientation", "landscape_threshold"),
}

# Store-true CLI flags -> (section, field, value when set)
_CLI_FLAGS: dict[str, tuple[str, str, bool]] = {
    "no_reorder": ("packing", "allow_reorder", False),
    "ignore_explicit_spans": ("packing", "respect_explicit_spans", False),
    "force_hero_on_first_row": ("hero", "force_on_first_row", True),
}


def build_config_from_cli(
    args: dict[str, Any],
    base_config: QuiltPlannerConfig | None = None,
) -> QuiltPlannerConfig:
    """
    Merge CLI arguments on top of a base configuration.

    Only keys present in ``args`` with a non-None value override the
    base; the merged document is re-validated so CLI values obey the
    same constraints as config files.
    """
    base = base_config or QuiltPlannerConfig.model_validate({})
    doc = base.model_dump()

    for key, (section, name) in _CLI_OVERRIDES.items():
        value = args.get(key)
        if value is not None:
            doc[section][name] = value

    for key, (section, name, flag_value) in _CLI_FLAGS.items():
        if args.get(key):
            doc[section][name] = flag_value

    return QuiltPlannerConfig.model_validate(doc)


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str) -> QuiltPlannerConfig:
        """
        Load a planner configuration from a TOML file.

        Returns a validated QuiltPlannerConfig instance based on the file
        contents.
        """
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return QuiltPlannerConfig.model_validate(doc.unwrap())
