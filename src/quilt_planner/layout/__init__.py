"""
Quilt layout engine split into classification, hero, placement and
upgrade modules.

The package re-exports the entry points callers need most so that
``from quilt_planner.layout import plan_quilt`` keeps working if the
modules move.
"""

from __future__ import annotations

from . import aspect, candidates, guarantee, heroes, planner, skyline
from .aspect import aspect_ratio, classify_orientation
from .candidates import hero_candidates, normal_candidates
from .guarantee import ensure_min_heroes
from .heroes import (
    HeroSpec,
    QueueEntry,
    enforce_orientation,
    interleave,
    select_heroes,
)
from .planner import plan_quilt, summarize_plan
from .skyline import PlacementEngine, Skyline

__all__ = [
    "HeroSpec",
    "PlacementEngine",
    "QueueEntry",
    "Skyline",
    "aspect",
    "aspect_ratio",
    "candidates",
    "classify_orientation",
    "enforce_orientation",
    "ensure_min_heroes",
    "guarantee",
    "hero_candidates",
    "heroes",
    "interleave",
    "normal_candidates",
    "plan_quilt",
    "planner",
    "select_heroes",
    "skyline",
    "summarize_plan",
]
