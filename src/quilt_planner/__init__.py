"""Public package exports for the quilt planner."""

from __future__ import annotations

from .config import PlannerConfig, QuiltPlannerConfig
from .layout import plan_quilt
from .type_defs import Candidate, Placement, Plan, QuiltItem

__all__ = [
    "Candidate",
    "Placement",
    "Plan",
    "PlannerConfig",
    "QuiltItem",
    "QuiltPlannerConfig",
    "plan_quilt",
]
