"""
Gallery view export shared by the CLI and tests.

Turns a plan into view tiles a grid renderer can consume directly: the
item fields plus the two grid spans, the grid position and
sized ``src``/``srcset`` URLs. Tiles can be written as JSON.
"""

from __future__ import annotations

import json
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from quilt_planner.config_defaults import DEFAULT_ROW_HEIGHT
from quilt_planner.constants import SRC_URL_PARAMS, SRCSET_DENSITY
from quilt_planner.logging_utils import logger

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from quilt_planner.type_defs import Plan, QuiltItem


@dataclass(slots=True)
class ViewTile:
    """One tile ready for rendering."""

    item_index: int
    src: str
    title: str
    alt: str
    rows: int
    cols: int
    x: int
    y: int
    is_hero: bool
    sized_src: str
    srcset: str


@dataclass(slots=True)
class ExportOptions:
    """Output options for :func:`export_plan`."""

    out_path: Path | None = None
    row_height: int = DEFAULT_ROW_HEIGHT
    indent: int | None = 2


def positive_int(text: str) -> int:
    """Argparse-style validator that enforces a strictly positive integer."""
    try:
        value = int(text)
    except ValueError as exc:
        msg = "must be an integer"
        raise ValueError(msg) from exc
    if value <= 0:
        msg = "must be positive"
        raise ValueError(msg)
    return value


def unit_float(text: str) -> float:
    """Argparse-style validator for a float in [0, 1]."""
    try:
        value = float(text)
    except ValueError as exc:
        msg = "must be a number"
        raise ValueError(msg) from exc
    if not 0.0 <= value <= 1.0:
        msg = "must be between 0 and 1"
        raise ValueError(msg)
    return value


def _sized(url: str, width: int, height: int) -> str:
    sep = "&" if "?" in url else "?"
    return f"{url}{sep}w={width}&h={height}&{SRC_URL_PARAMS}"


def src_url(url: str, base: float, rows: int = 1, cols: int = 1) -> str:
    """Return ``url`` with a crop size matching the tile span."""
    return _sized(url, round(base * cols), round(base * rows))


def srcset(url: str, base: float, rows: int = 1, cols: int = 1) -> str:
    """Return a 1x/2x ``srcset`` for the tile span."""
    w = round(base * cols)
    h = round(base * rows)
    dense = _sized(url, w * SRCSET_DENSITY, h * SRCSET_DENSITY)
    return f"{_sized(url, w, h)}, {dense} {SRCSET_DENSITY}x"


def build_view(
    plan: Plan,
    items: Sequence[QuiltItem],
    *,
    row_height: int = DEFAULT_ROW_HEIGHT,
) -> list[ViewTile]:
    """Combine plan placements with their items, in plan order."""
    tiles: list[ViewTile] = []
    for p in plan:
        item = items[p.item_index]
        tiles.append(ViewTile(
            item_index=p.item_index,
            src=item.src,
            title=item.title or "",
            alt=item.alt or item.title or "",
            rows=p.rows,
            cols=p.cols,
            x=p.x,
            y=p.y,
            is_hero=p.is_hero,
            sized_src=src_url(item.src, row_height, p.rows, p.cols),
            srcset=srcset(item.src, row_height, p.rows, p.cols),
        ))
    return tiles


def view_document(
    plan: Plan,
    items: Sequence[QuiltItem],
    *,
    row_height: int = DEFAULT_ROW_HEIGHT,
) -> dict[str, Any]:
    """Return the JSON-ready document for a plan."""
    return {
        "num_cols": plan.num_cols,
        "row_height": row_height,
        "grid_rows": plan.height,
        "hero_count": plan.hero_count,
        "heroes_shortfall": plan.heroes_shortfall,
        "tiles": [
            asdict(t) for t in build_view(plan, items, row_height=row_height)
        ],
    }


def export_plan(
    plan: Plan,
    items: Sequence[QuiltItem],
    options: ExportOptions,
) -> Path | None:
    """
    Write the view document to ``options.out_path`` or stdout.

    Returns the written path, or None when printing to stdout.
    """
    doc = view_document(plan, items, row_height=options.row_height)
    text = json.dumps(doc, indent=options.indent)

    if options.out_path is None:
        sys.stdout.write(text + "\n")
        return None

    out_path = Path(options.out_path)
    if out_path.suffix.lower() != ".json":
        out_path = out_path.with_suffix(".json")
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text + "\n", encoding="utf-8")
    logger.info("Plan saved to: %s", out_path)
    return out_path


__all__ = [
    "ExportOptions",
    "ViewTile",
    "build_view",
    "export_plan",
    "positive_int",
    "src_url",
    "srcset",
    "unit_float",
    "view_document",
]
