"""Public gallery export API re-exports."""

from __future__ import annotations

from .api import (
    ExportOptions,
    ViewTile,
    build_view,
    export_plan,
    positive_int,
    src_url,
    srcset,
    unit_float,
    view_document,
)

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
