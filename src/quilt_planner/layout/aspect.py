"""Aspect ratio helpers and orientation classification."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from quilt_planner.constants import (
    MAX_ASPECT,
    MIN_ASPECT,
    SQUARE_ASPECT_TOLERANCE,
)

if TYPE_CHECKING:  # pragma: no cover
    from quilt_planner.type_defs import Orientation, QuiltItem


def _ratio(num: float | None, den: float | None) -> float:
    """
    Return num / den clamped into ``[MIN_ASPECT, MAX_ASPECT]``.

    Missing, non-positive, NaN or infinite sides give 1.0.
    """
    if num is None or den is None:
        return 1.0
    if not (math.isfinite(num) and math.isfinite(den)):
        return 1.0
    if num <= 0 or den <= 0:
        return 1.0
    # finite sides can still over- or underflow
    ratio = float(num) / float(den)
    if not math.isfinite(ratio):
        return MAX_ASPECT
    return min(MAX_ASPECT, max(MIN_ASPECT, ratio))


def aspect_ratio(width: float | None, height: float | None) -> float:
    """Return width / height, or 1.0 when either side is unknown."""
    return _ratio(width, height)


def height_ratio(width: float | None, height: float | None) -> float:
    """Return height / width, or 1.0 when either side is unknown."""
    return _ratio(height, width)


def classify_orientation(
    width: float | None,
    height: float | None,
    portrait_threshold: float,
    landscape_threshold: float,
) -> Orientation:
    """
    Classify an image by its height / width ratio.

    Unknown dimensions count as ratio 1, which lands in ``"square"``
    for any sensible pair of thresholds. Never raises.
    """
    ratio = height_ratio(width, height)
    if ratio >= portrait_threshold:
        return "portrait"
    if ratio <= landscape_threshold:
        return "landscape"
    return "square"


def item_aspect(item: QuiltItem) -> float:
    """Return the width / height ratio of an item."""
    return aspect_ratio(item.width, item.height)


def item_orientation(
    item: QuiltItem,
    portrait_threshold: float,
    landscape_threshold: float,
) -> Orientation:
    """Classify an item with the given thresholds."""
    return classify_orientation(
        item.width, item.height, portrait_threshold, landscape_threshold,
    )


def leaning(aspect: float) -> Orientation:
    """
    Classify by the raw width / height ratio with a narrow square band.

    Used when growing committed tiles, where the configured thresholds
    are too coarse.
    """
    if abs(aspect - 1.0) < SQUARE_ASPECT_TOLERANCE:
        return "square"
    return "landscape" if aspect > 1.0 else "portrait"
