"""
Item manifest loading.

Items come either from a JSON manifest or from a directory of image
files. Image sizes are read with Pillow, which only reads the file
header; pixels are never decoded.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from PIL import Image, UnidentifiedImageError

from quilt_planner.constants import IMAGE_SUFFIXES
from quilt_planner.logging_utils import logger
from quilt_planner.type_defs import QuiltItem

# Accepted manifest keys -> QuiltItem field
_KEY_ALIASES: dict[str, str] = {
    "src": "src",
    "width": "width",
    "height": "height",
    "title": "title",
    "alt": "alt",
    "rows": "explicit_rows",
    "cols": "explicit_cols",
    "explicit_rows": "explicit_rows",
    "explicit_cols": "explicit_cols",
    "explicitRows": "explicit_rows",
    "explicitCols": "explicit_cols",
}


def read_image_size(path: Path) -> tuple[int | None, int | None]:
    """Return ``(width, height)`` of an image, or unknowns on failure."""
    try:
        with Image.open(path) as img:
            return img.size
    except (OSError, UnidentifiedImageError) as exc:
        logger.warning("Could not read image size for %s: %s", path, exc)
        return None, None


def _optional_number(value: Any, key: str) -> Any:
    if value is None or (
            isinstance(value, (int, float)) and not isinstance(value, bool)):
        return value
    msg = f"Manifest field '{key}' must be a number, got {value!r}"
    raise ValueError(msg)


def _optional_span(value: Any, key: str) -> int | None:
    """Accept whole-number spans; integral floats such as ``2.0`` pass."""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    msg = f"Manifest field '{key}' must be a whole number, got {value!r}"
    raise ValueError(msg)


def item_from_mapping(
    record: dict[str, Any],
    *,
    base_dir: Path | None = None,
) -> QuiltItem:
    """
    Build a ``QuiltItem`` from one manifest record.

    Missing sizes are read from disk when ``src`` names a local file
    relative to ``base_dir``.
    """
    if "src" not in record or not isinstance(record["src"], str):
        msg = f"Manifest item needs a string 'src': {record!r}"
        raise ValueError(msg)

    fields: dict[str, Any] = {}
    for key, value in record.items():
        name = _KEY_ALIASES.get(key)
        if name is None:
            continue
        if name in ("width", "height"):
            value = _optional_number(value, key)
        elif name in ("explicit_rows", "explicit_cols"):
            value = _optional_span(value, key)
        fields[name] = value

    if not fields.get("width") or not fields.get("height"):
        local = Path(fields["src"])
        if base_dir is not None and not local.is_absolute():
            local = base_dir / local
        if local.is_file():
            fields["width"], fields["height"] = read_image_size(local)

    return QuiltItem(**fields)


def load_manifest(path: Path) -> list[QuiltItem]:
    """
    Read items from a JSON manifest.

    Accepts a list of item objects or an object with an ``items`` list.
    """
    if not path.is_file():
        msg = f"Manifest not found: {path}"
        raise FileNotFoundError(msg)

    with path.open("r", encoding="utf-8") as f:
        doc = json.load(f)

    records = doc.get("items") if isinstance(doc, dict) else doc
    if not isinstance(records, list):
        msg = "Manifest must be a list of items or contain an 'items' list"
        raise ValueError(msg)

    items: list[QuiltItem] = []
    for rec in records:
        if not isinstance(rec, dict):
            msg = f"Manifest items must be objects, got {rec!r}"
            raise ValueError(msg)
        items.append(item_from_mapping(rec, base_dir=path.parent))
    return items


def scan_directory(directory: Path) -> list[QuiltItem]:
    """Build items for every image file in ``directory``, sorted by name."""
    if not directory.is_dir():
        msg = f"Image directory not found: {directory}"
        raise FileNotFoundError(msg)

    items: list[QuiltItem] = []
    for path in sorted(directory.iterdir()):
        if path.suffix.lower() not in IMAGE_SUFFIXES:
            continue
        width, height = read_image_size(path)
        items.append(QuiltItem(
            src=path.name, width=width, height=height, title=path.stem,
        ))
    return items


def load_items(source: Path) -> list[QuiltItem]:
    """Load items from a manifest file or an image directory."""
    if source.is_dir():
        return scan_directory(source)
    return load_manifest(source)
