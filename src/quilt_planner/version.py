"""Version lookup behind ``--version``."""

from __future__ import annotations

import tomllib
from importlib import metadata as importlib_metadata
from pathlib import Path

from quilt_planner.logging_utils import logger

DISTRIBUTION = "quilt-planner"
UNKNOWN_VERSION = "0.0.0"


def _installed_version() -> str | None:
    try:
        return importlib_metadata.version(DISTRIBUTION)
    except importlib_metadata.PackageNotFoundError:
        return None


def _source_tree_version() -> str | None:
    """Read ``project.version`` from the nearest enclosing pyproject.toml."""
    for parent in Path(__file__).resolve().parents:
        pyproject = parent / "pyproject.toml"
        if not pyproject.is_file():
            continue
        try:
            with pyproject.open("rb") as handle:
                project = tomllib.load(handle).get("project", {})
        except OSError as exc:
            logger.warning("Error reading %s: %s", pyproject, exc)
            return None
        version = project.get("version")
        if isinstance(version, str) and version.strip():
            return version.strip()
        return None
    return None


def resolve_project_version() -> str:
    """
    Return the planner version.

    The installed distribution wins; a source checkout falls back to
    its pyproject.toml, and anything else reports ``UNKNOWN_VERSION``.
    """
    return _installed_version() or _source_tree_version() or UNKNOWN_VERSION
