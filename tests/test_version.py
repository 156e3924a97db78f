"""Tests for the version helper."""

from __future__ import annotations

from pathlib import Path

import pytest

from quilt_planner import version as qp_version


def _raise_missing(_: str) -> None:
    raise qp_version.importlib_metadata.PackageNotFoundError


def test_resolve_version_from_distribution(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(
        qp_version.importlib_metadata,
        "version",
        lambda _name: "9.9.9",
    )
    assert qp_version.resolve_project_version() == "9.9.9"


def test_resolve_version_from_pyproject(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pyproject.toml").write_text(
        "[project]\nversion = '1.2.3'\n",
        encoding="utf-8",
    )
    monkeypatch.setattr(qp_version.importlib_metadata, "version",
                        _raise_missing)
    monkeypatch.setattr(qp_version, "__file__",
                        str(tmp_path / "pkg" / "version.py"))

    assert qp_version.resolve_project_version() == "1.2.3"


def test_resolve_version_fallback_to_default(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pyproject.toml").write_text("[project]\n", encoding="utf-8")
    monkeypatch.setattr(qp_version.importlib_metadata, "version",
                        _raise_missing)

    def raise_os_error(handle: object) -> None:
        msg = "boom"
        raise OSError(msg)

    monkeypatch.setattr(qp_version.tomllib, "load", raise_os_error)
    monkeypatch.setattr(qp_version, "__file__",
                        str(tmp_path / "pkg" / "version.py"))

    with caplog.at_level("WARNING"):
        assert qp_version.resolve_project_version() == "0.0.0"

    assert any("Error reading" in rec.message for rec in caplog.records)


def test_nearest_pyproject_without_version(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Only the nearest pyproject.toml is consulted."""
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "pyproject.toml").write_text(
        "[project]\nname = 'inner'\n", encoding="utf-8",
    )
    (tmp_path / "pyproject.toml").write_text(
        "[project]\nversion = '4.5.6'\n", encoding="utf-8",
    )
    monkeypatch.setattr(qp_version.importlib_metadata, "version",
                        _raise_missing)
    monkeypatch.setattr(qp_version, "__file__",
                        str(tmp_path / "pkg" / "sub" / "version.py"))

    assert qp_version.resolve_project_version() == qp_version.UNKNOWN_VERSION
