"""Tests for manifest and image directory loading."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest
from PIL import Image

import quilt_planner.manifest as qp_manifest
from quilt_planner.config import PlannerConfig
from quilt_planner.layout import plan_quilt
from quilt_planner.type_defs import QuiltItem


def write_manifest(path: Path, doc: Any) -> Path:
    """Dump ``doc`` as JSON at ``path``."""
    path.write_text(json.dumps(doc), encoding="utf-8")
    return path


class TestLoadManifest:
    def test_list_form(self, tmp_path: Path) -> None:
        """A bare list of records is accepted, aliases included."""
        path = write_manifest(tmp_path / "m.json", [
            {"src": "https://cdn.example/a.jpg", "width": 1600,
             "height": 900, "title": "Harbour"},
            {"src": "b.jpg", "width": 900, "height": 1600,
             "rows": 2, "cols": 1, "unknown": "ignored"},
            {"src": "c.jpg", "explicitRows": 1, "explicitCols": 2},
        ])
        items = qp_manifest.load_manifest(path)

        assert items[0] == QuiltItem(
            src="https://cdn.example/a.jpg", width=1600, height=900,
            title="Harbour",
        )
        assert (items[1].explicit_rows, items[1].explicit_cols) == (2, 1)
        assert items[2].has_explicit_spans
        assert items[2].width is None

    def test_items_key(self, tmp_path: Path) -> None:
        """An object with an ``items`` list is accepted."""
        path = write_manifest(tmp_path / "m.json", {
            "items": [{"src": "a.jpg", "width": 10, "height": 10}],
        })
        assert len(qp_manifest.load_manifest(path)) == 1

    def test_reads_sizes_of_local_files(self, tmp_path: Path) -> None:
        """Missing sizes are read from images beside the manifest."""
        Image.new("RGB", (300, 150)).save(tmp_path / "pic.png")
        path = write_manifest(tmp_path / "m.json", [{"src": "pic.png"}])
        (item,) = qp_manifest.load_manifest(path)
        assert (item.width, item.height) == (300, 150)

    def test_whole_number_spans(self, tmp_path: Path) -> None:
        """Integral float spans are read back as ints."""
        path = write_manifest(tmp_path / "m.json", [
            {"src": "a.jpg", "rows": 2.0, "cols": 1},
        ])
        (item,) = qp_manifest.load_manifest(path)
        assert item.explicit_rows == 2  # noqa: PLR2004
        assert isinstance(item.explicit_rows, int)

    def test_non_finite_sizes_still_plan(self, tmp_path: Path) -> None:
        """NaN and Infinity literals load and plan without errors."""
        path = tmp_path / "m.json"
        path.write_text(
            '[{"src": "a.jpg", "width": NaN, "height": 100},'
            ' {"src": "b.jpg", "width": Infinity, "height": 10},'
            ' {"src": "c.jpg", "width": 300, "height": 200}]',
            encoding="utf-8",
        )
        items = qp_manifest.load_manifest(path)
        plan = plan_quilt(items, PlannerConfig(num_cols=4, seed=1))
        assert sorted(p.item_index for p in plan) == [0, 1, 2]

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing manifest raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            qp_manifest.load_manifest(tmp_path / "absent.json")

    @pytest.mark.parametrize(
        "doc",
        [
            "just a string",
            {"photos": []},
            [{"width": 10, "height": 10}],
            [{"src": "a.jpg", "width": "wide"}],
            ["a.jpg"],
            [{"src": "a.jpg", "rows": 1.5, "cols": 1}],
            [{"src": "a.jpg", "rows": 1, "cols": True}],
            [{"src": "a.jpg", "width": True, "height": 10}],
            [{"src": "a.jpg", "explicitRows": "2", "explicitCols": 1}],
        ],
    )
    def test_malformed_manifest(self, tmp_path: Path, doc: Any) -> None:
        """Malformed documents raise ValueError."""
        path = write_manifest(tmp_path / "m.json", doc)
        with pytest.raises(ValueError, match="Manifest"):
            qp_manifest.load_manifest(path)


class TestScanDirectory:
    def test_images_sorted_by_name(self, image_dir: Path) -> None:
        """Only image files are picked up, in name order, with sizes."""
        items = qp_manifest.scan_directory(image_dir)
        assert [i.src for i in items] == [
            "a_tall.jpg", "b_wide.png", "c_square.png",
        ]
        assert [(i.width, i.height) for i in items] == [
            (100, 200), (200, 100), (64, 64),
        ]
        assert [i.title for i in items] == ["a_tall", "b_wide", "c_square"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        """A missing directory raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            qp_manifest.scan_directory(tmp_path / "nope")

    def test_load_items_dispatches(
        self,
        image_dir: Path,
        tmp_path: Path,
    ) -> None:
        """Directories are scanned; files are read as manifests."""
        assert len(qp_manifest.load_items(image_dir)) == 3  # noqa: PLR2004
        path = write_manifest(tmp_path / "m.json", [{"src": "x.jpg"}])
        assert qp_manifest.load_items(path) == [QuiltItem(src="x.jpg")]


def test_read_image_size_unreadable(
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Unreadable images give unknown sizes and a warning."""
    bad = tmp_path / "broken.png"
    bad.write_bytes(b"not really a png")
    with caplog.at_level(logging.WARNING):
        assert qp_manifest.read_image_size(bad) == (None, None)
    assert "Could not read image size" in caplog.text
