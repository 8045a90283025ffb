import json
import re
from datetime import datetime, timezone

from sitediff.models import ChangeReport
from sitediff.snapshot import (
    build_diff_file_name,
    build_snapshot_dir_name,
    build_timestamp_name,
    create_snapshot,
)
from conftest import make_record


def test_build_timestamp_name():
    now = datetime(2024, 3, 7, 12, 0, tzinfo=timezone.utc)
    assert re.fullmatch(r"3_7_2024__\d{5}", build_timestamp_name(now))


def test_snapshot_and_diff_names():
    assert re.fullmatch(r"snapshot_\d{1,2}_\d{1,2}_\d{4}__\d{5}", build_snapshot_dir_name())
    assert re.fullmatch(r"diff_\d{1,2}_\d{1,2}_\d{4}__\d{5}\.html", build_diff_file_name())


def test_create_snapshot(tmp_path):
    cache = tmp_path / "example.com.cache"
    clone = tmp_path / "example.com.clone"
    cache.mkdir()
    clone.mkdir()
    (cache / "index.html").write_text("old")
    (clone / "index.html").write_text("new")

    report = ChangeReport(
        cached_manifest=[make_record("index.html", "h1", root=str(cache))],
        cloned_manifest=[make_record("index.html", "h2", root=str(clone))],
        cloned_root_hash="root",
        changed_files=[make_record("index.html", "h2", root=str(clone))],
        html_diffs=["<p>one</p>", "<p>two</p>"],
    )

    snapshot_dir = create_snapshot(cache, clone, tmp_path / "snapshots", report)

    assert snapshot_dir.parent == tmp_path / "snapshots"
    assert snapshot_dir.name.startswith("snapshot_")
    assert (snapshot_dir / "example.com.cache" / "index.html").read_text() == "old"
    assert (snapshot_dir / "example.com.clone" / "index.html").read_text() == "new"
    assert (snapshot_dir / "diff.html").read_text() == "<p>one</p><p>two</p>"

    saved = json.loads((snapshot_dir / "report.json").read_text())
    assert saved["clonedRootHash"] == "root"
    assert saved["changedFiles"][0]["comparePath"] == "index.html"
    assert "location" not in saved
    assert ChangeReport.from_dict(saved) == report
