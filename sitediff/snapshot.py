"""Archiving both captures plus the report into a timestamped directory."""

import json
import logging
import random
import shutil
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)


def build_timestamp_name(now=None):
    """``month_day_year__rand`` in UTC, e.g. ``3_7_2024__48213``"""
    now = now or datetime.now(timezone.utc)
    rand = ''.join(random.choice('0123456789') for _ in range(5))
    return f"{now.month}_{now.day}_{now.year}__{rand}"


def build_snapshot_dir_name(now=None):
    return f"snapshot_{build_timestamp_name(now)}"


def build_diff_file_name(now=None):
    return f"diff_{build_timestamp_name(now)}.html"


def create_snapshot(cache_dir, clone_dir, snapshot_root, report):
    """Copy both captures next to ``report.json`` and ``diff.html``.

    Returns the new snapshot directory. Any copy or write failure propagates.
    """
    cache_dir = Path(cache_dir)
    clone_dir = Path(clone_dir)
    snapshot_dir = Path(snapshot_root) / build_snapshot_dir_name()
    snapshot_dir.mkdir(parents=True, exist_ok=True)

    shutil.copytree(cache_dir, snapshot_dir / cache_dir.name)
    shutil.copytree(clone_dir, snapshot_dir / clone_dir.name)

    with open(snapshot_dir / 'report.json', 'w', encoding='utf-8') as f:
        json.dump(report.to_dict(), f, indent=2)

    with open(snapshot_dir / 'diff.html', 'w', encoding='utf-8') as f:
        f.write(''.join(report.html_diffs))

    logger.info(f"Snapshot stored at: {snapshot_dir}")
    return snapshot_dir
