"""Comparing two manifests of the same site.

Records are joined on ``compare_path``. Paths are expected to be unique within
a manifest; if one is not, the first record carrying it wins and later ones
are never matched.
"""

import logging

from .concurrency import gather_bounded
from .hashing import root_digest
from .models import ChangeReport

logger = logging.getLogger(__name__)


def _index_by_compare_path(manifest):
    index = {}
    for record in manifest:
        # first match wins
        index.setdefault(record.compare_path, record)
    return index


def find_counterpart(record, manifest):
    """First record of ``manifest`` with the same compare path, or None"""
    for candidate in manifest:
        if candidate.compare_path == record.compare_path:
            return candidate
    return None


def compute_added(old, new):
    """Records of ``new`` whose path the old capture does not have"""
    old_index = _index_by_compare_path(old)
    return [record for record in new if record.compare_path not in old_index]


def compute_removed(old, new):
    """Records of ``old`` whose path the new capture does not have"""
    new_index = _index_by_compare_path(new)
    return [record for record in old if record.compare_path not in new_index]


def compute_changed(old, new):
    """Records of ``new`` present in both captures with a different hash"""
    old_index = _index_by_compare_path(old)
    changed = []
    for record in new:
        previous = old_index.get(record.compare_path)
        if previous is not None and previous.hash != record.hash:
            changed.append(record)
    return changed


def apply_ignore_filter(changed, ignore_list):
    """Split changed records into (changed, ignored) by exact compare path"""
    ignored_paths = set(ignore_list)
    kept = [record for record in changed if record.compare_path not in ignored_paths]
    ignored = [record for record in changed if record.compare_path in ignored_paths]
    return kept, ignored


def has_report_changed(report):
    """True when anything was added, changed or deleted; ignored files don't count"""
    return bool(report.new_files or report.changed_files or report.deleted_files)


async def generate_report(old, new, ignore_list, renderer, max_concurrency=None):
    """Classify every path and render an HTML diff for each changed file.

    ``renderer`` needs an async ``render(old_path, new_path)`` returning an
    HTML string. Diffs are rendered concurrently; ``html_diffs[i]`` belongs to
    ``changed_files[i]``.
    """
    new_files = compute_added(old, new)
    deleted_files = compute_removed(old, new)
    changed_files, ignored_files = apply_ignore_filter(compute_changed(old, new), ignore_list)

    logger.info(
        f"{len(new_files)} new, {len(deleted_files)} deleted, "
        f"{len(changed_files)} changed, {len(ignored_files)} ignored"
    )

    old_index = _index_by_compare_path(old)
    html_diffs = await gather_bounded(
        (renderer.render(old_index[record.compare_path].full_path, record.full_path)
         for record in changed_files),
        max_concurrency,
    )

    return ChangeReport(
        cached_manifest=list(old),
        cloned_manifest=list(new),
        cloned_root_hash=root_digest(new),
        new_files=new_files,
        deleted_files=deleted_files,
        changed_files=changed_files,
        ignored_files=ignored_files,
        html_diffs=list(html_diffs),
    )
