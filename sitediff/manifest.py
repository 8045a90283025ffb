"""Walking a captured site and turning it into a manifest of hashed records."""

import asyncio
import json
import logging
import os
import re

from .concurrency import gather_bounded
from .hashing import hash_directory, hash_file
from .models import FileKind, FileRecord

logger = logging.getLogger(__name__)


def get_site_base_name(url):
    """Directory-safe name for a site, e.g. ``https://example.com/`` -> ``example.com``"""
    return url.replace('http://', '').replace('https://', '').replace('/', '')


def get_compare_path(file_path, site_base):
    """Path of a captured file relative to its ``<site>.clone``/``<site>.cache`` root.

    Everything up to and including the first segment starting with
    ``<site_base>.clone`` or ``<site_base>.cache`` is dropped. Paths without
    such a segment give an empty string.
    """
    root_segment = re.compile(rf'{re.escape(site_base)}\.(clone|cache)')

    segments = str(file_path).split('/')
    for i, segment in enumerate(segments):
        if root_segment.match(segment):
            return '/'.join(s for s in segments[i + 1:] if s)
    return ''


def enumerate_files(directory, include_directories=False):
    """Every file below ``directory`` (and subdirectories when asked), sorted per level"""
    paths = []
    for root, dirs, files in os.walk(directory):
        dirs.sort()
        if include_directories:
            paths.extend(os.path.join(root, d) for d in dirs)
        paths.extend(os.path.join(root, f) for f in sorted(files))
    return paths


def identify_js_files(paths):
    return [p for p in paths if os.path.basename(p).endswith('.js')]


async def _hash_entry(path, site_base):
    is_dir = os.path.isdir(path)
    digest = await asyncio.to_thread(hash_directory if is_dir else hash_file, path)
    return FileRecord(
        full_path=str(path),
        compare_path=get_compare_path(path, site_base),
        hash=digest,
        kind=FileKind.DIRECTORY if is_dir else FileKind.FILE,
    )


async def build_manifest(directory, site_base, include_directories=False, max_concurrency=None):
    """Hash every entry of a capture concurrently.

    Records come back in walk order regardless of which hash finishes first.
    A file that vanishes or cannot be read fails the whole manifest.
    """
    paths = enumerate_files(directory, include_directories)
    logger.info(f"Hashing {len(paths)} entries in {directory}")

    manifest = await gather_bounded(
        (_hash_entry(path, site_base) for path in paths),
        max_concurrency,
    )
    return list(manifest)


def save_manifest(manifest, path):
    """Write a manifest as a JSON list of records"""
    with open(path, 'w', encoding='utf-8') as f:
        json.dump([record.to_dict() for record in manifest], f, indent=2)


def load_manifest(path):
    """Read a manifest written by ``save_manifest`` or taken from a report"""
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    return [FileRecord.from_dict(item) for item in data]
