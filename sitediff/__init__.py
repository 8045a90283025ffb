"""Mirror a website on a schedule and report what changed since the last capture."""

from .differ import (
    apply_ignore_filter,
    compute_added,
    compute_changed,
    compute_removed,
    find_counterpart,
    generate_report,
    has_report_changed,
)
from .errors import (
    ConfigError,
    MirrorError,
    NotificationError,
    PublishError,
    SiteDiffError,
)
from .hashing import root_digest
from .manifest import build_manifest, get_compare_path, get_site_base_name
from .models import ChangeReport, FileKind, FileRecord

__all__ = [
    'ChangeReport',
    'ConfigError',
    'FileKind',
    'FileRecord',
    'MirrorError',
    'NotificationError',
    'PublishError',
    'SiteDiffError',
    'apply_ignore_filter',
    'build_manifest',
    'compute_added',
    'compute_changed',
    'compute_removed',
    'find_counterpart',
    'generate_report',
    'get_compare_path',
    'get_site_base_name',
    'has_report_changed',
    'root_digest',
]
