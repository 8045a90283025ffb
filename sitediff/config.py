"""Settings for a monitored site."""

import json
import os
from dataclasses import dataclass, field, fields
from typing import List, Optional

from .errors import ConfigError

SLACK_WEBHOOK_ENV = 'SITEDIFF_SLACK_WEBHOOK_URL'


@dataclass
class SiteDiffConfig:
    url: str
    work_dir: str = 'sitediff-data'
    # compare paths whose changes are reported as ignored
    ignore_files: List[str] = field(default_factory=list)
    unminify_js: bool = True
    include_directories: bool = False
    # None fans out over every file at once
    max_concurrency: Optional[int] = None
    slack_webhook_url: Optional[str] = None
    enable_internet_archive: bool = False
    ia_collection: str = 'opensource'
    interval_hours: int = 4
    log_level: str = 'INFO'

    def __post_init__(self):
        if not self.url:
            raise ConfigError("A site url is required")
        if self.max_concurrency is not None and self.max_concurrency < 1:
            raise ConfigError("max_concurrency must be at least 1")
        if not 1 <= self.interval_hours <= 24:
            raise ConfigError("interval_hours must be between 1 and 24")


def load_config(path=None, **overrides):
    """Build a config from an optional JSON file, keyword overrides and the environment.

    Overrides that are None are skipped so unset command-line options don't
    clobber file values.
    """
    data = {}
    if path:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a JSON object")

    data.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(SiteDiffConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")

    if os.environ.get(SLACK_WEBHOOK_ENV):
        data['slack_webhook_url'] = os.environ[SLACK_WEBHOOK_ENV]

    if 'url' not in data:
        raise ConfigError("A site url is required")
    return SiteDiffConfig(**data)
