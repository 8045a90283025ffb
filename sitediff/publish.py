"""Publishing the combined HTML diff to the Internet Archive."""

import logging
import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import internetarchive

from .errors import PublishError
from .snapshot import build_timestamp_name

logger = logging.getLogger(__name__)


class InternetArchivePublisher:
    """Uploads a report's diffs as a single HTML file and returns its URL.

    Credentials come from the internetarchive configuration, e.g. after
    ``ia configure --username=... --password=...``.
    """

    def __init__(self, site_base, website, collection='opensource'):
        self.site_base = site_base
        self.website = website
        self.collection = collection

    def build_item_id(self, timestamp):
        return f"{self.site_base.replace('.', '-')}-diff-{timestamp}"

    def publish(self, report):
        timestamp = build_timestamp_name()
        item_id = self.build_item_id(timestamp)
        file_name = f"diff_{timestamp}.html"

        # Values are strings, except subject which takes a list
        metadata = {
            'title': f'{self.website} changes - {timestamp}',
            'mediatype': 'web',
            'collection': self.collection,
            'description': (
                f'HTML diff of {len(report.changed_files)} changed file(s) on {self.website}. '
                f'Root hash is now {report.cloned_root_hash}.'
            ),
            'subject': ['web archive', 'website diff', self.website],
            'source_url': self.website,
            'date': datetime.now(timezone.utc).strftime('%Y-%m-%d'),
        }

        staging_dir = Path(tempfile.mkdtemp(prefix='sitediff_publish_'))
        try:
            diff_file = staging_dir / file_name
            with open(diff_file, 'w', encoding='utf-8') as f:
                f.write(''.join(report.html_diffs))

            logger.info(f"Uploading diff to Internet Archive as: {item_id}")
            try:
                responses = internetarchive.upload(
                    item_id,
                    files={file_name: str(diff_file)},
                    metadata=metadata,
                    retries=3,
                    checksum=True,
                )
            except Exception as e:
                raise PublishError(f"Failed to upload to Internet Archive: {e}") from e

            failed = [r for r in responses if not r.ok]
            if failed:
                raise PublishError(
                    f"Internet Archive rejected upload of {item_id}: HTTP {failed[0].status_code}"
                )
        finally:
            shutil.rmtree(staging_dir, ignore_errors=True)

        ia_url = f"https://archive.org/details/{item_id}"
        logger.info(f"[SUCCESS] Diff published to: {ia_url}")
        return ia_url
