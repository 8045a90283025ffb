"""Capture a site, compare it to the previous capture and report what changed."""

import asyncio
import logging
import shutil
import time
from datetime import datetime, timedelta
from pathlib import Path

from .beautify import unminify_js_in_dir
from .differ import generate_report, has_report_changed
from .errors import PublishError
from .manifest import build_manifest, get_site_base_name
from .notify import gen_slack_report_msg
from .snapshot import create_snapshot


def next_interval_start(now, interval_hours):
    """Start of the next clean interval after ``now``, wrapping to midnight"""
    next_hour = ((now.hour // interval_hours) + 1) * interval_hours
    if next_hour >= 24:
        return now.replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(days=1)
    return now.replace(hour=next_hour, minute=0, second=0, microsecond=0)


class SiteMonitor:
    """Keeps one cached capture of a site and diffs every fresh clone against it.

    ``mirror`` needs an async ``clone(url, target_dir)``, ``renderer`` an async
    ``render(old_path, new_path)``. ``publisher`` (``publish(report) -> url``)
    and ``notifier`` (``post(text)``) are optional.
    """

    def __init__(self, config, mirror, renderer, publisher=None, notifier=None):
        self.config = config
        self.mirror = mirror
        self.renderer = renderer
        self.publisher = publisher
        self.notifier = notifier

        self.site_base = get_site_base_name(config.url)
        self.work_dir = Path(config.work_dir)
        self.cache_dir = self.work_dir / f"{self.site_base}.cache"
        self.clone_dir = self.work_dir / f"{self.site_base}.clone"
        self.snapshots_dir = self.work_dir / 'snapshots'

        self.work_dir.mkdir(parents=True, exist_ok=True)
        self.logger = logging.getLogger(__name__)

    async def capture(self):
        """Mirror the site into a clean clone directory"""
        if self.clone_dir.exists():
            self.logger.info(f"Removing stale clone: {self.clone_dir}")
            shutil.rmtree(self.clone_dir)
        self.clone_dir.mkdir(parents=True)

        await self.mirror.clone(self.config.url, str(self.clone_dir))

        if self.config.unminify_js:
            await unminify_js_in_dir(self.clone_dir, self.config.max_concurrency)

    def _promote_clone(self):
        """The fresh clone becomes the cache the next run compares against"""
        if self.cache_dir.exists():
            shutil.rmtree(self.cache_dir)
        self.clone_dir.rename(self.cache_dir)

    async def compare(self):
        """Build both manifests and diff them"""
        cached, cloned = await asyncio.gather(
            build_manifest(self.cache_dir, self.site_base,
                           self.config.include_directories, self.config.max_concurrency),
            build_manifest(self.clone_dir, self.site_base,
                           self.config.include_directories, self.config.max_concurrency),
        )
        return await generate_report(
            cached, cloned, self.config.ignore_files, self.renderer, self.config.max_concurrency
        )

    async def run_once(self):
        """One capture-and-compare cycle.

        Returns the report, or None on the very first run when there is no
        cache to compare against yet.
        """
        timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        self.logger.info(f"Starting site check for {self.config.url}: {timestamp}")

        await self.capture()

        if not self.cache_dir.exists():
            self.logger.info("No cached capture found - storing initial capture")
            self._promote_clone()
            return None

        report = await self.compare()

        if not has_report_changed(report):
            self.logger.info("=" * 60)
            self.logger.info("NO CHANGES DETECTED")
            self.logger.info("=" * 60)
            self._promote_clone()
            return report

        self.logger.info("=" * 60)
        self.logger.info("CHANGES DETECTED - Creating new snapshot")
        self.logger.info("=" * 60)

        await asyncio.to_thread(
            create_snapshot, self.cache_dir, self.clone_dir, self.snapshots_dir, report
        )

        if self.publisher is not None:
            try:
                report.location = await asyncio.to_thread(self.publisher.publish, report)
            except PublishError as e:
                self.logger.error(str(e))
                self.logger.info("Snapshot saved locally but diff not published")

        report.slack_message = gen_slack_report_msg(report, self.config.url)
        self._promote_clone()

        if self.notifier is not None:
            await asyncio.to_thread(self.notifier.post, report.slack_message)

        self.logger.info(f"Root hash is now: {report.cloned_root_hash}")
        return report

    def _wait_until_next_interval(self, interval_hours=4):
        """Wait until the next clean interval (e.g., 12am, 4am, 8am, etc.)"""
        now = datetime.now()
        next_run = next_interval_start(now, interval_hours)
        wait_seconds = (next_run - now).total_seconds()

        self.logger.info(f"Next check scheduled for: {next_run.strftime('%Y-%m-%d %I:%M %p')}")
        self.logger.info(f"Waiting {wait_seconds / 3600:.2f} hours...")

        time.sleep(wait_seconds)

    def run_continuous(self, interval_hours=None):
        """Check the site at every clean interval until interrupted"""
        interval_hours = interval_hours or self.config.interval_hours
        self.logger.info(f"Starting continuous monitoring every {interval_hours} hours")

        while True:
            try:
                self._wait_until_next_interval(interval_hours)
                asyncio.run(self.run_once())
            except KeyboardInterrupt:
                self.logger.info("Monitor stopped by user")
                break
            except Exception as e:
                self.logger.error(f"Error in continuous run: {e}")
                self.logger.info("Waiting 5 minutes before retry...")
                time.sleep(300)
