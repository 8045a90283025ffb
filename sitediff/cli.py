"""Command-line entry point: ``sitediff run``, ``sitediff watch``, ``sitediff diff``."""

import argparse
import asyncio
import json
import sys

from .config import load_config
from .differ import generate_report
from .errors import SiteDiffError
from .logs import setup_logging
from .manifest import get_site_base_name, load_manifest
from .mirror import WgetMirror
from .monitor import SiteMonitor
from .notify import SlackNotifier
from .publish import InternetArchivePublisher
from .render import DiffRenderer


def build_parser():
    parser = argparse.ArgumentParser(
        prog='sitediff',
        description="Mirror a website and report what changed since the last capture",
    )
    sub = parser.add_subparsers(dest='command', required=True)

    for name, help_text in (('run', "Capture and compare once"),
                            ('watch', "Capture and compare at every interval")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument('--config', help="JSON config file")
        p.add_argument('--url', help="Site to monitor")
        p.add_argument('--work-dir', help="Where captures and snapshots are kept")
        p.add_argument('--ignore', action='append', metavar='PATH',
                       help="Compare path whose changes are ignored (repeatable)")
        p.add_argument('--no-unminify', action='store_true',
                       help="Don't beautify JavaScript before comparing")
        p.add_argument('--interval-hours', type=int)

    p = sub.add_parser('diff', help="Compare two saved manifests and print the report")
    p.add_argument('old_manifest')
    p.add_argument('new_manifest')
    p.add_argument('--ignore', action='append', metavar='PATH')

    return parser


def build_monitor(config):
    site_base = get_site_base_name(config.url)
    publisher = None
    if config.enable_internet_archive:
        publisher = InternetArchivePublisher(site_base, config.url, config.ia_collection)
    notifier = SlackNotifier(config.slack_webhook_url) if config.slack_webhook_url else None
    return SiteMonitor(config, WgetMirror(), DiffRenderer(), publisher, notifier)


def _config_from_args(args):
    return load_config(
        args.config,
        url=args.url,
        work_dir=args.work_dir,
        ignore_files=args.ignore,
        unminify_js=False if args.no_unminify else None,
        interval_hours=args.interval_hours,
    )


def _diff_manifests(args):
    old = load_manifest(args.old_manifest)
    new = load_manifest(args.new_manifest)
    report = asyncio.run(generate_report(old, new, args.ignore or [], DiffRenderer()))
    json.dump(report.to_dict(), sys.stdout, indent=2)
    sys.stdout.write('\n')
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        if args.command == 'diff':
            return _diff_manifests(args)

        config = _config_from_args(args)
        setup_logging(config.work_dir, config.log_level)
        monitor = build_monitor(config)

        if args.command == 'watch':
            monitor.run_continuous(config.interval_hours)
            return 0

        report = asyncio.run(monitor.run_once())
        if report is not None and report.slack_message:
            print(report.slack_message)
        return 0
    except SiteDiffError as e:
        print(f"sitediff: {e}", file=sys.stderr)
        return 1
