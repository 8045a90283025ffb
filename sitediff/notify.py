"""Slack message for a change report, and posting it."""

import logging

import requests

from .errors import NotificationError

logger = logging.getLogger(__name__)


def build_msg_file_list(files):
    return ''.join(f" - `{record.compare_path}`\n" for record in files)


def gen_diff_msg(report):
    if not report.location:
        return ''
    return f"\nA HTML diff can be viewed here: {report.location}\n"


def gen_slack_report_msg(report, website):
    """Channel-wide summary: counts and paths per bucket, diff link, root hash"""
    return (
        f"<!channel>, changes to {website} have been detected:"
        f"\n\n"
        f"*{len(report.new_files)} new files*\n"
        f"{build_msg_file_list(report.new_files)}"
        f"*{len(report.deleted_files)} deleted files*\n"
        f"{build_msg_file_list(report.deleted_files)}"
        f"*{len(report.changed_files)} changed files*\n"
        f"{build_msg_file_list(report.changed_files)}"
        f"*{len(report.ignored_files)} ignored files*\n"
        f"{build_msg_file_list(report.ignored_files)}"
        f"{gen_diff_msg(report)}"
        f"\nRoot hash is now: `{report.cloned_root_hash}`"
    )


class SlackNotifier:
    """Posts messages to a Slack incoming webhook"""

    def __init__(self, webhook_url, timeout=10):
        self.webhook_url = webhook_url
        self.timeout = timeout

    def post(self, text):
        try:
            response = requests.post(self.webhook_url, json={'text': text}, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NotificationError(f"Failed to post to Slack: {e}") from e
        logger.info("Slack notification sent")
