import re
from unittest.mock import MagicMock, patch

import pytest

from sitediff.errors import PublishError
from sitediff.models import ChangeReport
from sitediff.publish import InternetArchivePublisher


def _report():
    return ChangeReport(
        cached_manifest=[],
        cloned_manifest=[],
        cloned_root_hash="root",
        html_diffs=["<p>a</p>", "<p>b</p>"],
    )


def test_build_item_id():
    publisher = InternetArchivePublisher("example.com", "https://example.com")
    assert publisher.build_item_id("3_7_2024__12345") == "example-com-diff-3_7_2024__12345"


def test_publish_uploads_combined_diff():
    uploaded = {}

    def fake_upload(item_id, files, metadata, retries, checksum):
        (name, path), = files.items()
        with open(path, encoding="utf-8") as f:
            uploaded["content"] = f.read()
        uploaded["name"] = name
        uploaded["metadata"] = metadata
        return [MagicMock(ok=True)]

    publisher = InternetArchivePublisher("example.com", "https://example.com", collection="test_collection")
    with patch("sitediff.publish.internetarchive.upload", side_effect=fake_upload) as upload:
        url = publisher.publish(_report())

    item_id = upload.call_args.args[0]
    assert item_id.startswith("example-com-diff-")
    assert url == f"https://archive.org/details/{item_id}"
    assert uploaded["content"] == "<p>a</p><p>b</p>"
    assert uploaded["name"].startswith("diff_") and uploaded["name"].endswith(".html")
    assert uploaded["metadata"]["collection"] == "test_collection"
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", uploaded["metadata"]["date"])


def test_publish_rejected_upload_raises():
    rejected = MagicMock(ok=False, status_code=403)
    publisher = InternetArchivePublisher("example.com", "https://example.com")
    with patch("sitediff.publish.internetarchive.upload", return_value=[rejected]):
        with pytest.raises(PublishError, match="403"):
            publisher.publish(_report())


def test_publish_upload_exception_raises():
    publisher = InternetArchivePublisher("example.com", "https://example.com")
    with patch("sitediff.publish.internetarchive.upload", side_effect=RuntimeError("no credentials")):
        with pytest.raises(PublishError, match="no credentials"):
            publisher.publish(_report())
