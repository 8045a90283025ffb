import json
from unittest.mock import AsyncMock, patch

from sitediff.cli import build_monitor, main
from sitediff.config import SiteDiffConfig
from sitediff.manifest import save_manifest
from sitediff.notify import SlackNotifier
from sitediff.publish import InternetArchivePublisher
from conftest import make_record


def test_diff_command_prints_report(tmp_path, capsys):
    old_root = tmp_path / "example.com.cache"
    new_root = tmp_path / "example.com.clone"
    old_root.mkdir()
    new_root.mkdir()
    (old_root / "a.html").write_text("old\n")
    (new_root / "a.html").write_text("new\n")

    old = [make_record("a.html", "h1", root=str(old_root))]
    new = [make_record("a.html", "h2", root=str(new_root)), make_record("b.html", "h3", root=str(new_root))]
    save_manifest(old, tmp_path / "old.json")
    save_manifest(new, tmp_path / "new.json")

    assert main(["diff", str(tmp_path / "old.json"), str(tmp_path / "new.json")]) == 0

    report = json.loads(capsys.readouterr().out)
    assert [f["comparePath"] for f in report["newFiles"]] == ["b.html"]
    assert [f["comparePath"] for f in report["changedFiles"]] == ["a.html"]
    assert len(report["htmlDiffs"]) == 1


def test_run_without_url_reports_config_error(capsys, monkeypatch):
    monkeypatch.delenv("SITEDIFF_SLACK_WEBHOOK_URL", raising=False)
    assert main(["run"]) == 1
    assert "url" in capsys.readouterr().err


def test_run_command(tmp_path):
    with patch("sitediff.cli.SiteMonitor.run_once", new=AsyncMock(return_value=None)) as run_once, \
            patch("sitediff.cli.setup_logging") as setup_logging:
        code = main(["run", "--url", "https://example.com", "--work-dir", str(tmp_path), "--ignore", "feed.xml"])

    assert code == 0
    run_once.assert_awaited_once()
    setup_logging.assert_called_once_with(str(tmp_path), "INFO")


def test_build_monitor_wires_optional_collaborators(tmp_path):
    bare = build_monitor(SiteDiffConfig(url="https://example.com", work_dir=str(tmp_path)))
    assert bare.publisher is None
    assert bare.notifier is None

    full = build_monitor(SiteDiffConfig(
        url="https://example.com",
        work_dir=str(tmp_path),
        slack_webhook_url="https://hooks.slack.test/x",
        enable_internet_archive=True,
    ))
    assert isinstance(full.publisher, InternetArchivePublisher)
    assert isinstance(full.notifier, SlackNotifier)
