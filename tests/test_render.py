import pytest

from sitediff.render import DiffRenderer, unified_diff


def _pair(tmp_path, old_text, new_text):
    old = tmp_path / "old.html"
    new = tmp_path / "new.html"
    old.write_text(old_text)
    new.write_text(new_text)
    return old, new


def test_unified_diff(tmp_path):
    old, new = _pair(tmp_path, "a\nb\n", "a\nc\n")
    diff = unified_diff(old, new)
    assert diff.startswith(f"--- {old}\n+++ {new}\n")
    assert "-b\n" in diff
    assert "+c\n" in diff


def test_unified_diff_identical_files_is_empty(tmp_path):
    old, new = _pair(tmp_path, "same\n", "same\n")
    assert unified_diff(old, new) == ""


@pytest.mark.asyncio
async def test_render_produces_full_html_page(tmp_path):
    old, new = _pair(tmp_path, "<h1>Old title</h1>\n", "<h1>New title</h1>\n")
    html = await DiffRenderer().render(str(old), str(new))
    assert html.lstrip().startswith("<!DOCTYPE html")
    assert "Old title" in html
    assert "New title" in html


@pytest.mark.asyncio
async def test_render_missing_file_raises(tmp_path):
    old, _ = _pair(tmp_path, "x\n", "y\n")
    with pytest.raises(FileNotFoundError):
        await DiffRenderer().render(str(old), str(tmp_path / "missing.html"))
