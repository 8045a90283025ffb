"""HTML rendering of unified diffs between two captured files."""

import asyncio
import difflib
import os

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import DiffLexer


def _read_lines(path):
    if os.path.isdir(path):
        return [name + '\n' for name in sorted(os.listdir(path))]
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        return f.readlines()


def unified_diff(old_path, new_path):
    """Unified diff text of two files, headed by their paths"""
    return ''.join(difflib.unified_diff(
        _read_lines(old_path),
        _read_lines(new_path),
        fromfile=str(old_path),
        tofile=str(new_path),
    ))


class DiffRenderer:
    """Turns a pair of files into a standalone, syntax-highlighted HTML page"""

    def __init__(self, style='default'):
        self.formatter = HtmlFormatter(full=True, style=style)
        self.lexer = DiffLexer()

    def render_sync(self, old_path, new_path):
        return highlight(unified_diff(old_path, new_path), self.lexer, self.formatter)

    async def render(self, old_path, new_path):
        return await asyncio.to_thread(self.render_sync, old_path, new_path)
