"""Re-indenting captured JavaScript so minified bundles produce readable diffs."""

import asyncio
import logging

import jsbeautifier

from .concurrency import gather_bounded
from .manifest import enumerate_files, identify_js_files

logger = logging.getLogger(__name__)


def unminify_js(path):
    """Rewrite a script in place with 2-space indentation"""
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        source = f.read()

    options = jsbeautifier.default_options()
    options.indent_size = 2
    pretty = jsbeautifier.beautify(source, options)

    with open(path, 'w', encoding='utf-8') as f:
        f.write(pretty)

    logger.debug(f"Unminified: {path}")


async def unminify_js_in_dir(directory, max_concurrency=None):
    """Beautify every .js file in a capture, minified or not"""
    scripts = identify_js_files(enumerate_files(directory))
    logger.info(f"Unminifying {len(scripts)} script(s) in {directory}")

    await gather_bounded(
        (asyncio.to_thread(unminify_js, path) for path in scripts),
        max_concurrency,
    )
    return scripts
