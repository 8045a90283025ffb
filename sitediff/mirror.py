"""Capturing a site with wget."""

import asyncio
import logging
import shutil

from .errors import MirrorError

logger = logging.getLogger(__name__)

# wget's own server-error lines look like "... ERROR 404: Not Found."
_ERROR_MARKER = 'ERROR '


def build_wget_command(url, target_dir, wget='wget'):
    return [
        wget,
        '--mirror',
        '--page-requisites',
        '--no-parent',
        '--reject-regex', '.*b[TXT|CSV|JSON|lobEnc].*',
        '--random-wait',
        '-e', 'robots=off',
        '-P', str(target_dir),
        '--no-host-directories',
        url,
    ]


def parse_http_error_codes(output):
    """HTTP status codes wget reported as errors, in the order they appear"""
    codes = []
    for line in output.split('\n'):
        if _ERROR_MARKER in line:
            codes.append(line.split(_ERROR_MARKER, 1)[1].split(':')[0])
    return codes


def only_not_found(codes):
    return bool(codes) and all(code == '404' for code in codes)


class WgetMirror:
    """Recursive site copy via the ``wget`` binary"""

    def __init__(self, wget='wget'):
        self.wget = wget

    async def clone(self, url, target_dir):
        """Mirror ``url`` into ``target_dir`` and return wget's output.

        A failed run still counts as a capture when every error wget reported
        was a 404; anything else raises MirrorError.
        """
        if not shutil.which(self.wget):
            raise MirrorError(f"executable not found: {self.wget}")

        command = build_wget_command(url, target_dir, self.wget)
        logger.info(f"Mirroring {url} into {target_dir}")

        proc = await asyncio.create_subprocess_exec(
            *command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
        stdout, _ = await proc.communicate()
        output = stdout.decode(errors='replace') if stdout else ''

        if proc.returncode == 0:
            return output

        if not only_not_found(parse_http_error_codes(output)):
            logger.error(f"wget failed for {url}:\n{output}")
            raise MirrorError(
                f"wget exited with status {proc.returncode} for {url}:\n{output.strip()}",
                output=output,
            )

        logger.warning("wget encountered errors, but they were all 404")
        return output
