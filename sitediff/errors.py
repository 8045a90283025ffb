"""Exceptions raised by sitediff.

File-system failures (missing, unreadable or unwritable files) are not wrapped:
they surface as the ``OSError`` raised by the operation that hit them.
"""


class SiteDiffError(Exception):
    """Base class for sitediff errors"""


class ConfigError(SiteDiffError):
    """Invalid or incomplete configuration"""


class MirrorError(SiteDiffError):
    """The mirroring tool failed with something other than HTTP 404s"""

    def __init__(self, message, output=""):
        super().__init__(message)
        self.output = output


class PublishError(SiteDiffError):
    """Uploading the HTML diff failed"""


class NotificationError(SiteDiffError):
    """Posting the chat notification failed"""
