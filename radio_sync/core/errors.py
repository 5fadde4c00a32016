"""Error hierarchy shared by the scraper, Spotify and pipeline packages.

Helpers raise these; only the top-level entrypoints decide whether an error
ends the run.
"""

from typing import Optional


class SyncError(Exception):
    """Base class for every error raised while syncing a playlist."""


class FetchError(SyncError):
    """The source page could not be retrieved (transport error or non-200)."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(f"Failed to fetch {url}: {message}")


class ParseError(SyncError):
    """The source page could not be parsed as HTML."""


class CollaboratorError(SyncError):
    """A call to the streaming service failed."""

    def __init__(self, action: str, message: str, status_code: Optional[int] = None):
        self.action = action
        self.status_code = status_code
        super().__init__(f"{action} failed: {message}")
