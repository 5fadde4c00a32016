from typing import Optional

from radio_sync.core import CollaboratorError


class SpotifyAPIError(CollaboratorError):
    """A Spotify Web API request failed or returned an error status."""


class SpotifyAuthError(CollaboratorError):
    """The OAuth authorization flow could not be completed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__("Spotify authorization", message, status_code=status_code)


class SpotifyTokenMissing(SpotifyAuthError):
    """No usable Spotify token is stored on disk."""
