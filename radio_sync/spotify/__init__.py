"""Public façade for the radio_sync.spotify package.

This module exposes the Spotify Web API integration: authentication and
token storage, catalog search, and playlist management helpers. Callers
should import these symbols from this façade instead of the internal
auth, search or playlists modules.
"""

from .api import spotify_headers, spotify_request
from .auth import (
    AuthSession,
    build_spotify_auth_url,
    exchange_code_for_token,
    get_current_user_id,
    load_spotify_token,
    refresh_spotify_token,
    run_local_login,
    save_spotify_token,
)
from .errors import SpotifyAPIError, SpotifyAuthError, SpotifyTokenMissing
from .playlists import (
    find_or_create_playlist,
    get_user_playlists,
    replace_playlist_tracks,
    set_playlist_description,
)
from .search import resolve_track, search_tracks

__all__ = [
    "spotify_headers",
    "spotify_request",
    "AuthSession",
    "build_spotify_auth_url",
    "exchange_code_for_token",
    "refresh_spotify_token",
    "load_spotify_token",
    "save_spotify_token",
    "run_local_login",
    "get_current_user_id",
    "SpotifyAPIError",
    "SpotifyAuthError",
    "SpotifyTokenMissing",
    "search_tracks",
    "resolve_track",
    "get_user_playlists",
    "find_or_create_playlist",
    "set_playlist_description",
    "replace_playlist_tracks",
]
