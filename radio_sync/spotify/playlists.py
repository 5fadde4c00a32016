from typing import Dict, List, Optional

from radio_sync.config import PLAYLIST_DESCRIPTION_PREFIX
from radio_sync.core import log_info, log_success

from .api import spotify_request

# Web API limit for track URIs per request.
MAX_TRACKS_PER_REQUEST = 100


def get_user_playlists(token_info: Dict) -> List[Dict]:
    """All playlists of the current user, following pagination."""
    playlists: List[Dict] = []
    url: Optional[str] = "/me/playlists"
    params: Optional[Dict] = {"limit": 50}

    while url:
        data = spotify_request(
            "GET", url, token_info, action="Listing playlists", params=params
        )
        playlists.extend(p for p in data.get("items", []) if p)
        url = data.get("next")
        params = None  # next URL already includes params

    log_info(f"{len(playlists)} playlists found.")
    return playlists


def _find_owned_playlist(
    playlists: List[Dict], user_id: str, name: str
) -> Optional[Dict]:
    for p in playlists:
        owner_id = (p.get("owner") or {}).get("id")
        if p.get("name") == name and owner_id in (None, user_id):
            return p
    return None


def find_or_create_playlist(
    token_info: Dict,
    user_id: str,
    name: str,
    existing_playlists: List[Dict],
    public: bool = True,
    description: str = PLAYLIST_DESCRIPTION_PREFIX,
) -> str:
    """
    Return the id of the user's playlist called `name`, creating it if needed.

    The name match is exact and case-sensitive. A created playlist is appended
    to `existing_playlists` so later lookups in the same run reuse it.
    """
    playlist = _find_owned_playlist(existing_playlists, user_id, name)
    if playlist:
        log_info(f"Using existing playlist '{name}' ({playlist['id']}).")
        return playlist["id"]

    playlist = spotify_request(
        "POST",
        f"/users/{user_id}/playlists",
        token_info,
        action=f"Creating playlist '{name}'",
        json={"name": name, "public": public, "description": description},
    )
    existing_playlists.append(playlist)
    log_success(f"Playlist created: {name}")
    return playlist["id"]


def set_playlist_description(token_info: Dict, playlist_id: str, text: str) -> None:
    spotify_request(
        "PUT",
        f"/playlists/{playlist_id}",
        token_info,
        action=f"Updating description of playlist {playlist_id}",
        json={"description": text},
    )


def replace_playlist_tracks(
    token_info: Dict, playlist_id: str, track_ids: List[str]
) -> None:
    """
    Replace the playlist contents with `track_ids`, in order.

    The first request replaces everything (an empty list clears the playlist).
    The API takes at most 100 URIs per request, so any remainder is appended
    in order afterwards.
    """
    uris = [f"spotify:track:{tid}" for tid in track_ids]
    url = f"/playlists/{playlist_id}/tracks"
    action = f"Replacing tracks of playlist {playlist_id}"

    spotify_request(
        "PUT",
        url,
        token_info,
        action=action,
        json={"uris": uris[:MAX_TRACKS_PER_REQUEST]},
    )
    for i in range(MAX_TRACKS_PER_REQUEST, len(uris), MAX_TRACKS_PER_REQUEST):
        batch = uris[i : i + MAX_TRACKS_PER_REQUEST]
        spotify_request("POST", url, token_info, action=action, json={"uris": batch})
