"""Resolution of search queries and reconciliation of the target playlist.

The target playlist always ends up holding exactly the tracks resolved in
this run, in listing order: it is looked up by name (or created), its
description is stamped with the sync time, and its track list is replaced
wholesale.
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from radio_sync.config import PLAYLIST_DESCRIPTION_PREFIX
from radio_sync.core import (
    ResolvedTrack,
    log_info,
    log_progress,
    log_step,
    log_success,
    log_warning,
)
from radio_sync.spotify import (
    SpotifyAPIError,
    find_or_create_playlist,
    get_user_playlists,
    replace_playlist_tracks,
    resolve_track,
    set_playlist_description,
)


def resolve_queries(
    token_info: Dict, queries: List[str]
) -> Tuple[List[ResolvedTrack], List[str]]:
    """
    Resolve each query to its first search result, sequentially.

    Queries with no result, or whose search request fails, are skipped and
    returned in the second list; they never abort the run.
    """
    resolved: List[ResolvedTrack] = []
    unmatched: List[str] = []
    total = len(queries)

    for idx, query in enumerate(queries, start=1):
        try:
            track = resolve_track(token_info, query)
        except SpotifyAPIError as e:
            log_warning(f"Search failed, skipping '{query}': {e}")
            unmatched.append(query)
            continue

        if track is None:
            log_warning(f"Couldn't find query: '{query}'")
            unmatched.append(query)
        else:
            log_info(f"  '{query}' -> {track.artist} – {track.name} [{track.id}]")
            resolved.append(track)

        if idx % 10 == 0 or idx == total:
            log_progress(idx, total, prefix="  Searching")

    log_info(f"{len(resolved)}/{total} queries resolved.")
    return resolved, unmatched


def build_description(now: Optional[datetime] = None) -> str:
    now = now or datetime.now().astimezone()
    return f"{PLAYLIST_DESCRIPTION_PREFIX} - {now.isoformat(timespec='seconds')}"


def sync_playlist(
    token_info: Dict,
    user_id: str,
    playlist_name: str,
    track_ids: List[str],
    public: bool = True,
    now: Optional[datetime] = None,
) -> str:
    """
    Make `playlist_name` contain exactly `track_ids` and return its id.

    Any Spotify failure here propagates: a half-updated playlist is not
    retried.
    """
    log_step(f"Looking up playlist '{playlist_name}'...")
    playlists_existing = get_user_playlists(token_info)
    playlist_id = find_or_create_playlist(
        token_info,
        user_id,
        playlist_name,
        playlists_existing,
        public=public,
        description=PLAYLIST_DESCRIPTION_PREFIX,
    )

    set_playlist_description(token_info, playlist_id, build_description(now))

    log_step(f"Replacing playlist contents with {len(track_ids)} tracks...")
    replace_playlist_tracks(token_info, playlist_id, track_ids)

    log_success(f"Playlist '{playlist_name}' synchronized ({len(track_ids)} tracks).")
    return playlist_id
