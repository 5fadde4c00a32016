"""Top-level sync run.

run_sync() wires the stages together: scrape the page, build queries,
resolve them on Spotify, then reconcile the playlist. It is the only place
that decides which failures end the run; everything below it raises.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from radio_sync.config import PLAYLIST_NAME, PLAYLIST_PUBLIC, PLAYLIST_SOURCE_URL
from radio_sync.core import log_info, log_section, log_step, log_success
from radio_sync.scraper import build_track_queries, scrape_track_lines
from radio_sync.spotify import get_current_user_id, load_spotify_token

from .playlist_manager import resolve_queries, sync_playlist


@dataclass
class SyncOptions:
    source_url: str = PLAYLIST_SOURCE_URL
    playlist_name: str = PLAYLIST_NAME
    public: bool = PLAYLIST_PUBLIC
    # apply_changes:
    #   - True  => replace the playlist on Spotify
    #   - False => PREVIEW only (scrape + search, no write)
    apply_changes: bool = True
    token_info: Optional[Dict[str, Any]] = field(default=None, repr=False)


def run_sync(opts: SyncOptions) -> Dict[str, Any]:
    log_section("Radio playlist sync")

    token_info = opts.token_info or load_spotify_token()
    user_id = get_current_user_id(token_info)
    log_info(f"Authenticated as {user_id}.")

    log_section("Scraping track listing")
    lines = scrape_track_lines(opts.source_url)
    queries = build_track_queries(lines)
    log_info(f"{len(lines)} lines -> {len(queries)} search queries.")

    log_section("Searching Spotify")
    resolved, unmatched = resolve_queries(token_info, queries)
    track_ids = [t.id for t in resolved]

    playlist_id = None
    if opts.apply_changes:
        log_section("Syncing playlist")
        playlist_id = sync_playlist(
            token_info,
            user_id,
            opts.playlist_name,
            track_ids,
            public=opts.public,
        )
    else:
        log_info("Preview mode: no changes will be applied to Spotify.")

    return {
        "user_id": user_id,
        "playlist_name": opts.playlist_name,
        "playlist_id": playlist_id,
        "applied": opts.apply_changes,
        "lines": lines,
        "queries": queries,
        "resolved": resolved,
        "unmatched": unmatched,
    }


def run_sync_entrypoint(apply_changes: bool = True) -> Dict[str, Any]:
    """Run one sync with the configured source page and playlist."""
    log_step("Starting sync run...")
    result = run_sync(SyncOptions(apply_changes=apply_changes))
    log_success(
        f"Sync run finished: {len(result['resolved'])} tracks, "
        f"{len(result['unmatched'])} unmatched."
    )
    return result
