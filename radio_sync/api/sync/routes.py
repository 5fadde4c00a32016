from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from radio_sync.config import PLAYLIST_SOURCE_URL
from radio_sync.core import FetchError, ParseError, SyncError, log_error
from radio_sync.pipeline import SyncOptions, run_sync
from radio_sync.scraper import build_track_queries, scrape_track_lines
from radio_sync.spotify import SpotifyTokenMissing

from .schemas import ResolvedTrackInfo, SyncPreviewResponse, SyncRequest, SyncResponse

router = APIRouter()


@router.get("/preview", response_model=SyncPreviewResponse)
def preview_sync() -> SyncPreviewResponse:
    """
    Scrape the source page and show the queries that would be searched.
    No Spotify call is made.
    """
    try:
        lines = scrape_track_lines(PLAYLIST_SOURCE_URL)
    except (FetchError, ParseError) as e:
        raise HTTPException(status_code=502, detail=str(e))

    return SyncPreviewResponse(
        source_url=PLAYLIST_SOURCE_URL,
        lines=lines,
        queries=build_track_queries(lines),
    )


@router.post("", response_model=SyncResponse)
def run_sync_endpoint(body: SyncRequest) -> SyncResponse:
    try:
        result = run_sync(SyncOptions(apply_changes=body.apply_changes))
    except SpotifyTokenMissing as e:
        raise HTTPException(
            status_code=401,
            detail={
                "status": "unauthenticated",
                "message": str(e),
                "login_url": "/auth/url",
            },
        )
    except SyncError as e:
        log_error(str(e))
        raise HTTPException(status_code=502, detail=str(e))

    return SyncResponse(
        status="done",
        user_id=result["user_id"],
        playlist_name=result["playlist_name"],
        playlist_id=result["playlist_id"],
        applied=result["applied"],
        lines_count=len(result["lines"]),
        queries_count=len(result["queries"]),
        tracks=[ResolvedTrackInfo(**asdict(t)) for t in result["resolved"]],
        unmatched=result["unmatched"],
    )
