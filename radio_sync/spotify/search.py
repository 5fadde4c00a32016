from typing import Dict, List, Optional

from radio_sync.core import ResolvedTrack

from .api import spotify_request


def search_tracks(token_info: Dict, query: str, limit: int = 1) -> Dict:
    """
    Search the catalog for tracks.

    Returns {"total": int, "items": [...]} as found under "tracks" in the
    Web API response.
    """
    data = spotify_request(
        "GET",
        "/search",
        token_info,
        action=f"Searching for '{query}'",
        params={"q": query, "type": "track", "limit": limit},
    )
    tracks = (data or {}).get("tracks") or {}
    return {"total": tracks.get("total", 0), "items": tracks.get("items") or []}


def _to_resolved(item: Dict, query: str) -> ResolvedTrack:
    return ResolvedTrack(
        id=item["id"],
        name=item.get("name", ""),
        artist=", ".join(a.get("name", "") for a in item.get("artists", [])),
        query=query,
    )


def resolve_track(token_info: Dict, query: str) -> Optional[ResolvedTrack]:
    """First search result for `query`, or None when nothing matches."""
    result = search_tracks(token_info, query, limit=1)
    items: List[Dict] = [i for i in result["items"] if i and i.get("id")]
    if result["total"] < 1 or not items:
        return None
    return _to_resolved(items[0], query)
