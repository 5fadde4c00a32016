from typing import List, Optional

from pydantic import BaseModel


class SyncRequest(BaseModel):
    apply_changes: bool = True


class SyncPreviewResponse(BaseModel):
    source_url: str
    lines: List[str]
    queries: List[str]


class ResolvedTrackInfo(BaseModel):
    id: str
    name: str
    artist: str
    query: str


class SyncResponse(BaseModel):
    status: str
    user_id: str
    playlist_name: str
    playlist_id: Optional[str] = None
    applied: bool
    lines_count: int
    queries_count: int
    tracks: List[ResolvedTrackInfo]
    unmatched: List[str]
