"""Public façade for the radio_sync.scraper package.

This module exposes the page fetch helper, the track line parser and the
query builder. Callers should import these from this façade instead of the
internal fetch, parser or queries modules.
"""

from .fetch import fetch_playlist_page
from .parser import extract_track_lines, parse_document, scrape_track_lines
from .queries import build_track_queries, expand_track_line, sanitize_track_line

__all__ = [
    "fetch_playlist_page",
    "parse_document",
    "extract_track_lines",
    "scrape_track_lines",
    "sanitize_track_line",
    "expand_track_line",
    "build_track_queries",
]
