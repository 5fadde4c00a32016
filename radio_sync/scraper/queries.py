"""Turn scraped track lines into Spotify search queries.

Spotify search matches tokens exactly, so collaboration connectors such as
"ft" or "&" make a query miss even when the track is in the catalog. Lines
listing several titles for one artist ("Artist - A/B") are expanded into one
query per title.
"""

from typing import Iterable, List

# Order matters: later replacements must not re-match text produced earlier.
COLLAB_CONNECTORS = (" featuring ", " ft ", " x ", " & ")


def sanitize_track_line(line: str) -> str:
    # A single pass leaves " ft " behind in "A ft ft B"; every pass shortens
    # the line, so this terminates.
    while any(connector in line for connector in COLLAB_CONNECTORS):
        for connector in COLLAB_CONNECTORS:
            line = line.replace(connector, " ")
    return line


def expand_track_line(line: str) -> List[str]:
    """
    Split a multi-track line into one "<artist> - <title>" query per title.

    One query is emitted per "/" segment, empty segments included. The
    artist is everything before the first "-", so an artist name that
    itself contains a hyphen is split in the wrong place. Lines without "/"
    (or without any "-") are returned unchanged.
    """
    if "/" not in line or "-" not in line:
        return [line]

    artist, remainder = line.split("-", 1)
    artist = artist.strip()
    return [f"{artist} - {title.strip()}" for title in remainder.split("/")]


def build_track_queries(lines: Iterable[str]) -> List[str]:
    queries: List[str] = []
    for line in lines:
        queries.extend(expand_track_line(sanitize_track_line(line)))
    return queries
