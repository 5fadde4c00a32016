"""Extraction of "Artist - Title" lines from the playlist article.

The BBC page publishes its listing as prose: one or more paragraphs inside
the article body, one track per line, lines separated by <br> elements.
Anything that does not look like "<text> - <text>" (headings, dates, blank
lines) is dropped.
"""

import re
from typing import Iterable, List

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Comment, NavigableString, Tag

from radio_sync.config import (
    HTTP_TIMEOUT_SECONDS,
    PROSE_SELECTOR,
    TRACK_LINE_MARKERS,
)
from radio_sync.core import ParseError, log_info, log_warning

from .fetch import fetch_playlist_page

TRACK_LINE_RE = re.compile(r"^.+ - .+$")


def parse_document(content: bytes | str) -> BeautifulSoup:
    """Parse the page into a BeautifulSoup tree, or raise ParseError."""
    try:
        doc = BeautifulSoup(content, "html.parser")
    except ParserRejectedMarkup as e:
        raise ParseError(f"Could not parse page as HTML: {e}") from e

    if doc.find() is None:
        raise ParseError("Page does not contain any HTML element.")
    return doc


def _strip_marker(text: str) -> str:
    for marker in TRACK_LINE_MARKERS:
        if marker in text:
            return text.replace(marker, "", 1)
    return text


def _paragraph_lines(paragraph: Tag) -> Iterable[str]:
    """Yield the text of a paragraph one <br>-delimited line at a time."""
    buffer: List[str] = []
    for node in paragraph.children:
        if isinstance(node, Tag) and node.name == "br":
            yield "".join(buffer)
            buffer = []
        elif isinstance(node, NavigableString) and not isinstance(node, Comment):
            buffer.append(str(node))
        elif isinstance(node, Tag):
            buffer.append(node.get_text())
    if buffer:
        yield "".join(buffer)


def _clean_line(text: str) -> str:
    # Source HTML wraps long lines; "Little Simz\n    - Venom" is one track.
    collapsed = " ".join(text.split())
    return _strip_marker(collapsed).strip()


def extract_track_lines(
    document: BeautifulSoup,
    selector: str = PROSE_SELECTOR,
) -> List[str]:
    """
    Return the candidate track lines of the article, in page order.

    An empty list is a valid result (nothing on the page looked like a track).
    """
    containers = document.select(selector)
    if not containers:
        log_warning(
            f"No element matches '{selector}'; the page layout may have changed."
        )
        return []

    lines: List[str] = []
    for container in containers:
        for paragraph in container.find_all("p"):
            for raw in _paragraph_lines(paragraph):
                line = _clean_line(raw)
                if TRACK_LINE_RE.match(line):
                    lines.append(line)

    log_info(f"{len(lines)} track lines found on the page.")
    return lines


def scrape_track_lines(url: str, timeout: float = HTTP_TIMEOUT_SECONDS) -> List[str]:
    content = fetch_playlist_page(url, timeout=timeout)
    return extract_track_lines(parse_document(content))
