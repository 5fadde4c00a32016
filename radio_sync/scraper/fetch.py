import requests

from radio_sync.config import HTTP_TIMEOUT_SECONDS, USER_AGENT
from radio_sync.core import FetchError, log_step


def fetch_playlist_page(url: str, timeout: float = HTTP_TIMEOUT_SECONDS) -> bytes:
    """
    Download the page holding the track listing and return its raw bytes.

    Raises FetchError on transport errors and on any status other than 200.
    An empty listing is not an error here; that is decided after parsing.
    """
    log_step(f"Fetching playlist page: {url}")
    try:
        r = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
    except requests.RequestException as e:
        raise FetchError(url, str(e)) from e

    if r.status_code != 200:
        raise FetchError(
            url,
            f"status code error: {r.status_code} {r.reason}",
            status_code=r.status_code,
        )
    return r.content
