"""Thin wrapper around requests for Spotify Web API calls.

Every call names the action it performs so failures reach the operator as
"<action> failed: <status> <message>" instead of a bare HTTPError.
"""

from typing import Any, Dict, Optional

import requests

from radio_sync.config import HTTP_TIMEOUT_SECONDS, SPOTIFY_API_BASE

from .errors import SpotifyAPIError


def spotify_headers(token_info: Dict) -> Dict:
    return {"Authorization": f"Bearer {token_info['access_token']}"}


def _error_message(r: requests.Response) -> str:
    try:
        payload = r.json()
    except ValueError:
        return f"{r.status_code} {r.reason}"
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        return f"{r.status_code} {error.get('message') or r.reason}"
    if error:
        return f"{r.status_code} {error}"
    return f"{r.status_code} {r.reason}"


def spotify_request(
    method: str,
    url: str,
    token_info: Dict,
    action: str,
    **kwargs: Any,
) -> Optional[Dict]:
    """
    Perform an authenticated request and return the decoded JSON body.

    `url` may be a path relative to the API base or a full URL (pagination
    "next" links). Returns None for empty bodies. Raises SpotifyAPIError.
    """
    if not url.startswith("http"):
        url = f"{SPOTIFY_API_BASE}{url}"
    kwargs.setdefault("timeout", HTTP_TIMEOUT_SECONDS)

    try:
        r = requests.request(
            method, url, headers=spotify_headers(token_info), **kwargs
        )
    except requests.RequestException as e:
        raise SpotifyAPIError(action, str(e)) from e

    if r.status_code >= 400:
        raise SpotifyAPIError(action, _error_message(r), status_code=r.status_code)

    if not r.content:
        return None
    try:
        return r.json()
    except ValueError:
        return None
