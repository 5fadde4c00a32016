from typing import Dict, List, Optional

import pytest

from radio_sync.spotify import SpotifyAPIError


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        json_data=None,
        content: Optional[bytes] = None,
        reason: str = "OK",
    ):
        self.status_code = status_code
        self.reason = reason
        self._json = json_data
        if content is None:
            content = b"" if json_data is None else b"{}"
        self.content = content
        self.text = content.decode("utf-8", errors="replace")

    def json(self):
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json


class FakeSpotifyAPI:
    """In-memory stand-in for the Spotify Web API endpoints the app uses."""

    def __init__(self, user_id: str = "u1"):
        self.user_id = user_id
        self.playlists: List[Dict] = []
        self.tracks: Dict[str, List[str]] = {}
        self.descriptions: Dict[str, str] = {}
        self.catalog: Dict[str, List[Dict]] = {}
        self.failing_queries: set = set()
        self.calls: List[tuple] = []

    def add_track(self, query: str, track_id: str, name: str, artist: str) -> None:
        self.catalog.setdefault(query, []).append(
            {"id": track_id, "name": name, "artists": [{"name": artist}]}
        )

    def add_playlist(self, playlist_id: str, name: str, owner_id: Optional[str] = None):
        self.playlists.append(
            {"id": playlist_id, "name": name, "owner": {"id": owner_id or self.user_id}}
        )
        self.tracks.setdefault(playlist_id, [])

    def __call__(self, method, url, token_info, action, **kwargs):
        self.calls.append((method, url))
        params = kwargs.get("params") or {}
        body = kwargs.get("json") or {}

        if method == "GET" and url == "/me":
            return {"id": self.user_id}
        if method == "GET" and url == "/me/playlists":
            return {"items": list(self.playlists), "next": None}
        if method == "GET" and url == "/search":
            query = params["q"]
            if query in self.failing_queries:
                raise SpotifyAPIError(action, "500 Server error", status_code=500)
            items = self.catalog.get(query, [])
            return {"tracks": {"total": len(items), "items": items[: params["limit"]]}}
        if method == "POST" and url == f"/users/{self.user_id}/playlists":
            playlist_id = f"pl{len(self.playlists) + 1}"
            self.add_playlist(playlist_id, body["name"])
            self.descriptions[playlist_id] = body["description"]
            return {"id": playlist_id, "name": body["name"], "public": body["public"]}
        if url.startswith("/playlists/"):
            playlist_id = url.split("/")[2]
            if method == "PUT" and url.endswith("/tracks"):
                self.tracks[playlist_id] = list(body["uris"])
                return {"snapshot_id": "s1"}
            if method == "POST" and url.endswith("/tracks"):
                self.tracks[playlist_id].extend(body["uris"])
                return {"snapshot_id": "s2"}
            if method == "PUT":
                self.descriptions[playlist_id] = body["description"]
                return None
        raise AssertionError(f"Unexpected Spotify call: {method} {url}")


@pytest.fixture
def fake_spotify(monkeypatch) -> FakeSpotifyAPI:
    api = FakeSpotifyAPI()
    for module in (
        "radio_sync.spotify.auth",
        "radio_sync.spotify.search",
        "radio_sync.spotify.playlists",
    ):
        monkeypatch.setattr(f"{module}.spotify_request", api)
    return api


@pytest.fixture
def token_info() -> Dict:
    return {"access_token": "test-token"}
