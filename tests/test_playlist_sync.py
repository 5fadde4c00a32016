from datetime import datetime, timedelta, timezone

import pytest

from radio_sync.pipeline import (
    SyncOptions,
    build_description,
    resolve_queries,
    run_sync,
    sync_playlist,
)
from radio_sync.spotify import SpotifyAPIError

PLAYLIST = "BBC 1xtra badman ting"


def _patch_scrape(monkeypatch, lines):
    monkeypatch.setattr(
        "radio_sync.pipeline.orchestration.scrape_track_lines", lambda url: list(lines)
    )


def _options(token_info, **kwargs) -> SyncOptions:
    return SyncOptions(
        source_url="https://example.org/playlist",
        playlist_name=PLAYLIST,
        public=True,
        token_info=token_info,
        **kwargs,
    )


def test_resolve_queries_skips_zero_results_and_failures(fake_spotify, token_info) -> None:
    fake_spotify.add_track("Kano - Clash", "k1", "Clash", "Kano")
    fake_spotify.add_track("Dave - Starlight", "d1", "Starlight", "Dave")
    fake_spotify.failing_queries.add("Broken - Query")

    resolved, unmatched = resolve_queries(
        token_info,
        ["Kano - Clash", "Missing - Track", "Broken - Query", "Dave - Starlight"],
    )

    assert [t.id for t in resolved] == ["k1", "d1"]
    assert unmatched == ["Missing - Track", "Broken - Query"]


def test_run_sync_creates_playlist_and_replaces_tracks(
    fake_spotify, token_info, monkeypatch
) -> None:
    _patch_scrape(
        monkeypatch, ["Stormzy ft Dave - Clash", "Kano - Teardrops/Pan-Fried"]
    )
    fake_spotify.add_track("Stormzy Dave - Clash", "s1", "Clash", "Stormzy")
    fake_spotify.add_track("Kano - Teardrops", "k1", "Teardrops", "Kano")
    fake_spotify.add_track("Kano - Pan-Fried", "k2", "Pan-Fried", "Kano")

    result = run_sync(_options(token_info))

    playlist_id = result["playlist_id"]
    assert result["user_id"] == "u1"
    assert result["queries"] == [
        "Stormzy Dave - Clash",
        "Kano - Teardrops",
        "Kano - Pan-Fried",
    ]
    assert [p["name"] for p in fake_spotify.playlists] == [PLAYLIST]
    assert fake_spotify.tracks[playlist_id] == [
        "spotify:track:s1",
        "spotify:track:k1",
        "spotify:track:k2",
    ]
    assert fake_spotify.descriptions[playlist_id].startswith(
        "Automatically scraped from the BBC website - "
    )


def test_run_sync_with_no_track_lines_empties_playlist(
    fake_spotify, token_info, monkeypatch
) -> None:
    fake_spotify.add_playlist("existing", PLAYLIST)
    fake_spotify.tracks["existing"] = ["spotify:track:old1", "spotify:track:old2"]
    _patch_scrape(monkeypatch, [])

    result = run_sync(_options(token_info))

    assert result["playlist_id"] == "existing"
    assert result["resolved"] == []
    assert fake_spotify.tracks["existing"] == []


def test_run_sync_continues_past_unmatched_query(
    fake_spotify, token_info, monkeypatch
) -> None:
    _patch_scrape(monkeypatch, ["Unknown - Nobody", "Kano - Clash"])
    fake_spotify.add_track("Kano - Clash", "k1", "Clash", "Kano")

    result = run_sync(_options(token_info))

    assert result["unmatched"] == ["Unknown - Nobody"]
    assert fake_spotify.tracks[result["playlist_id"]] == ["spotify:track:k1"]


def test_run_sync_twice_is_idempotent(fake_spotify, token_info, monkeypatch) -> None:
    _patch_scrape(monkeypatch, ["Kano - Clash", "Dave - Starlight"])
    fake_spotify.add_track("Kano - Clash", "k1", "Clash", "Kano")
    fake_spotify.add_track("Dave - Starlight", "d1", "Starlight", "Dave")

    first = run_sync(_options(token_info))
    tracks_after_first = list(fake_spotify.tracks[first["playlist_id"]])
    second = run_sync(_options(token_info))

    assert first["playlist_id"] == second["playlist_id"]
    assert len(fake_spotify.playlists) == 1
    assert fake_spotify.tracks[second["playlist_id"]] == tracks_after_first


def test_run_sync_preview_does_not_touch_playlist(
    fake_spotify, token_info, monkeypatch
) -> None:
    _patch_scrape(monkeypatch, ["Kano - Clash"])
    fake_spotify.add_track("Kano - Clash", "k1", "Clash", "Kano")

    result = run_sync(_options(token_info, apply_changes=False))

    assert result["applied"] is False
    assert result["playlist_id"] is None
    assert [t.id for t in result["resolved"]] == ["k1"]
    assert fake_spotify.playlists == []
    assert not any(method in ("PUT", "POST") for method, _ in fake_spotify.calls)


def test_sync_playlist_updates_description_each_run(fake_spotify, token_info) -> None:
    first_time = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
    second_time = first_time + timedelta(days=7)

    playlist_id = sync_playlist(token_info, "u1", PLAYLIST, ["k1"], now=first_time)
    first_description = fake_spotify.descriptions[playlist_id]
    sync_playlist(token_info, "u1", PLAYLIST, ["k1"], now=second_time)

    assert first_description == (
        "Automatically scraped from the BBC website - 2024-06-01T12:00:00+00:00"
    )
    assert fake_spotify.descriptions[playlist_id] != first_description
    assert fake_spotify.tracks[playlist_id] == ["spotify:track:k1"]


def test_build_description_is_rfc3339() -> None:
    text = build_description()
    stamp = text.rsplit(" - ", 1)[1]

    parsed = datetime.fromisoformat(stamp)
    assert parsed.tzinfo is not None


def test_replace_failure_propagates(fake_spotify, token_info, monkeypatch) -> None:
    _patch_scrape(monkeypatch, ["Kano - Clash"])
    fake_spotify.add_track("Kano - Clash", "k1", "Clash", "Kano")

    def failing_replace(token_info, playlist_id, track_ids):
        raise SpotifyAPIError("Replacing tracks", "502 Bad Gateway", status_code=502)

    monkeypatch.setattr(
        "radio_sync.pipeline.playlist_manager.replace_playlist_tracks", failing_replace
    )

    with pytest.raises(SpotifyAPIError, match="Replacing tracks"):
        run_sync(_options(token_info))


def test_user_lookup_failure_aborts_before_scraping(token_info, monkeypatch) -> None:
    def failing_user(token_info):
        raise SpotifyAPIError("Fetching current user", "401 Unauthorized", 401)

    def unexpected_scrape(url):
        raise AssertionError("page should not be fetched")

    monkeypatch.setattr(
        "radio_sync.pipeline.orchestration.get_current_user_id", failing_user
    )
    monkeypatch.setattr(
        "radio_sync.pipeline.orchestration.scrape_track_lines", unexpected_scrape
    )

    with pytest.raises(SpotifyAPIError):
        run_sync(_options(token_info))
