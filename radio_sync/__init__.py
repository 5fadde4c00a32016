"""Sync a Spotify playlist with the track listing published on a BBC page."""

__version__ = "0.1.0"
