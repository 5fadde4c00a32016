"""Public façade for the radio_sync.pipeline package.

This module exposes query resolution, playlist reconciliation and the
top-level sync run. Other packages should import pipeline behaviour from
this façade instead of the internal submodules.
"""

from .orchestration import SyncOptions, run_sync, run_sync_entrypoint
from .playlist_manager import build_description, resolve_queries, sync_playlist

__all__ = [
    "SyncOptions",
    "run_sync",
    "run_sync_entrypoint",
    "resolve_queries",
    "build_description",
    "sync_playlist",
]
