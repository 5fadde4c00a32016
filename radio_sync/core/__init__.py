"""Public façade for the radio_sync.core package.

This module exposes logging helpers, JSON file utilities, the shared models
and the error hierarchy. Other packages should import these cross-cutting
concerns from this façade instead of the internal submodules.
"""

from .errors import CollaboratorError, FetchError, ParseError, SyncError
from .fs_utils import read_json, write_json
from .logging_config import configure_logging
from .logging_utils import (
    log_error,
    log_info,
    log_progress,
    log_section,
    log_step,
    log_success,
    log_warning,
)
from .models import ResolvedTrack

__all__ = [
    "configure_logging",
    "log_section",
    "log_info",
    "log_step",
    "log_success",
    "log_warning",
    "log_error",
    "log_progress",
    "write_json",
    "read_json",
    "ResolvedTrack",
    "SyncError",
    "FetchError",
    "ParseError",
    "CollaboratorError",
]
