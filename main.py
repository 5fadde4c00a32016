import sys

from radio_sync.config import SPOTIFY_CLIENT_ID, SPOTIFY_CLIENT_SECRET
from radio_sync.core import (
    SyncError,
    configure_logging,
    log_error,
    log_info,
    log_section,
    log_success,
    log_warning,
)
from radio_sync.pipeline import run_sync_entrypoint
from radio_sync.spotify import run_local_login


def main(login: bool = False, apply_changes: bool = True) -> int:
    configure_logging()

    try:
        if login:
            if not (SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET):
                log_error(
                    "Please set SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET in the .env file."
                )
                return 1
            log_section("Spotify login")
            run_local_login()

        result = run_sync_entrypoint(apply_changes=apply_changes)
    except SyncError as e:
        log_error(str(e))
        return 1

    if result["unmatched"]:
        log_warning(f"{len(result['unmatched'])} queries had no match on Spotify:")
        for query in result["unmatched"]:
            log_info(f"  - {query}")

    if result["applied"]:
        log_success("Synchronization complete!")
    return 0


if __name__ == "__main__":
    sys.exit(
        main(
            login="--login" in sys.argv,
            apply_changes="--preview" not in sys.argv,
        )
    )
