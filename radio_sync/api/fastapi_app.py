from fastapi import FastAPI

from radio_sync import __version__
from radio_sync.api.auth.routes import router as auth_router
from radio_sync.api.health import router as health_router
from radio_sync.api.sync.routes import router as sync_router
from radio_sync.core import configure_logging

configure_logging()

app = FastAPI(
    title="Radio Playlist Sync API",
    version=__version__,
    description="Sync a Spotify playlist with the BBC 1Xtra playlist page.",
)
# Pending interactive logins, keyed by OAuth state.
app.state.auth_sessions = {}

app.include_router(health_router, tags=["health"])
app.include_router(sync_router, prefix="/sync", tags=["sync"])
app.include_router(auth_router, prefix="/auth", tags=["auth"])
