from typing import Dict

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import HTMLResponse

from radio_sync.config import AUTH_TIMEOUT_SECONDS
from radio_sync.core import log_info
from radio_sync.spotify import (
    AuthSession,
    SpotifyAuthError,
    SpotifyTokenMissing,
    build_spotify_auth_url,
    exchange_code_for_token,
    load_spotify_token,
)

router = APIRouter()


def _sessions(request: Request) -> Dict[str, AuthSession]:
    """Pending logins, with abandoned ones failed and dropped."""
    sessions: Dict[str, AuthSession] = request.app.state.auth_sessions
    for state, session in list(sessions.items()):
        if session.is_expired(AUTH_TIMEOUT_SECONDS):
            session.fail("Login expired before Spotify redirected back.")
            del sessions[state]
            log_info(f"Dropped expired login session {state}.")
    return sessions


@router.get("/url")
def get_auth_url(request: Request) -> dict:
    """
    Start a login: returns the Spotify authorization URL for the front end.
    """
    session = AuthSession()
    _sessions(request)[session.state] = session
    return {"auth_url": build_spotify_auth_url(session.state), "state": session.state}


@router.get("/status")
def auth_status() -> dict:
    try:
        token_info = load_spotify_token()
    except SpotifyTokenMissing:
        return {"authenticated": False, "reason": "missing_token", "expires_at": None}
    except SpotifyAuthError as e:
        # Stored token expired and the refresh was refused or impossible.
        return {"authenticated": False, "reason": str(e), "expires_at": None}

    return {
        "authenticated": True,
        "reason": None,
        "expires_at": token_info.get("expires_at"),
    }


@router.get("/callback", response_class=HTMLResponse)
def auth_callback(
    request: Request,
    code: str | None = Query(default=None),
    state: str | None = Query(default=None),
    error: str | None = Query(default=None),
):
    """
    Spotify redirect target: exchange the code for a token and store it.
    """
    session = _sessions(request).pop(state or "", None)
    if session is None:
        raise HTTPException(status_code=400, detail="Unknown or expired login state.")

    try:
        auth_code = session.handle_callback(code=code, state=state, error=error)
        exchange_code_for_token(auth_code)
    except SpotifyAuthError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return """
    <html>
      <body>
        <h1>Spotify authorization complete ✅</h1>
        <p>You can close this window and return to the application.</p>
      </body>
    </html>
    """
