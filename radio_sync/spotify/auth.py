"""Spotify OAuth (authorization code flow) and token persistence.

The interactive login runs a one-shot local HTTP listener for the redirect.
The listener and the waiting caller share nothing but an AuthSession, which
carries the expected `state`, a single result slot and a bounded wait.
"""

import secrets
import threading
import time
import webbrowser
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Dict, Optional
from urllib.parse import parse_qs, urlencode, urlparse

import requests

from radio_sync.config import (
    AUTH_TIMEOUT_SECONDS,
    HTTP_TIMEOUT_SECONDS,
    SCOPES,
    SPOTIFY_AUTH_URL,
    SPOTIFY_CLIENT_ID,
    SPOTIFY_CLIENT_SECRET,
    SPOTIFY_REDIRECT_URI,
    SPOTIFY_TOKEN_FILE,
    SPOTIFY_TOKEN_URL,
)
from radio_sync.core import (
    log_info,
    log_step,
    log_success,
    log_warning,
    read_json,
    write_json,
)

from .api import spotify_request
from .errors import SpotifyAuthError, SpotifyTokenMissing

# Refresh this many seconds before the access token actually expires.
TOKEN_EXPIRY_MARGIN = 60


class AuthSession:
    """
    One pending interactive login.

    The callback side calls handle_callback() (or fail()/cancel()); the login
    side blocks in wait(). Only the first outcome is kept.
    """

    def __init__(self, state: Optional[str] = None):
        self.state = state or secrets.token_urlsafe(16)
        self.created_at = time.time()
        self._done = threading.Event()
        self._lock = threading.Lock()
        self._code: Optional[str] = None
        self._error: Optional[str] = None

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def _resolve(self, code: Optional[str] = None, error: Optional[str] = None) -> bool:
        with self._lock:
            if self._done.is_set():
                return False
            self._code = code
            self._error = error
            self._done.set()
            return True

    def is_expired(self, max_age: float, now: Optional[float] = None) -> bool:
        now = time.time() if now is None else now
        return now - self.created_at > max_age

    def deliver(self, code: str) -> bool:
        return self._resolve(code=code)

    def fail(self, reason: str) -> bool:
        return self._resolve(error=reason)

    def cancel(self) -> bool:
        return self._resolve(error="Authorization was cancelled.")

    def handle_callback(
        self,
        code: Optional[str],
        state: Optional[str],
        error: Optional[str] = None,
    ) -> str:
        """
        Validate the redirect parameters and record the outcome.

        Returns the authorization code, or raises SpotifyAuthError after
        recording the failure on the session.
        """
        if state != self.state:
            reason = f"State mismatch: {state!r} != {self.state!r}"
        elif error:
            reason = f"Spotify returned an error: {error}"
        elif not code:
            reason = "No authorization code in the callback."
        else:
            self.deliver(code)
            return code

        self.fail(reason)
        raise SpotifyAuthError(reason)

    def wait(self, timeout: Optional[float] = AUTH_TIMEOUT_SECONDS) -> str:
        if not self._done.wait(timeout):
            self.fail("Timed out waiting for Spotify authorization.")
        with self._lock:
            if self._error:
                raise SpotifyAuthError(self._error)
            return self._code or ""


def build_spotify_auth_url(state: str) -> str:
    params = {
        "response_type": "code",
        "redirect_uri": SPOTIFY_REDIRECT_URI,
        "scope": " ".join(SCOPES),
        "client_id": SPOTIFY_CLIENT_ID,
        "state": state,
    }
    return f"{SPOTIFY_AUTH_URL}?{urlencode(params)}"


def _post_token_request(data: Dict) -> Dict:
    if not (SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET):
        raise SpotifyAuthError(
            "SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET must be set."
        )
    try:
        r = requests.post(
            SPOTIFY_TOKEN_URL,
            data=data,
            auth=(SPOTIFY_CLIENT_ID, SPOTIFY_CLIENT_SECRET),
            timeout=HTTP_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        raise SpotifyAuthError(f"Token request failed: {e}") from e
    if r.status_code != 200:
        raise SpotifyAuthError(
            f"Token request rejected: {r.status_code} {r.text}",
            status_code=r.status_code,
        )

    token_info = r.json()
    token_info["timestamp"] = int(time.time())
    token_info["expires_at"] = token_info["timestamp"] + int(
        token_info.get("expires_in", 3600)
    )
    return token_info


def save_spotify_token(token_info: Dict, path: Optional[str] = None) -> None:
    write_json(path or SPOTIFY_TOKEN_FILE, token_info)


def exchange_code_for_token(code: str, path: Optional[str] = None) -> Dict:
    """Exchange an authorization code for tokens and persist them."""
    token_info = _post_token_request(
        {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": SPOTIFY_REDIRECT_URI,
        }
    )
    save_spotify_token(token_info, path)
    log_success("Spotify token stored.")
    return token_info


def refresh_spotify_token(refresh_token: str, path: Optional[str] = None) -> Dict:
    token_info = _post_token_request(
        {"grant_type": "refresh_token", "refresh_token": refresh_token}
    )
    # Spotify only sometimes rotates the refresh token.
    token_info.setdefault("refresh_token", refresh_token)
    save_spotify_token(token_info, path)
    return token_info


def load_spotify_token(path: Optional[str] = None) -> Dict:
    """
    Load the stored token, refreshing it when it is about to expire.

    Raises SpotifyTokenMissing if the file is absent or unreadable.
    """
    token_path = path or SPOTIFY_TOKEN_FILE
    errors = []
    token_info = read_json(token_path, default=None, on_error=errors.append)

    if errors:
        raise SpotifyTokenMissing(f"Token file {token_path} is corrupt: {errors[0]}")
    if not isinstance(token_info, dict) or not token_info.get("access_token"):
        raise SpotifyTokenMissing(
            f"No Spotify token at {token_path}. Run the login first."
        )

    expires_at = token_info.get("expires_at")
    if expires_at is None:
        expires_at = token_info.get("timestamp", 0) + token_info.get("expires_in", 3600)
    if time.time() > expires_at - TOKEN_EXPIRY_MARGIN:
        refresh_token = token_info.get("refresh_token")
        if not refresh_token:
            raise SpotifyTokenMissing("Stored token expired and cannot be refreshed.")
        log_step("Refreshing Spotify access token...")
        token_info = refresh_spotify_token(refresh_token, token_path)

    return token_info


def get_current_user_id(token_info: Dict) -> str:
    data = spotify_request("GET", "/me", token_info, action="Fetching current user")
    return data["id"]


class _CallbackHandler(BaseHTTPRequestHandler):
    """Handles the OAuth redirect for the AuthSession attached to the server."""

    def do_GET(self):
        parsed = urlparse(self.path)
        callback_path = urlparse(SPOTIFY_REDIRECT_URI).path or "/"
        if parsed.path != callback_path:
            log_info(f"Ignoring request for: {self.path}")
            self._reply(404, "<h1>Not found</h1>")
            return

        qs = parse_qs(parsed.query)
        session: AuthSession = self.server.auth_session
        try:
            session.handle_callback(
                code=qs.get("code", [None])[0],
                state=qs.get("state", [None])[0],
                error=qs.get("error", [None])[0],
            )
        except SpotifyAuthError as e:
            self._reply(403, f"<h1>Spotify authorization failed</h1><p>{e}</p>")
            return

        self._reply(
            200,
            "<h1>Login completed!</h1>"
            "<p>You can close this window and return to the terminal.</p>",
        )

    def _reply(self, status: int, body: str) -> None:
        self.send_response(status)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.end_headers()
        self.wfile.write(f"<html><body>{body}</body></html>".encode("utf-8"))

    def log_message(self, format, *args):
        return


def run_local_login(
    session: Optional[AuthSession] = None,
    timeout: Optional[float] = AUTH_TIMEOUT_SECONDS,
    open_browser: bool = True,
) -> Dict:
    """
    Interactive login: serve the redirect URI locally, send the user to
    Spotify, wait for the callback and store the resulting token.

    Raises SpotifyAuthError on timeout, cancellation or a rejected callback.
    """
    session = session or AuthSession()
    parsed = urlparse(SPOTIFY_REDIRECT_URI)
    host = parsed.hostname or "localhost"
    port = parsed.port or 8080

    httpd = HTTPServer((host, port), _CallbackHandler)
    httpd.auth_session = session
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()

    auth_url = build_spotify_auth_url(session.state)
    log_step("Please log in to Spotify by visiting the following page in your browser:")
    log_info(auth_url)
    if open_browser:
        try:
            webbrowser.open(auth_url)
        except webbrowser.Error as e:
            log_warning(f"Could not open a browser automatically ({e}).")

    try:
        code = session.wait(timeout)
    except KeyboardInterrupt:
        session.cancel()
        raise
    finally:
        httpd.shutdown()
        httpd.server_close()

    return exchange_code_for_token(code)
