from dotenv import load_dotenv
import os

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Base & cache directories
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CACHE_DIR = os.path.join(BASE_DIR, "cache")

# Spotify credentials (REQUIRED for login / token refresh)
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET")
SPOTIFY_REDIRECT_URI = os.getenv(
    "SPOTIFY_REDIRECT_URI", "http://localhost:8080/callback"
)
SPOTIFY_TOKEN_FILE = os.getenv(
    "SPOTIFY_TOKEN_FILE", os.path.join(CACHE_DIR, "spotify_token.json")
)

# Spotify API constants
SPOTIFY_AUTH_URL = "https://accounts.spotify.com/authorize"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_API_BASE = "https://api.spotify.com/v1"

SCOPES = [
    "user-read-private",
    "playlist-read-private",
    "playlist-modify-private",
    "playlist-modify-public",
]

# Source page
PLAYLIST_SOURCE_URL = os.getenv(
    "PLAYLIST_SOURCE_URL",
    "https://www.bbc.co.uk/programmes/articles/2sgpCPqVPgjqC7tHBb97kd9/the-1xtra-playlist",
)
PROSE_SELECTOR = ".prog-layout .text--prose"
# "↑ " marks climbers on the page; the second form is how it reads when the
# page bytes are decoded as latin-1.
TRACK_LINE_MARKERS = ("↑ ", "â†‘ ")
USER_AGENT = os.getenv("USER_AGENT", "radio-playlist-sync/0.1")

# Target playlist
PLAYLIST_NAME = os.getenv("PLAYLIST_NAME", "BBC 1xtra badman ting")
PLAYLIST_PUBLIC = _env_bool("PLAYLIST_PUBLIC", True)
PLAYLIST_DESCRIPTION_PREFIX = "Automatically scraped from the BBC website"

# Timeouts (seconds)
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))
AUTH_TIMEOUT_SECONDS = float(os.getenv("AUTH_TIMEOUT_SECONDS", "180"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
