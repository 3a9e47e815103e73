"""Configuration: env, database path, Spotify credentials."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of digicache package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so SPOTIFY_CLIENT_ID etc. are set (real env vars win)
load_dotenv(BASE_DIR / ".env")
DATA_DIR = BASE_DIR / "data"

# API
API_HOST = os.getenv("DIGICACHE_HOST", "0.0.0.0")
API_PORT = int(os.getenv("PORT", "8080"))
LOG_LEVEL = os.getenv("DIGICACHE_LOG_LEVEL", "INFO").upper()

# Storage
DB_PATH = Path(os.getenv("DIGICACHE_DB_PATH", str(DATA_DIR / "digicache.db")))

# Spotify (client-credentials grant; no user login)
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID", "")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET", "")
SPOTIFY_REQUESTS_TIMEOUT = float(os.getenv("SPOTIFY_REQUESTS_TIMEOUT", "10"))

# Text notes
TEXT_MAX_LENGTH = 500


def require_spotify_credentials() -> tuple[str, str]:
    """Return (client_id, client_secret) or raise if either is missing."""
    if not SPOTIFY_CLIENT_ID or not SPOTIFY_CLIENT_SECRET:
        raise RuntimeError(
            "Spotify credentials not found! Set SPOTIFY_CLIENT_ID and "
            "SPOTIFY_CLIENT_SECRET in the environment or in .env."
        )
    return SPOTIFY_CLIENT_ID, SPOTIFY_CLIENT_SECRET
