"""Shared application state (injected into routes)."""
import threading
from pathlib import Path
from typing import Optional

from digicache.config import DB_PATH, SPOTIFY_REQUESTS_TIMEOUT, require_spotify_credentials
from digicache.core.box_registry import BoxRegistry
from digicache.core.catalog_client import CatalogClient
from digicache.core.database import Database
from digicache.core.image_store import ImageStore
from digicache.core.text_store import TextStore
from digicache.core.track_store import TrackStore


class AppState:
    """One database handle and one catalog client, shared by every request."""

    def __init__(self, db: Database, catalog: CatalogClient) -> None:
        self.db = db
        self.catalog = catalog
        self.boxes = BoxRegistry(db)
        self.images = ImageStore(db)
        self.texts = TextStore(db)
        self.tracks = TrackStore(db, catalog)

    @classmethod
    def from_config(cls, db_path: Optional[Path] = None) -> "AppState":
        """Build from env/.env settings; raises if Spotify credentials are missing."""
        client_id, client_secret = require_spotify_credentials()
        catalog = CatalogClient(
            client_id, client_secret, requests_timeout=SPOTIFY_REQUESTS_TIMEOUT
        )
        return cls(Database(db_path or DB_PATH), catalog)

    def close(self) -> None:
        self.db.close()


_state: Optional[AppState] = None
_state_lock = threading.Lock()


def get_state() -> AppState:
    global _state
    with _state_lock:
        if _state is None:
            _state = AppState.from_config()
        return _state


def reset_state() -> None:
    """Close and forget the shared state (app shutdown)."""
    global _state
    with _state_lock:
        if _state is not None:
            _state.close()
        _state = None
