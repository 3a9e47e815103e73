"""Track snapshot and catalog token."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class Track:
    """Spotify track metadata as it was when saved into a box."""
    id: int
    box_id: str
    spotify_id: str
    name: str
    artist: str
    album: str
    album_cover_url: str
    preview_url: Optional[str]  # Spotify returns null for many tracks
    spotify_url: str
    created_at: Optional[str]


@dataclass(frozen=True)
class CatalogToken:
    """In-memory client-credentials access token."""
    access_token: str
    acquired_at: float  # time.time()
