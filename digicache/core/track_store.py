"""Persist Spotify track snapshots per box (SQLite)."""
import logging
from typing import Any, List

from digicache.core.catalog_client import CatalogClient
from digicache.core.database import SQLITE_MAX_INT, SQLITE_MIN_INT, Database, now_iso
from digicache.core.errors import CatalogShapeError, NotFoundError
from digicache.models.track import Track

logger = logging.getLogger(__name__)


def _required(obj: Any, *path: Any) -> Any:
    """Walk dict keys / list indexes; raise CatalogShapeError if any step is missing."""
    dotted = ".".join(str(p) for p in path)
    value = obj
    for step in path:
        try:
            value = value[step]
        except (KeyError, IndexError, TypeError) as e:
            raise CatalogShapeError(f"Spotify track is missing '{dotted}'") from e
    if value is None:
        raise CatalogShapeError(f"Spotify track has null '{dotted}'")
    return value


def track_fields(track: dict) -> dict:
    """Extract the columns we keep from a Spotify track object."""
    return {
        "name": _required(track, "name"),
        "artist": _required(track, "artists", 0, "name"),
        "album": _required(track, "album", "name"),
        "album_cover_url": _required(track, "album", "images", 0, "url"),
        "preview_url": track.get("preview_url"),
        "spotify_url": _required(track, "external_urls", "spotify"),
    }


def _row_to_track(r) -> Track:
    return Track(
        id=r["id"],
        box_id=r["box_id"],
        spotify_id=r["spotify_id"],
        name=r["name"],
        artist=r["artist"],
        album=r["album"],
        album_cover_url=r["album_cover_url"],
        preview_url=r["preview_url"],
        spotify_url=r["spotify_url"],
        created_at=r["created_at"],
    )


class TrackStore:
    def __init__(self, db: Database, catalog: CatalogClient) -> None:
        self._db = db
        self._catalog = catalog

    def save_track(self, box_id: str, spotify_id: str) -> Track:
        """Fetch the track from Spotify and snapshot it into box_id."""
        fields = track_fields(self._catalog.get_by_id(spotify_id))
        created_at = now_iso()
        cur = self._db.execute(
            "INSERT INTO spotify_songs (box_id, spotify_id, name, artist, album, "
            "album_cover_url, preview_url, spotify_url, created_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                box_id,
                spotify_id,
                fields["name"],
                fields["artist"],
                fields["album"],
                fields["album_cover_url"],
                fields["preview_url"],
                fields["spotify_url"],
                created_at,
            ),
        )
        logger.info("Saved song %s (%s) in box %s", spotify_id, fields["name"], box_id)
        return Track(id=cur.lastrowid, box_id=box_id, spotify_id=spotify_id, created_at=created_at, **fields)

    def list_tracks(self, box_id: str) -> List[Track]:
        """Tracks of box_id, newest first."""
        rows = self._db.fetchall(
            "SELECT * FROM spotify_songs WHERE box_id = ? ORDER BY created_at DESC, id DESC",
            (box_id,),
        )
        return [_row_to_track(r) for r in rows]

    def delete_track(self, track_id: int) -> None:
        if not SQLITE_MIN_INT <= track_id <= SQLITE_MAX_INT:
            raise NotFoundError("Song not found")
        cur = self._db.execute("DELETE FROM spotify_songs WHERE id = ?", (track_id,))
        if cur.rowcount == 0:
            raise NotFoundError("Song not found")
        logger.info("Deleted song %d", track_id)
