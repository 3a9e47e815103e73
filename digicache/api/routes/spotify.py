"""Spotify search/lookup passthrough and per-box saved songs."""
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from digicache.api.state import AppState, get_state
from digicache.core.catalog_client import DEFAULT_SEARCH_LIMIT
from digicache.models.track import Track

router = APIRouter()


class SaveSongBody(BaseModel):
    box_id: str = Field(alias="boxId")
    spotify_id: str = Field(alias="spotifyId")


def _track_to_dict(t: Track) -> dict:
    return {
        "id": t.id,
        "boxId": t.box_id,
        "spotifyId": t.spotify_id,
        "name": t.name,
        "artist": t.artist,
        "album": t.album,
        "albumCoverUrl": t.album_cover_url,
        "previewUrl": t.preview_url,
        "spotifyUrl": t.spotify_url,
        "createdAt": t.created_at,
    }


@router.get("/search")
def search_songs(
    query: str,
    limit: int = Query(DEFAULT_SEARCH_LIMIT, ge=1, le=50),
    state: AppState = Depends(get_state),
):
    """Return Spotify's track search results unchanged."""
    return state.catalog.search(query, limit)


@router.get("/song/{spotify_id}")
def get_song(spotify_id: str, state: AppState = Depends(get_state)):
    """Return the Spotify track object unchanged."""
    return state.catalog.get_by_id(spotify_id)


@router.post("/save")
def save_song(body: SaveSongBody, state: AppState = Depends(get_state)):
    """Look the track up on Spotify and save a snapshot of it to a box."""
    track = state.tracks.save_track(body.box_id, body.spotify_id)
    return {
        "message": "Song saved successfully",
        "boxId": track.box_id,
        "spotifyId": track.spotify_id,
        "name": track.name,
        "artist": track.artist,
    }


@router.get("/box/{box_id}")
def list_songs(box_id: str, state: AppState = Depends(get_state)):
    """Songs saved to a box, newest first."""
    return [_track_to_dict(t) for t in state.tracks.list_tracks(box_id)]


@router.delete("/song/{song_id}")
def delete_song(song_id: int, state: AppState = Depends(get_state)):
    state.tracks.delete_track(song_id)
    return {"message": "Song deleted successfully", "songId": song_id}
