"""Spotify catalog client via Spotipy; client-credentials token kept in memory."""
import logging
import threading
import time
from typing import Any, Callable, Optional, Tuple

import requests
from spotipy import Spotify, SpotifyException
from spotipy.cache_handler import MemoryCacheHandler
from spotipy.oauth2 import SpotifyClientCredentials, SpotifyOauthError

from digicache.config import SPOTIFY_REQUESTS_TIMEOUT
from digicache.core.errors import CatalogAuthError, CatalogRequestError, CatalogShapeError
from digicache.models.track import CatalogToken

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 10


class CatalogClient:
    """Search and fetch tracks, re-authenticating once when a token is rejected.

    The token starts unset and is acquired on first use. A 401 from the API
    marks it expired: the client authenticates again and retries the original
    request exactly once. No other status is retried.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        auth_manager: Optional[SpotifyClientCredentials] = None,
        requests_timeout: float = SPOTIFY_REQUESTS_TIMEOUT,
    ) -> None:
        # SpotifyClientCredentials posts grant_type=client_credentials with a
        # Basic base64(client_id:client_secret) header to the token URL. The
        # token stays in memory; spotipy would otherwise write it to ./.cache.
        self._auth_manager = auth_manager or SpotifyClientCredentials(
            client_id=client_id,
            client_secret=client_secret,
            requests_timeout=requests_timeout,
            cache_handler=MemoryCacheHandler(),
        )
        self._requests_timeout = requests_timeout
        self._lock = threading.Lock()
        self._token: Optional[CatalogToken] = None
        self._sp: Optional[Spotify] = None

    @property
    def token(self) -> Optional[CatalogToken]:
        return self._token

    def authenticate(self) -> CatalogToken:
        """Fetch a fresh access token, replacing the current one."""
        with self._lock:
            return self._authenticate_locked()

    def _authenticate_locked(self) -> CatalogToken:
        try:
            access_token = self._auth_manager.get_access_token(as_dict=False, check_cache=False)
        except (SpotifyOauthError, requests.RequestException) as e:
            logger.warning("Spotify token request failed: %s", e)
            raise CatalogAuthError(f"Could not generate access token: {e}") from e
        if not access_token:
            raise CatalogAuthError("Token endpoint returned no access_token")
        token = CatalogToken(access_token=access_token, acquired_at=time.time())
        # retries=0: a failed call surfaces immediately instead of urllib3 retrying it
        self._sp = Spotify(
            auth=access_token,
            requests_timeout=self._requests_timeout,
            retries=0,
            status_retries=0,
        )
        self._token = token
        logger.info("Successfully generated Spotify access token")
        return token

    def _current(self) -> Tuple[CatalogToken, Spotify]:
        with self._lock:
            if self._token is None:
                self._authenticate_locked()
            return self._token, self._sp

    def _refreshed(self, stale: CatalogToken) -> Tuple[CatalogToken, Spotify]:
        with self._lock:
            # Another request may already have replaced the rejected token
            if self._token is stale:
                logger.info("Access token expired, re-authenticating...")
                self._authenticate_locked()
            return self._token, self._sp

    def _request(self, what: str, call: Callable[[Spotify], Any]) -> Any:
        token, sp = self._current()
        try:
            return call(sp)
        except SpotifyException as e:
            if e.http_status != 401:
                logger.warning("%s failed: %s", what, e)
                raise CatalogRequestError(f"{what} failed: {e.msg}", e.http_status) from e
        except requests.RequestException as e:
            raise CatalogRequestError(f"{what} failed: {e}") from e

        _, sp = self._refreshed(token)
        try:
            return call(sp)
        except SpotifyException as e:
            logger.warning("%s failed after re-authentication: %s", what, e)
            raise CatalogRequestError(
                f"{what} failed after re-authentication: {e.msg}", e.http_status
            ) from e
        except requests.RequestException as e:
            raise CatalogRequestError(f"{what} failed after re-authentication: {e}") from e

    def search(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list:
        """Return the tracks.items array of a track search, as Spotify sent it."""
        results = self._request(
            "Search", lambda sp: sp.search(q=query, limit=limit, type="track")
        )
        try:
            items = results["tracks"]["items"]
        except (KeyError, TypeError) as e:
            raise CatalogShapeError("Search response has no tracks.items") from e
        if not isinstance(items, list):
            raise CatalogShapeError("Search response tracks.items is not a list")
        return items

    def get_by_id(self, spotify_id: str) -> dict:
        """Return the full track object for a Spotify track id."""
        track = self._request("Getting song by id", lambda sp: sp.track(spotify_id))
        if not isinstance(track, dict):
            raise CatalogShapeError(f"Empty response for track {spotify_id}")
        return track
