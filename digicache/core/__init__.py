"""Core services: storage, boxes, images, texts, Spotify catalog, tracks."""
from digicache.core.box_registry import BoxRegistry
from digicache.core.catalog_client import CatalogClient
from digicache.core.database import Database
from digicache.core.image_store import ImageStore
from digicache.core.text_store import TextStore
from digicache.core.track_store import TrackStore

__all__ = ["BoxRegistry", "CatalogClient", "Database", "ImageStore", "TextStore", "TrackStore"]
