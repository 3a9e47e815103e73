"""Data models for boxes, images, texts, and tracks."""
from digicache.models.box import BoxSummary
from digicache.models.image import BackgroundImage, ImageMetadata, StoredImage, UploadResult
from digicache.models.text import TextNote
from digicache.models.track import CatalogToken, Track

__all__ = [
    "BackgroundImage",
    "BoxSummary",
    "CatalogToken",
    "ImageMetadata",
    "StoredImage",
    "TextNote",
    "Track",
    "UploadResult",
]
