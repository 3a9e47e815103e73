"""Tile and background image rows."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ImageMetadata:
    id: str
    box_id: str
    content_type: str
    created_at: Optional[str]


@dataclass
class StoredImage:
    """Tile image with its payload."""
    id: str
    box_id: str
    data: bytes
    content_type: str
    created_at: Optional[str]


@dataclass
class UploadResult:
    """Outcome of a successful tile upload."""
    image_id: str
    box_id: str
    detected_mime: str


@dataclass
class BackgroundImage:
    box_id: str
    data: bytes
    content_type: str
