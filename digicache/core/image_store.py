"""Tile images, background images, and image metadata (payloads kept as BLOBs)."""
import logging
import uuid
from typing import Optional

from digicache.core.database import Database, now_iso
from digicache.core.errors import NotFoundError, UnsupportedMediaError, WrongEndpointError
from digicache.core.mime_detect import detect_mime, sniff_mime
from digicache.models.image import BackgroundImage, ImageMetadata, StoredImage, UploadResult

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MIME = "image/jpeg"


class ImageStore:
    def __init__(self, db: Database) -> None:
        self._db = db

    def store_image(
        self,
        payload: bytes,
        original_name: Optional[str],
        declared_mime: Optional[str],
        box_id: str,
    ) -> UploadResult:
        """Detect the payload type and store it as a tile image of box_id.

        Text payloads raise WrongEndpointError and anything else that is not an
        image raises UnsupportedMediaError; neither writes a row.
        """
        mime = detect_mime(payload, filename=original_name, declared=declared_mime)
        if mime is None or not mime.startswith("image/"):
            logger.warning(
                "Rejected upload for box %s: %s (name=%r)", box_id, mime, original_name
            )
            if mime is not None and mime.startswith("text/"):
                raise WrongEndpointError(
                    "Uploaded file is a text file. Use /api/text/save for text uploads.",
                    detected_mime=mime,
                )
            raise UnsupportedMediaError(
                "Unsupported file type. Expected an image (png/jpg/gif).",
                detected_mime=mime,
            )

        image_id = str(uuid.uuid4())
        with self._db.transaction() as conn:
            conn.execute(
                "INSERT INTO images (id, box_id, image_data, content_type, created_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (image_id, box_id, bytes(payload), mime, now_iso()),
            )
            conn.execute(
                "INSERT INTO box_contents (box_id, item_id) VALUES (?, ?)",
                (box_id, image_id),
            )
        logger.info("Stored image %s (%s, %d bytes) in box %s", image_id, mime, len(payload), box_id)
        return UploadResult(image_id=image_id, box_id=box_id, detected_mime=mime)

    def get_image(self, image_id: str) -> StoredImage:
        row = self._db.fetchone(
            "SELECT id, box_id, image_data, content_type, created_at FROM images WHERE id = ?",
            (image_id,),
        )
        if row is None:
            raise NotFoundError(f"Image not found: {image_id}")
        return StoredImage(
            id=row["id"],
            box_id=row["box_id"],
            data=bytes(row["image_data"]),
            content_type=row["content_type"] or DEFAULT_IMAGE_MIME,
            created_at=row["created_at"],
        )

    def get_image_metadata(self, image_id: str) -> ImageMetadata:
        row = self._db.fetchone(
            "SELECT id, box_id, content_type, created_at FROM images WHERE id = ?",
            (image_id,),
        )
        if row is None:
            raise NotFoundError(f"Image not found: {image_id}")
        return ImageMetadata(
            id=row["id"],
            box_id=row["box_id"],
            content_type=row["content_type"] or DEFAULT_IMAGE_MIME,
            created_at=row["created_at"],
        )

    def store_background(self, payload: bytes, box_id: str) -> None:
        """Insert or replace the background image of box_id."""
        mime = sniff_mime(payload)
        if mime is None or not mime.startswith("image/"):
            mime = DEFAULT_IMAGE_MIME
        self._db.execute(
            "INSERT INTO background_images (box_id, image_data, content_type, updated_at) "
            "VALUES (?, ?, ?, ?) "
            "ON CONFLICT(box_id) DO UPDATE SET "
            "image_data = excluded.image_data, "
            "content_type = excluded.content_type, "
            "updated_at = excluded.updated_at",
            (box_id, bytes(payload), mime, now_iso()),
        )
        logger.info("Background image stored for box: %s", box_id)

    def get_background(self, box_id: str) -> BackgroundImage:
        row = self._db.fetchone(
            "SELECT box_id, image_data, content_type FROM background_images WHERE box_id = ?",
            (box_id,),
        )
        if row is None:
            raise NotFoundError(f"No background image for box: {box_id}")
        return BackgroundImage(
            box_id=row["box_id"],
            data=bytes(row["image_data"]),
            content_type=row["content_type"] or DEFAULT_IMAGE_MIME,
        )
