"""Short text notes attached to boxes."""
import logging
from typing import List

from digicache.config import TEXT_MAX_LENGTH
from digicache.core.database import SQLITE_MAX_INT, SQLITE_MIN_INT, Database, now_iso
from digicache.core.errors import InvalidInputError, NotFoundError
from digicache.models.text import TextNote

logger = logging.getLogger(__name__)


class TextStore:
    def __init__(self, db: Database, max_length: int = TEXT_MAX_LENGTH) -> None:
        self._db = db
        self._max_length = max_length

    def save_text(self, box_id: str, content: str) -> TextNote:
        """Validate and insert a note. Content is stored as given, not trimmed."""
        if not content.strip():
            raise InvalidInputError("Text content cannot be empty")
        if len(content) > self._max_length:
            raise InvalidInputError(
                f"Text content exceeds {self._max_length} character limit"
            )
        created_at = now_iso()
        cur = self._db.execute(
            "INSERT INTO texts (box_id, content, created_at) VALUES (?, ?, ?)",
            (box_id, content, created_at),
        )
        logger.info("Saved text %d in box %s", cur.lastrowid, box_id)
        return TextNote(id=cur.lastrowid, box_id=box_id, content=content, created_at=created_at)

    def list_texts(self, box_id: str) -> List[TextNote]:
        """Notes of box_id, newest first."""
        rows = self._db.fetchall(
            "SELECT id, box_id, content, created_at FROM texts WHERE box_id = ? "
            "ORDER BY created_at DESC, id DESC",
            (box_id,),
        )
        return [
            TextNote(id=r["id"], box_id=r["box_id"], content=r["content"], created_at=r["created_at"])
            for r in rows
        ]

    def delete_text(self, text_id: int) -> None:
        if not SQLITE_MIN_INT <= text_id <= SQLITE_MAX_INT:
            raise NotFoundError("Text not found")
        cur = self._db.execute("DELETE FROM texts WHERE id = ?", (text_id,))
        if cur.rowcount == 0:
            raise NotFoundError("Text not found")
        logger.info("Deleted text %d", text_id)
