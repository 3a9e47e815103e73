"""Box creation and per-box listing of tile image ids."""
import logging
from typing import Dict, List

from digicache.core.database import Database
from digicache.core.errors import ConflictError
from digicache.models.box import BoxSummary

logger = logging.getLogger(__name__)


class BoxRegistry:
    def __init__(self, db: Database) -> None:
        self._db = db

    def create_box(self, box_id: str) -> None:
        """Insert a box; raises ConflictError if the id is taken."""
        try:
            self._db.execute("INSERT INTO box_ids (id) VALUES (?)", (box_id,))
        except ConflictError as e:
            raise ConflictError(f"Box '{box_id}' already exists") from e
        logger.info("Box created: %s", box_id)

    def list_boxes(self) -> List[BoxSummary]:
        """Every box with the ids of images that exist in both contents and images."""
        boxes: Dict[str, BoxSummary] = {
            row["id"]: BoxSummary(box_id=row["id"])
            for row in self._db.fetchall("SELECT id FROM box_ids ORDER BY rowid")
        }
        rows = self._db.fetchall(
            "SELECT bc.box_id, bc.item_id FROM box_contents bc "
            "WHERE bc.item_id IN (SELECT id FROM images)"
        )
        for row in rows:
            # Contents of boxes that were never created are not listed
            box = boxes.get(row["box_id"])
            if box is not None:
                box.image_ids.append(row["item_id"])
        return list(boxes.values())
