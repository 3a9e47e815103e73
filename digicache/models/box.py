"""Box listing entries."""
from dataclasses import dataclass, field
from typing import List


@dataclass
class BoxSummary:
    """A box and the ids of the tile images stored in it."""
    box_id: str
    image_ids: List[str] = field(default_factory=list)
