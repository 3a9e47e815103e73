"""Text note row."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class TextNote:
    id: int
    box_id: str
    content: str
    created_at: Optional[str]
