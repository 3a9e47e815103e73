"""Text notes: save, list per box, delete."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from digicache.api.state import AppState, get_state
from digicache.models.text import TextNote

router = APIRouter()


class SaveTextBody(BaseModel):
    box_id: str = Field(alias="boxId")
    content: str


def _text_to_dict(t: TextNote) -> dict:
    return {
        "id": t.id,
        "boxId": t.box_id,
        "content": t.content,
        "createdAt": t.created_at,
    }


@router.post("/save")
def save_text(body: SaveTextBody, state: AppState = Depends(get_state)):
    """Save a note (1-500 characters, not only whitespace) to a box."""
    note = state.texts.save_text(body.box_id, body.content)
    return {
        "message": "Text saved successfully",
        "id": note.id,
        "boxId": note.box_id,
        "content": note.content,
    }


@router.get("/box/{box_id}")
def list_texts(box_id: str, state: AppState = Depends(get_state)):
    """Notes of a box, newest first."""
    return [_text_to_dict(t) for t in state.texts.list_texts(box_id)]


@router.delete("/{text_id}")
def delete_text(text_id: int, state: AppState = Depends(get_state)):
    state.texts.delete_text(text_id)
    return {"message": "Text deleted successfully", "textId": text_id}
