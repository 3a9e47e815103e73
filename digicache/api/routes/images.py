"""Boxes, tile image uploads, background images, and image metadata."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel, Field

from digicache.api.state import AppState, get_state

logger = logging.getLogger(__name__)

router = APIRouter()


class CreateBoxBody(BaseModel):
    box_id: str = Field(alias="boxId")


@router.post("/boxes")
def create_box(body: CreateBoxBody, state: AppState = Depends(get_state)):
    """Create a box. Fails with 409 if the id already exists."""
    state.boxes.create_box(body.box_id)
    return {"message": "Box created successfully", "boxId": body.box_id}


@router.get("/boxes")
def list_boxes(state: AppState = Depends(get_state)):
    """List all boxes with the ids of their tile images."""
    return [{"boxId": b.box_id, "images": b.image_ids} for b in state.boxes.list_boxes()]


@router.post("/upload")
def upload_image(
    file: UploadFile = File(...),
    box_id: str = Form(..., alias="boxId"),
    type_: Optional[str] = Form(None, alias="type"),
    state: AppState = Depends(get_state),
):
    """Upload a tile image. Text files get 400, other non-images 415."""
    payload = file.file.read()
    logger.info(
        "Upload for box %s: name=%r part type=%r client type=%r",
        box_id, file.filename, file.content_type, type_,
    )
    result = state.images.store_image(payload, file.filename, file.content_type, box_id)
    return {
        "message": "Image uploaded successfully",
        "imageId": result.image_id,
        "boxId": result.box_id,
        "detectedMime": result.detected_mime,
    }


@router.post("/background/upload")
def upload_background(
    file: UploadFile = File(...),
    box_id: str = Form(..., alias="boxId"),
    state: AppState = Depends(get_state),
):
    """Upload the background image of a box, replacing any previous one."""
    state.images.store_background(file.file.read(), box_id)
    return {"message": "Background image uploaded successfully", "boxId": box_id}


@router.get("/background/{box_id}")
def get_background(box_id: str, state: AppState = Depends(get_state)):
    background = state.images.get_background(box_id)
    return Response(content=background.data, media_type=background.content_type)


@router.get("/{image_id}/metadata")
def get_image_metadata(image_id: str, state: AppState = Depends(get_state)):
    meta = state.images.get_image_metadata(image_id)
    return {
        "id": meta.id,
        "boxId": meta.box_id,
        "contentType": meta.content_type,
        "createdAt": meta.created_at,
    }


@router.get("/{image_id}")
def get_image(image_id: str, state: AppState = Depends(get_state)):
    """Return the image bytes with their stored content type."""
    image = state.images.get_image(image_id)
    return Response(content=image.data, media_type=image.content_type)
