"""
Video records: create a draft, list and read your own videos, delete.
Files are attached afterwards through the upload endpoints.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.auth import get_current_user, parse_video_id
from app.database import get_db
from app.models.user import User
from app.repositories.video_repository import (
    create_video,
    delete_video,
    get_owned_video,
    list_videos_for_user,
)
from app.schemas.video import VideoCreate, VideoResponse
from app.services.storage import ObjectStore, get_object_store
from app.services.video_upload import signed_video

router = APIRouter(prefix="/api/videos", tags=["videos"])


@router.post("", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
def create_draft(
    body: VideoCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    video = create_video(db, user.id, body.title.strip(), body.description)
    return VideoResponse.model_validate(video)


@router.get("", response_model=list[VideoResponse])
def list_videos(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_object_store),
):
    """Current user's videos, newest first, each with a fresh presigned video_url."""
    return [signed_video(v, store) for v in list_videos_for_user(db, user.id)]


@router.get("/{video_id}", response_model=VideoResponse)
def get_video(
    video_id: str = Depends(parse_video_id),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    store: ObjectStore = Depends(get_object_store),
):
    video = get_owned_video(db, video_id, user.id)
    return signed_video(video, store)


@router.delete("/{video_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_video(
    video_id: str = Depends(parse_video_id),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete the record only; stored objects are left in place."""
    video = get_owned_video(db, video_id, user.id)
    delete_video(db, video)
