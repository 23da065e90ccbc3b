"""
Video record persistence. Records are fetched, mutated and written back
without locking; concurrent uploads to the same video are last-write-wins.
Ownership: video.user_id == current user; every mutating endpoint validates this.
"""
import logging
from fastapi import status
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import http_error
from app.models.video import Video

logger = logging.getLogger(__name__)


def get_video(db: Session, video_id: str) -> Video | None:
    return db.query(Video).filter(Video.id == video_id).first()


def list_videos_for_user(db: Session, user_id: str) -> list[Video]:
    return (
        db.query(Video)
        .filter(Video.user_id == user_id)
        .order_by(desc(Video.created_at))
        .all()
    )


def create_video(db: Session, user_id: str, title: str, description: str = "") -> Video:
    video = Video(user_id=user_id, title=title, description=description)
    db.add(video)
    _commit(db, "Couldn't create video")
    db.refresh(video)
    return video


def update_video(db: Session, video: Video) -> Video:
    """Persist changes made to an attached Video."""
    _commit(db, "Couldn't update video")
    db.refresh(video)
    return video


def delete_video(db: Session, video: Video) -> None:
    db.delete(video)
    _commit(db, "Couldn't delete video")


def get_owned_video(db: Session, video_id: str, user_id: str) -> Video:
    """400 if the video does not exist, 401 (no detail) if the caller does not own it."""
    video = get_video(db, video_id)
    if video is None:
        raise http_error(status.HTTP_400_BAD_REQUEST, "Invalid video ID")
    if video.user_id != user_id:
        logger.info("User %s is not the owner of video %s", user_id, video_id)
        raise http_error(status.HTTP_401_UNAUTHORIZED, "")
    return video


def _commit(db: Session, message: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise http_error(status.HTTP_500_INTERNAL_SERVER_ERROR, message, e)
