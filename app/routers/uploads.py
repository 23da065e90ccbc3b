"""
Thumbnail and video upload for an existing video record (owner only).
Thumbnails go to local disk under the assets root; videos are faststart-processed and stored in S3.
No rollback: a file already written stays in place if the database update fails.
"""
import logging
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session
from app.auth import get_current_user, parse_video_id
from app.config import get_settings
from app.database import get_db
from app.errors import http_error
from app.models.user import User
from app.repositories.video_repository import get_owned_video, update_video
from app.schemas.video import VideoResponse
from app.services.ffmpeg import VideoProcessor, get_video_processor
from app.services.media import THUMBNAIL_TYPES, VIDEO_TYPES, ensure_allowed, media_extension
from app.services.storage import ObjectStore, get_object_store
from app.services.thumbnails import ThumbnailStore, get_thumbnail_store
from app.services.video_upload import signed_video, store_video_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["uploads"])


def _upload_size(file: UploadFile) -> int:
    file.file.seek(0, 2)
    size = file.file.tell()
    file.file.seek(0)
    return size


@router.post("/thumbnail_upload/{video_id}", response_model=VideoResponse)
def upload_thumbnail(
    video_id: str = Depends(parse_video_id),
    user: User = Depends(get_current_user),
    thumbnail: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    thumbnails: ThumbnailStore = Depends(get_thumbnail_store),
    store: ObjectStore = Depends(get_object_store),
):
    """Form field `thumbnail` (png or jpg, max 10 MiB). Returns the updated video."""
    logger.info("uploading thumbnail for video %s by user %s", video_id, user.id)
    if thumbnail is None:
        raise http_error(status.HTTP_400_BAD_REQUEST, "Unable to parse form file")

    ext = ensure_allowed(media_extension(thumbnail.filename), THUMBNAIL_TYPES)
    if _upload_size(thumbnail) > get_settings().max_thumbnail_size:
        raise http_error(status.HTTP_400_BAD_REQUEST, "Exceeded maximum size")

    video = get_owned_video(db, video_id, user.id)
    try:
        video.thumbnail_url = thumbnails.save(video_id, ext, thumbnail.file)
    except OSError as e:
        raise http_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Unable to store file", e)
    video = update_video(db, video)
    return signed_video(video, store)


@router.post("/video_upload/{video_id}", response_model=VideoResponse)
def upload_video(
    video_id: str = Depends(parse_video_id),
    user: User = Depends(get_current_user),
    video_file: UploadFile | None = File(None, alias="video"),
    db: Session = Depends(get_db),
    processor: VideoProcessor = Depends(get_video_processor),
    store: ObjectStore = Depends(get_object_store),
):
    """
    Form field `video` (mp4 or avi, max 1 GiB). The file is stored under
    landscape/, portrait/ or other/ depending on its probed aspect ratio.
    Returns the updated video with a presigned video_url.
    """
    logger.info("uploading video %s by user %s", video_id, user.id)
    if video_file is None:
        raise http_error(status.HTTP_400_BAD_REQUEST, "Unable to parse form file")

    ext = ensure_allowed(media_extension(video_file.filename), VIDEO_TYPES)
    video = get_owned_video(db, video_id, user.id)

    video.video_location = store_video_upload(video_file, ext, processor, store)
    video = update_video(db, video)
    return signed_video(video, store)
