"""Shared helpers for video upload and signed video URLs (used by uploads and videos routers)."""
import logging
from fastapi import UploadFile, status
from app.config import get_settings
from app.errors import http_error
from app.models.video import Video
from app.schemas.video import VideoResponse
from app.services.ffmpeg import VideoProcessingError, VideoProcessor, get_video_aspect_ratio
from app.services.media import aspect_ratio_prefix, random_object_key
from app.services.staging import remove_quietly, stage_upload
from app.services.storage import ObjectLocation, ObjectStore, StorageError

logger = logging.getLogger(__name__)

# faststart output is always an MP4 container, whatever was uploaded
PROCESSED_CONTENT_TYPE = "video/mp4"
PROCESSED_EXTENSION = "mp4"


def store_video_upload(
    file: UploadFile,
    ext: str,
    processor: VideoProcessor,
    store: ObjectStore,
) -> ObjectLocation:
    """
    Stage -> probe aspect ratio -> faststart rewrite -> upload to <prefix>/<random>.mp4.
    Staged and processed files are removed whatever happens.
    """
    settings = get_settings()
    staged = processed = None
    try:
        staged = stage_upload(file, settings.max_video_size, suffix=f".{ext}")
        try:
            prefix = aspect_ratio_prefix(get_video_aspect_ratio(processor, staged))
            processed = processor.process_for_fast_start(staged)
        except VideoProcessingError as e:
            raise http_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "failed processing video", e)

        key = random_object_key(prefix, PROCESSED_EXTENSION)
        try:
            return store.put_object(key, processed, PROCESSED_CONTENT_TYPE)
        except StorageError as e:
            raise http_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "failed to upload file to s3", e)
    finally:
        remove_quietly(processed)
        remove_quietly(staged)


def signed_video(video: Video, store: ObjectStore) -> VideoResponse:
    """Video response with video_url replaced by a presigned GET URL (null if no video yet)."""
    response = VideoResponse.model_validate(video)
    location = video.video_location
    if location is None:
        return response
    expires_in = get_settings().presign_expire_minutes * 60
    try:
        response.video_url = store.presigned_url(location, expires_in)
    except StorageError as e:
        raise http_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "failed to generate resource url", e)
    return response
