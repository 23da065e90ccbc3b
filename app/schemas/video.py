from datetime import datetime
from pydantic import BaseModel


class VideoCreate(BaseModel):
    title: str
    description: str = ""


class VideoResponse(BaseModel):
    """video_url is a short-lived presigned URL, generated per response."""
    id: str
    user_id: str
    title: str
    description: str
    thumbnail_url: str | None = None
    video_url: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
