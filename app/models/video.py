"""Video metadata. The video file itself lives in S3; only its bucket/key pair is stored here."""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from app.database import Base
from app.services.storage import ObjectLocation


class Video(Base):
    __tablename__ = "videos"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    thumbnail_url = Column(String(1024), nullable=True)
    video_bucket = Column(String(255), nullable=True)
    video_key = Column(String(1024), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def video_location(self) -> ObjectLocation | None:
        if not self.video_bucket or not self.video_key:
            return None
        return ObjectLocation(bucket=self.video_bucket, key=self.video_key)

    @video_location.setter
    def video_location(self, location: ObjectLocation | None) -> None:
        self.video_bucket = location.bucket if location else None
        self.video_key = location.key if location else None
