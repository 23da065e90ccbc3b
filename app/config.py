from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./tubely.db"

    # JWT
    secret_key: str = "your-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Frontend URL for CORS
    frontend_url: str = "http://localhost:3000"

    # Public base URL of this server (thumbnail URLs are built from it)
    platform_url: str = "http://localhost:8091"

    # Thumbnails: folder served at /assets (empty = backend/assets)
    assets_root: str = ""

    # S3 (empty endpoint = AWS; set for MinIO/LocalStack)
    s3_bucket: str = "tubely"
    s3_region: str = "us-east-1"
    s3_endpoint_url: str = ""

    # Signed video URLs expire quickly; they are regenerated on every read
    presign_expire_minutes: int = 5

    # Upload limits in bytes
    max_thumbnail_size: int = 10 << 20  # 10 MiB
    max_video_size: int = 1 << 30  # 1 GiB

    # FFmpeg
    ffmpeg_path: str = "ffmpeg"
    ffprobe_path: str = "ffprobe"
    ffmpeg_timeout_seconds: int = 600

    log_level: str = "INFO"

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
