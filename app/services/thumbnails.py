"""Thumbnail files on local disk, served by the /assets static mount."""
import logging
import shutil
from pathlib import Path
from typing import BinaryIO, Protocol
from app.config import get_settings

logger = logging.getLogger(__name__)


class ThumbnailStore(Protocol):
    def save(self, video_id: str, ext: str, stream: BinaryIO) -> str:
        """Persist the thumbnail and return its public URL."""
        ...


def assets_dir() -> Path:
    settings = get_settings()
    if settings.assets_root:
        return Path(settings.assets_root)
    return Path(__file__).resolve().parent.parent.parent / "assets"


class DiskThumbnailStore:
    def __init__(self, root: Path, base_url: str):
        self.root = root
        self.base_url = base_url.rstrip("/")

    def save(self, video_id: str, ext: str, stream: BinaryIO) -> str:
        """One thumbnail per video: any earlier file for this video is replaced."""
        self.root.mkdir(parents=True, exist_ok=True)
        filename = f"{video_id}.{ext}"
        for old in self.root.glob(f"{video_id}.*"):
            if old.name != filename:
                old.unlink(missing_ok=True)
                logger.info("Removed previous thumbnail %s", old)
        with (self.root / filename).open("wb") as f:
            shutil.copyfileobj(stream, f)
        logger.info("Saved thumbnail %s", self.root / filename)
        return f"{self.base_url}/assets/{filename}"


def get_thumbnail_store() -> ThumbnailStore:
    return DiskThumbnailStore(assets_dir(), get_settings().platform_url)
