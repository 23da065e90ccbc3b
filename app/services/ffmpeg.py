"""
Probe and faststart-rewrite uploaded videos with the ffprobe/ffmpeg CLIs.
Handlers depend on the VideoProcessor interface so tests can swap in a fake.
"""
import json
import logging
import subprocess
from pathlib import Path
from typing import Protocol
from app.config import get_settings
from app.services.media import get_aspect_ratio

logger = logging.getLogger(__name__)

PROCESSING_SUFFIX = ".processing"


class VideoProcessingError(Exception):
    """ffmpeg/ffprobe failed, timed out, is missing, or returned output we cannot read."""


class VideoProcessor(Protocol):
    def probe_dimensions(self, path: Path) -> tuple[int, int]:
        ...

    def process_for_fast_start(self, path: Path) -> Path:
        ...


class FFmpegVideoProcessor:
    def __init__(self, ffmpeg_path: str = "ffmpeg", ffprobe_path: str = "ffprobe", timeout: int = 600):
        self.ffmpeg_path = ffmpeg_path
        self.ffprobe_path = ffprobe_path
        self.timeout = timeout

    def _run(self, cmd: list[str]) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(cmd, check=True, capture_output=True, timeout=self.timeout)
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.decode(errors="replace") if e.stderr else ""
            raise VideoProcessingError(f"{cmd[0]} exited with {e.returncode}: {stderr.strip()}") from e
        except subprocess.TimeoutExpired as e:
            raise VideoProcessingError(f"{cmd[0]} timed out after {self.timeout}s") from e
        except FileNotFoundError as e:
            raise VideoProcessingError(f"{cmd[0]} not found; install FFmpeg") from e

    def probe_dimensions(self, path: Path) -> tuple[int, int]:
        """Width and height of the first stream that reports them."""
        cmd = [
            self.ffprobe_path,
            "-v", "error",
            "-print_format", "json",
            "-show_streams",
            str(path),
        ]
        result = self._run(cmd)
        try:
            for stream in json.loads(result.stdout)["streams"]:
                if stream.get("width") is not None and stream.get("height") is not None:
                    return int(stream["width"]), int(stream["height"])
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise VideoProcessingError(f"unexpected ffprobe output for {path}") from e
        raise VideoProcessingError(f"no video stream with dimensions in {path}")

    def process_for_fast_start(self, path: Path) -> Path:
        """Move the moov atom to the front so playback can start before download finishes."""
        output_path = Path(f"{path}{PROCESSING_SUFFIX}")
        cmd = [
            self.ffmpeg_path,
            "-y",
            "-i", str(path),
            "-c", "copy",
            "-movflags", "faststart",
            "-f", "mp4",
            str(output_path),
        ]
        self._run(cmd)
        logger.info("Faststart rewrite completed for %s", path)
        return output_path


def get_video_aspect_ratio(processor: VideoProcessor, path: Path) -> str:
    width, height = processor.probe_dimensions(path)
    ratio = get_aspect_ratio(width, height)
    logger.debug("Probed %s: %dx%d -> %s", path, width, height, ratio)
    return ratio


def get_video_processor() -> VideoProcessor:
    settings = get_settings()
    return FFmpegVideoProcessor(
        ffmpeg_path=settings.ffmpeg_path,
        ffprobe_path=settings.ffprobe_path,
        timeout=settings.ffmpeg_timeout_seconds,
    )
