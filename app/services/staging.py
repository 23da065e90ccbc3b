"""Stage uploaded files to scratch space before handing them to ffmpeg/S3."""
import logging
import tempfile
from pathlib import Path
from fastapi import UploadFile, status
from app.errors import http_error

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1 MB
TEMP_PREFIX = "tubely-upload"


def stage_upload(file: UploadFile, max_bytes: int, suffix: str = "") -> Path:
    """
    Copy the upload to a named temp file in chunks. Caller must remove it.
    Raises 400 if the upload is larger than max_bytes (partial file removed).
    """
    written = 0
    with tempfile.NamedTemporaryFile(prefix=TEMP_PREFIX, suffix=suffix, delete=False) as tmp:
        path = Path(tmp.name)
        try:
            while chunk := file.file.read(CHUNK_SIZE):
                written += len(chunk)
                if written > max_bytes:
                    raise ValueError(f"upload larger than {max_bytes} bytes")
                tmp.write(chunk)
        except ValueError as e:
            tmp.close()
            remove_quietly(path)
            raise http_error(status.HTTP_400_BAD_REQUEST, "Exceeded maximum size", e)
        except OSError as e:
            tmp.close()
            remove_quietly(path)
            raise http_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Unable to store file", e)
    logger.debug("Staged %d bytes to %s", written, path)
    return path


def remove_quietly(path: Path | None) -> None:
    if path is None:
        return
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove temp file %s: %s", path, e)
