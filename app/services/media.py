"""Media type allow-lists, aspect-ratio classification and object key generation."""
import secrets
from pathlib import Path
from fastapi import status
from app.errors import http_error

THUMBNAIL_TYPES = frozenset({"png", "jpg"})
VIDEO_TYPES = frozenset({"mp4", "avi"})

ASPECT_LANDSCAPE = "16/9"
ASPECT_PORTRAIT = "9/16"
ASPECT_OTHER = "other"
ASPECT_EPSILON = 0.01

_PREFIXES = {
    ASPECT_LANDSCAPE: "landscape",
    ASPECT_PORTRAIT: "portrait",
}


def get_aspect_ratio(width: int, height: int) -> str:
    if height == 0:
        return ASPECT_OTHER
    ratio = width / height
    if abs(ratio - 16 / 9) < ASPECT_EPSILON:
        return ASPECT_LANDSCAPE
    if abs(ratio - 9 / 16) < ASPECT_EPSILON:
        return ASPECT_PORTRAIT
    return ASPECT_OTHER


def aspect_ratio_prefix(ratio: str) -> str:
    """Storage prefix for an aspect ratio label: landscape, portrait or other."""
    return _PREFIXES.get(ratio, "other")


def media_extension(filename: str | None) -> str:
    """Lower-cased extension of the uploaded filename, without the dot. Trusted as-is."""
    return Path(filename or "").suffix.lstrip(".").lower()


def ensure_allowed(ext: str, allowed: frozenset[str]) -> str:
    if ext not in allowed:
        raise http_error(
            status.HTTP_400_BAD_REQUEST,
            "unsupported file type",
            ValueError(f"extension {ext!r} not in {sorted(allowed)}"),
        )
    return ext


def random_object_key(prefix: str, ext: str) -> str:
    """<prefix>/<32 random bytes, URL-safe base64 without padding>.<ext>"""
    return f"{prefix}/{secrets.token_urlsafe(32)}.{ext}"
