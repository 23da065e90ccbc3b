"""
Reject oversized uploads from their Content-Length before FastAPI parses
(and spools to disk) the multipart body. The streaming check in
services/staging.py still applies to bodies sent without a Content-Length.
"""
import logging
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send
from app.config import get_settings

logger = logging.getLogger(__name__)

VIDEO_UPLOAD_PREFIX = "/api/video_upload/"
THUMBNAIL_UPLOAD_PREFIX = "/api/thumbnail_upload/"

# room for multipart boundaries and part headers around the file itself
MULTIPART_OVERHEAD = 64 * 1024


def _body_limit(path: str) -> int | None:
    settings = get_settings()
    if path.startswith(VIDEO_UPLOAD_PREFIX):
        return settings.max_video_size + MULTIPART_OVERHEAD
    if path.startswith(THUMBNAIL_UPLOAD_PREFIX):
        return settings.max_thumbnail_size + MULTIPART_OVERHEAD
    return None


class UploadSizeLimitMiddleware:
    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] != "POST":
            await self.app(scope, receive, send)
            return

        limit = _body_limit(scope["path"])
        if limit is not None:
            headers = dict(scope["headers"])
            content_length = headers.get(b"content-length", b"")
            if content_length.isdigit() and int(content_length) > limit:
                logger.info(
                    "Rejected %s: Content-Length %s exceeds %d",
                    scope["path"], content_length.decode(), limit,
                )
                response = JSONResponse(status_code=400, content={"error": "Exceeded maximum size"})
                await response(scope, receive, send)
                return

        await self.app(scope, receive, send)
