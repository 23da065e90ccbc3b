"""
Error responses. The cause of a failure is logged server-side only;
clients get {"error": "<message>"}.
"""
import logging
from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def http_error(status_code: int, message: str, cause: BaseException | None = None) -> HTTPException:
    """Log the underlying cause and build the HTTPException to raise."""
    if cause is not None:
        if status_code >= 500:
            logger.error("%s: %s", message, cause, exc_info=cause)
        else:
            logger.info("%s: %s", message, cause)
    return HTTPException(status_code=status_code, detail=message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies become 400 with the first problem as the message."""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg', 'invalid')}" if field else first.get("msg", message)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=400, content={"error": message})
