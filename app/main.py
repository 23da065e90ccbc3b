import logging
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from app.config import get_settings
from app.errors import http_exception_handler, validation_exception_handler
from app.middleware import UploadSizeLimitMiddleware
from app.routers import auth, uploads, users, videos
from app.services.thumbnails import assets_dir

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title="Tubely API", version="1.0.0")

app.add_middleware(UploadSizeLimitMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

app.include_router(users.router)
app.include_router(auth.router)
app.include_router(videos.router)
app.include_router(uploads.router)

assets_dir().mkdir(parents=True, exist_ok=True)
app.mount("/assets", StaticFiles(directory=assets_dir()), name="assets")


@app.get("/")
def root():
    return {"message": "Tubely API", "docs": "/docs"}
