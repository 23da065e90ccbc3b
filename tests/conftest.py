import os
import shutil
import tempfile
from pathlib import Path

_TMP = Path(tempfile.mkdtemp(prefix="tubely-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP / 'test.db'}"
os.environ["ASSETS_ROOT"] = str(_TMP / "assets")
os.environ["SECRET_KEY"] = "test-secret"
os.environ["S3_BUCKET"] = "tubely-test"
os.environ["PLATFORM_URL"] = "http://testserver"

import pytest
from fastapi.testclient import TestClient

from app.auth import create_access_token, hash_password
from app.database import Base, SessionLocal, engine
from app.main import app
from app.models import User, Video
from app.services.ffmpeg import get_video_processor
from app.services.storage import ObjectLocation, get_object_store

ASSETS_ROOT = _TMP / "assets"


class FakeObjectStore:
    bucket = "tubely-test"

    def __init__(self):
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.error: Exception | None = None

    def put_object(self, key, path, content_type):
        if self.error:
            raise self.error
        self.objects[key] = (Path(path).read_bytes(), content_type)
        return ObjectLocation(bucket=self.bucket, key=key)

    def presigned_url(self, location, expires_in):
        return f"https://{location.bucket}.s3.amazonaws.com/{location.key}?X-Amz-Expires={expires_in}"


class FakeVideoProcessor:
    def __init__(self, width=1920, height=1080):
        self.width = width
        self.height = height
        self.error: Exception | None = None
        self.probed: list[Path] = []
        self.processed: list[Path] = []

    def probe_dimensions(self, path):
        self.probed.append(Path(path))
        if self.error:
            raise self.error
        return self.width, self.height

    def process_for_fast_start(self, path):
        out = Path(f"{path}.processing")
        shutil.copyfile(path, out)
        self.processed.append(out)
        return out


@pytest.fixture(autouse=True)
def db_schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    shutil.rmtree(ASSETS_ROOT, ignore_errors=True)
    ASSETS_ROOT.mkdir(parents=True, exist_ok=True)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def object_store():
    return FakeObjectStore()


@pytest.fixture
def video_processor():
    return FakeVideoProcessor()


@pytest.fixture
def client(object_store, video_processor):
    app.dependency_overrides[get_object_store] = lambda: object_store
    app.dependency_overrides[get_video_processor] = lambda: video_processor
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _make_user(db, email):
    user = User(email=email, password=hash_password("secret123"))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def user(db):
    return _make_user(db, "owner@example.com")


@pytest.fixture
def other_user(db):
    return _make_user(db, "intruder@example.com")


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user.id, user.email)}"}


@pytest.fixture
def other_headers(other_user):
    return {"Authorization": f"Bearer {create_access_token(other_user.id, other_user.email)}"}


@pytest.fixture
def video(db, user):
    v = Video(user_id=user.id, title="Boot.dev beats", description="lofi")
    db.add(v)
    db.commit()
    db.refresh(v)
    return v


@pytest.fixture
def reload_video():
    """Fresh read of a video record, bypassing the test session identity map."""
    def _reload(video_id: str) -> Video:
        with SessionLocal() as session:
            v = session.get(Video, video_id)
            session.expunge(v)
            return v
    return _reload
