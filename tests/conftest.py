import os
import tempfile

# settings are read at import time; keep test runs away from real services
_scratch = tempfile.mkdtemp(prefix="vidtube-tests-")
os.environ.setdefault("DATABASE_DSN", f"sqlite+aiosqlite:///{_scratch}/unused.db")
os.environ.setdefault("LOCAL_STORAGE_ROOT", os.path.join(_scratch, "media"))
os.environ.setdefault("STAGING_DIR", os.path.join(_scratch, "staging"))
os.environ.setdefault("MEDIA_PUBLIC_BASE_URL", "https://media.test")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import vidtube.models  # noqa: F401
from vidtube.core.base import Base
from vidtube.core.config import settings
from vidtube.core.db import get_session
from vidtube.core.errors import ApiError, Failure
from vidtube.core.passwords import hash_password
from vidtube.core.security import Principal, get_principal
from vidtube.main import app
from vidtube.modules.users.models import User
from vidtube.platform.media_gateway import MediaGateway
from vidtube.platform.provider_registry import get_media_gateway

BASE_URL = "https://media.test"


class MemoryStorage:
    """In-memory object store; records every call it receives."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_upload_for: set[str] = set()
        self.fail_destroy = False

    def upload_file(self, path: str, *, key: str, content_type: str) -> None:
        self.calls.append(("upload", key))
        if key.split("/")[0] in self.fail_upload_for:
            raise RuntimeError("provider rejected the upload")
        with open(path, "rb") as fh:
            self.objects[key] = fh.read()

    def destroy(self, public_id: str, resource_type: str) -> bool:
        self.calls.append(("destroy", public_id))
        if self.fail_destroy:
            return False
        base = f"{resource_type}/upload/{public_id}"
        keys = [k for k in self.objects if k == base or k.startswith(base + ".")]
        for k in keys:
            del self.objects[k]
        return bool(keys)

    def uploads(self) -> list[str]:
        return [key for op, key in self.calls if op == "upload"]


class FakeProbe:
    def __init__(self, duration: float | None = 12.5):
        self.duration = duration
        self.paths: list[str] = []

    def __call__(self, path: str) -> float | None:
        self.paths.append(path)
        return self.duration


class AuthState:
    def __init__(self):
        self.principal: Principal | None = None

    def login_as(self, user: User) -> None:
        self.principal = Principal(user_id=user.id, username=user.username)

    def logout(self) -> None:
        self.principal = None


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def gateway(storage, probe) -> MediaGateway:
    return MediaGateway(storage, base_url=BASE_URL, probe=probe)


@pytest.fixture
def staging_dir(tmp_path, monkeypatch):
    path = tmp_path / "staging"
    monkeypatch.setattr(settings, "STAGING_DIR", str(path))
    return path


@pytest_asyncio.fixture
async def session_maker(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'vidtube.db'}")
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield maker
    await engine.dispose()


@pytest_asyncio.fixture
async def session(session_maker):
    async with session_maker() as s:
        yield s


@pytest_asyncio.fixture
async def users(session_maker) -> dict[str, User]:
    seeded = {}
    async with session_maker() as s:
        for name in ("alice", "bob"):
            user = User(
                username=name,
                email=f"{name}@example.com",
                full_name=name.title(),
                avatar=f"{BASE_URL}/image/upload/{name}-avatar.png",
                password_hash=hash_password("secret", iterations=1_000),
            )
            s.add(user)
            seeded[name] = user
        await s.commit()
    return seeded


@pytest.fixture
def auth(users) -> AuthState:
    state = AuthState()
    state.login_as(users["alice"])
    return state


@pytest_asyncio.fixture
async def client(session_maker, gateway, auth, staging_dir):
    async def override_get_session():
        async with session_maker() as s:
            yield s

    async def override_get_principal():
        if auth.principal is None:
            raise ApiError(Failure.unauthorized())
        return auth.principal

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_principal] = override_get_principal
    app.dependency_overrides[get_media_gateway] = lambda: gateway
    async with AsyncClient(transport=ASGITransport(app=app), base_url=f"http://test{settings.API_PREFIX}") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def publish(client):
    """Publish a video as whoever ``auth`` currently holds."""

    async def _publish(title="t", description="d", video=True, thumbnail=True):
        files = {}
        if video:
            files["videoFile"] = ("clip.mp4", b"fake-video-binary", "video/mp4")
        if thumbnail:
            files["thumbnail"] = ("thumb.png", b"fake-png", "image/png")
        data = {k: v for k, v in (("title", title), ("description", description)) if v is not None}
        return await client.post("/videos", data=data, files=files or None)

    return _publish
