import asyncio
import os
import tempfile
from pathlib import Path

_TMP = Path(tempfile.mkdtemp(prefix="baksh-api-tests-"))
DB_PATH = _TMP / "test.db"

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_PATH}"
os.environ["UPLOAD_DIR"] = str(_TMP / "uploads")
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["ADMIN_PASSWORD"] = "admin123"
os.environ["ADMIN_CREATION_KEY"] = "let-me-in"
os.environ["WEB3FORMS_API_KEY"] = "relay-key"
os.environ["TRACKING_URL"] = "https://track.example.com"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.auth.jwt import get_password_hash  # noqa: E402
from app.auth.rbac import Role  # noqa: E402
from app.database import async_session_maker, init_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.user import User  # noqa: E402

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin123"
USER_EMAIL = "visitor@example.com"
USER_PASSWORD = "visitor123"


def _reset_db() -> None:
    DB_PATH.unlink(missing_ok=True)


async def _create_user(email: str, password: str, role: str) -> None:
    async with async_session_maker() as db:
        db.add(User(email=email, hashed_password=get_password_hash(password), role=role))
        await db.commit()


@pytest.fixture
def client():
    _reset_db()
    with TestClient(app) as c:
        yield c
    _reset_db()


@pytest.fixture
def admin_headers(client):
    res = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['token']}"}


@pytest.fixture
def user_headers(client):
    asyncio.run(_create_user(USER_EMAIL, USER_PASSWORD, Role.USER.value))
    res = client.post("/api/auth/login", json={"email": USER_EMAIL, "password": USER_PASSWORD})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['token']}"}


@pytest.fixture
async def db():
    _reset_db()
    await init_db()
    async with async_session_maker() as session:
        yield session
    _reset_db()
