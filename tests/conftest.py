import os
import tempfile
from pathlib import Path

import pytest

_DB_DIR = tempfile.mkdtemp(prefix="controlpanel-tests-")

os.environ["APP_ENV"] = "testing"
os.environ["APP_SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_DB_DIR) / 'test.db'}"
os.environ["EMAIL_FROM_ADDRESS"] = "system@example.com"
os.environ["EMAIL_FROM_NAME"] = "Test Site"
os.environ["EMAIL_TRANSPORT_TYPE"] = "sendmail"

import httpx  # noqa: E402

from controlpanel.database import async_session_factory, drop_db, init_db  # noqa: E402
from controlpanel.main import app as fastapi_app  # noqa: E402
from controlpanel.models import User  # noqa: E402
from controlpanel.utils.security import create_access_token, hash_password  # noqa: E402


@pytest.fixture
async def database():
    await init_db()
    yield
    await drop_db()


@pytest.fixture
async def db_session(database):
    async with async_session_factory() as session:
        yield session


@pytest.fixture
async def admin_user(db_session):
    user = User(
        email="admin@example.com",
        password_hash=hash_password("password123"),
        first_name="Ada",
        last_name="Admin",
        admin=True,
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
async def editor_user(db_session):
    user = User(
        email="editor@example.com",
        password_hash=hash_password("password123"),
        first_name="Eddie",
        last_name="Editor",
        admin=False,
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
async def client(database):
    transport = httpx.ASGITransport(app=fastapi_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def admin_client(client, admin_user):
    client.cookies.set("access_token", create_access_token(admin_user.id, admin_user.full_name))
    return client


@pytest.fixture
def editor_client(client, editor_user):
    client.cookies.set("access_token", create_access_token(editor_user.id, editor_user.full_name))
    return client
