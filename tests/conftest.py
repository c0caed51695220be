import os
import tempfile

# Point the app at throwaway storage before anything imports the settings
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="waitlist-uploads-"))

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.core.config import settings
from app.core.database import Base, get_db
from app.core.security import create_access_token, get_password_hash
from app.models.user import User
from app.models.waitlist import Waitlist

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON;")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

USER_PASSWORD = "secret123"


@pytest.fixture()
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield session
    finally:
        session.close()
        app.dependency_overrides.pop(get_db, None)
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def user(db_session):
    owner = User(email="owner@example.com", password_hash=get_password_hash(USER_PASSWORD), name="Owner")
    db_session.add(owner)
    db_session.commit()
    db_session.refresh(owner)
    return owner


@pytest.fixture()
def other_user(db_session):
    stranger = User(email="other@example.com", password_hash=get_password_hash(USER_PASSWORD))
    db_session.add(stranger)
    db_session.commit()
    db_session.refresh(stranger)
    return stranger


def headers_for(account: User) -> dict:
    token = create_access_token({"sub": account.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_headers(user):
    return headers_for(user)


@pytest.fixture()
def other_headers(other_user):
    return headers_for(other_user)


@pytest.fixture()
def make_waitlist(db_session, user):
    """Insert a waitlist straight through the ORM."""
    def _make(slug="my-launch", owner=None, **fields):
        values = {
            "title": "My Launch",
            "headline": fields.get("title", "My Launch"),
        }
        values.update(fields)
        waitlist = Waitlist(user_id=(owner or user).id, slug=slug, **values)
        db_session.add(waitlist)
        db_session.commit()
        db_session.refresh(waitlist)
        return waitlist
    return _make


@pytest.fixture()
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture()
async def client(db_session):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
