import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.core.security import create_access_token
from app.db.session import Base, get_db, make_engine
from app.main import app
from app.models.template import Template
from app.models.user import User


@pytest.fixture
def engine():
    eng = make_engine("sqlite://")
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def db(engine):
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make(email=None, is_active=True):
        n = db.query(User).count() + 1
        now = datetime.now(timezone.utc)
        user = User(
            email=email or f"user{n}@example.com",
            full_name=f"User {n}",
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_template(db):
    def _make(owner_id, name="Template", **fields):
        t = Template(
            owner_id=owner_id,
            name=name,
            description=fields.pop("description", None),
            category=fields.pop("category", None),
            tags=fields.pop("tags", None),
            sort_code=fields.pop("sort_code", 0),
            is_deleted=fields.pop("is_deleted", False),
            visit_count=fields.pop("visit_count", 0),
            likings=fields.pop("likings", 0),
            created_at=datetime.now(timezone.utc),
            **fields,
        )
        db.add(t)
        db.commit()
        db.refresh(t)
        return t

    return _make


@pytest.fixture
def auth_headers():
    def _headers(user_id):
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _headers
