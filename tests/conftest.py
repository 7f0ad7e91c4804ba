import os

# Must be set before fitlog.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from fitlog.core.db import Base, get_db, make_engine
from fitlog.core.security import create_tokens
from fitlog.main import app
from fitlog.models import User


@pytest.fixture
def engine(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path / 'fitlog-test.db'}")
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def _make_user(db, email):
    user = User(email=email, password_hash="not-a-real-hash", name=email.split("@")[0])
    db.add(user)
    db.commit()
    return user.id


@pytest.fixture
def user_id(db):
    return _make_user(db, "me@example.com")


@pytest.fixture
def other_user_id(db):
    return _make_user(db, "someone@example.com")


@pytest.fixture
def client(session_factory):
    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def bearer(user_id):
    return {"Authorization": f"Bearer {create_tokens(user_id)['accessToken']}"}


@pytest.fixture
def auth(user_id):
    return bearer(user_id)


@pytest.fixture
def other_auth(other_user_id):
    return bearer(other_user_id)
