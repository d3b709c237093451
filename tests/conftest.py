import os

# must be set before friendnet.core.config builds its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["MOCK_FALLBACK"] = "false"

import pytest
from fastapi.testclient import TestClient

from friendnet.core.security import create_access_token, get_password_hash
from friendnet.db.session import SessionLocal, engine
from friendnet.main import app
from friendnet.models.base import Base
from friendnet.models.user import User


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def make_user(db, name, username=None, email=None, password=None, image=None):
    user = User(
        name=name,
        username=username,
        email=email,
        image=image,
        hashed_password=get_password_hash(password) if password else None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token({'sub': user.id})}"}


@pytest.fixture
def alice(db):
    return make_user(db, "Alice Anders", username="alice", email="alice@example.com", password="secret123")


@pytest.fixture
def bob(db):
    return make_user(db, "Bob Brown", username="bobb", email="bob@example.com")


@pytest.fixture
def carol(db):
    return make_user(db, "Carol Chen", username="carolc", email="carol@example.com")
