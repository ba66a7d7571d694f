import os

# keep tests off the on-disk database before hero_api.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from hero_api.api.dependencies import get_ollama_client
from hero_api.db.models import Base, User
from hero_api.db.seed import seed_admin
from hero_api.db.session import build_engine, get_db
from hero_api.llm.client import OllamaError
from hero_api.main import app


class FakeOllamaClient:
    """Records calls instead of talking to a daemon."""

    def __init__(self, fail_create=None, fail_chat=None, reply="Hello there."):
        self.fail_create = fail_create
        self.fail_chat = fail_chat
        self.reply = reply
        self.created = []
        self.chats = []

    def create_model(self, model, base_model, system):
        self.created.append({"model": model, "from": base_model, "system": system})
        if self.fail_create:
            raise OllamaError(self.fail_create)

    def chat(self, model, messages):
        self.chats.append({"model": model, "messages": [dict(m) for m in messages]})
        if self.fail_chat:
            raise OllamaError(self.fail_chat)
        return self.reply

    def is_up(self):
        return True


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def ollama():
    return FakeOllamaClient()


@pytest.fixture
def client(db, ollama):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_ollama_client] = lambda: ollama
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin(db):
    return seed_admin(db, email="admin@heroes.test", name="Admin")


@pytest.fixture
def member(db):
    user = User(email="user@heroes.test", name="Member", role="USER")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_headers(admin):
    return {"X-User-Id": admin.id}


@pytest.fixture
def member_headers(member):
    return {"X-User-Id": member.id}
