"""
Shared fixtures: in-memory database, temporary storage buckets and a fake LLM.
"""
import json
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core import config
from app.core.rate_limit import rate_limit_store
from app.core.security import create_access_token
from app.db.base import Base
from app.db import models  # noqa: F401  registers models
from app.db.session import get_db
from app.llm.provider import LLMProvider, LLMResponse
from app.main import app
from app.services.match_analyzer import get_llm_provider
from app.services.storage_service import StorageClient, get_storage


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


class FakeProvider(LLMProvider):
    """Records prompts and replies with a canned completion (or raises)."""

    def __init__(self, content: str = "", error: Optional[Exception] = None):
        self.content = content
        self.error = error
        self.calls: List[List[Dict[str, str]]] = []

    def chat(self, messages, model, temperature=0.1, max_tokens=None, **kwargs):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.content, model=model)


def analysis_reply(score=85, verdict="High", matched=None, missing=None) -> str:
    return json.dumps({
        "score": score,
        "verdict": verdict,
        "matched_skills": matched if matched is not None else ["Python", "FastAPI"],
        "missing_skills": missing if missing is not None else ["Kubernetes"],
    })


@pytest.fixture
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=test_engine)
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def storage(tmp_path):
    client = StorageClient(root=str(tmp_path / "storage"), public_base_url="http://testserver")
    client.ensure_buckets()
    return client


@pytest.fixture
def fake_llm():
    return FakeProvider(content=analysis_reply())


@pytest.fixture
def client(db_session, storage, fake_llm, monkeypatch):
    """Test client wired to the test database, storage and fake LLM."""
    def override_get_db():
        db = TestSessionLocal()
        try:
            yield db
        finally:
            db.close()

    monkeypatch.setattr(config, "RATE_LIMIT_REQUESTS", 0)
    rate_limit_store.clear()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_llm_provider] = lambda: fake_llm
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    token = create_access_token({"sub": config.ADMIN_USERNAME, "role": "admin"})
    return {"Authorization": f"Bearer {token}"}
