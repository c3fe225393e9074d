"""Pytest configuration and fixtures."""

import json
from collections.abc import Generator
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient
from fastapi import FastAPI
from sqlalchemy.orm import Session

from core.config import Settings
from core.database import Database, transaction
from core.dependencies import get_llm_client
from core.migrations import run_migrations
from main import create_app
from models.flashcard import Flashcard, FlashcardSet
from repositories.flashcard_repo import FlashcardRepository
from repositories.flashcard_set_repo import FlashcardSetRepository
from repositories.llm_interaction_repo import LLMInteractionRepository
from services.llm_client import LLMClient

# smallest valid PNG (1x1, transparent)
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


class FakeProvider:
    """Stands in for the OpenRouter chat completions endpoint."""

    def __init__(self) -> None:
        self.requests: list[dict] = []
        self.status_code = 200
        self.set_cards(
            title="Photosynthesis",
            description="Light reactions and the Calvin cycle",
            flashcards=[
                {"question": "Where do light reactions happen?", "answer": "Thylakoid membranes"},
                {"question": "What does the Calvin cycle fix?", "answer": "Carbon dioxide"},
                {"question": "Main pigment?", "answer": "Chlorophyll"},
            ],
        )

    def set_content(self, content: str, total_tokens: int | None = 321) -> None:
        self.body = {"choices": [{"message": {"role": "assistant", "content": content}}]}
        if total_tokens is not None:
            self.body["usage"] = {"total_tokens": total_tokens}

    def set_cards(self, **payload) -> None:
        self.set_content(json.dumps(payload))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": {"message": "provider unavailable"}})
        return httpx.Response(200, json=self.body)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        UPLOAD_DIR=tmp_path / "uploads",
        ENVIRONMENT="test",
        OPENROUTER_API_KEY="test-key",
    )


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


def _build_app(settings: Settings, provider: FakeProvider) -> FastAPI:
    app = create_app(settings)
    transport = httpx.MockTransport(provider.handler)
    app.dependency_overrides[get_llm_client] = lambda: LLMClient.from_settings(settings, transport=transport)
    return app


@pytest.fixture
def app(settings: Settings, provider: FakeProvider) -> FastAPI:
    return _build_app(settings, provider)


@pytest.fixture
def app_factory(provider: FakeProvider):
    """Build an app from custom settings, still wired to the fake provider."""
    return lambda settings: _build_app(settings, provider)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session(client: TestClient, app: FastAPI) -> Generator[Session, None, None]:
    """Session on the same database the running app uses."""
    session = app.state.db.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def database(tmp_path: Path) -> Generator[Database, None, None]:
    db = Database(f"sqlite:///{tmp_path / 'repo.db'}").open()
    run_migrations(db.engine)
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def session(database: Database) -> Generator[Session, None, None]:
    s = database.session()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def make_set():
    """Create an interaction, a set and its cards directly through the repositories."""

    def _make(
        session: Session,
        *,
        title: str = "Biology",
        description: str | None = None,
        cards: tuple[tuple[str, str], ...] = (("Q1", "A1"), ("Q2", "A2"), ("Q3", "A3")),
    ) -> tuple[FlashcardSet, list[Flashcard]]:
        with transaction(session):
            interaction = LLMInteractionRepository(session).create(
                model="test/model", prompt="prompt", response="{}", image_ids=[]
            )
            flashcard_set = FlashcardSetRepository(session).create(
                title=title, description=description, llm_interaction_id=interaction.id
            )
            FlashcardRepository(session).bulk_create(
                [
                    {"set_id": flashcard_set.id, "question": q, "answer": a, "order_index": i}
                    for i, (q, a) in enumerate(cards)
                ]
            )
        return flashcard_set, FlashcardRepository(session).get_by_set_id(flashcard_set.id)

    return _make


@pytest.fixture
def upload(client: TestClient):
    def _upload(name: str = "page.png", data: bytes = PNG_BYTES, content_type: str = "image/png") -> dict:
        response = client.post("/upload", files={"file": (name, data, content_type)})
        assert response.status_code == 200, response.text
        return response.json()["image"]

    return _upload
