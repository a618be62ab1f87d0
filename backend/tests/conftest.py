"""Shared fixtures: an isolated data file, app instance and HTTP client per test."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from learnhub.config import Settings
from learnhub.main import create_app
from learnhub.storage import JsonStore


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "data.json"


@pytest.fixture
def settings(data_file: Path) -> Settings:
    return Settings(DATA_FILE=str(data_file), ENVIRONMENT="test", RATE_LIMIT_ENABLED=False)


@pytest.fixture
def store(data_file: Path) -> JsonStore:
    return JsonStore(data_file)


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest_asyncio.fixture
async def client_factory(app: FastAPI) -> AsyncGenerator[Callable[..., Awaitable[AsyncClient]], None]:
    """Build clients against the test app, optionally claiming a role."""
    clients: list[AsyncClient] = []

    async def _factory(role: str | None = None) -> AsyncClient:
        headers = {"x-role": role} if role else {}
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test", headers=headers)
        clients.append(client)
        return client

    yield _factory

    for client in clients:
        await client.aclose()


@pytest.fixture
def course_payload() -> dict:
    return {
        "title": "Workplace Safety",
        "description": "Basics of staying safe on site",
        "category": "Compliance",
        "duration": 45,
        "lessons": [
            {"id": "l1", "title": "Hazards", "content": "/docs/hazards.pdf", "type": "document", "duration": 20},
            {"id": "l2", "title": "Equipment", "content": "https://example.com/v.mp4", "type": "video", "duration": 25},
        ],
        "quiz": {
            "id": "q1",
            "questions": [
                {"id": "qq1", "question": "Wear a helmet?", "options": ["Yes", "No"], "correctAnswer": 0},
                {"id": "qq2", "question": "Exit sign colour?", "options": ["Red", "Green", "Blue"], "correctAnswer": 1},
            ],
            "passingScore": 50,
        },
    }

