"""
Pytest configuration and fixtures for Lumina backend tests.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio

from backend.main import app
from backend.services.editor_session import EditorSession, get_editor_session
from backend.services.suggestions import SuggestionService
from engine.kernel.assembly import MemoryStorage

TEST_STORAGE_KEY = "test_page"


@pytest.fixture
def suggestions():
    """A suggestion service that answers instantly without touching the network."""
    service = MagicMock(spec=SuggestionService)
    service.suggest_content = AsyncMock(return_value="Fresh headline")
    service.suggest_colors = AsyncMock(return_value=("#ffffff", "#38bdf8"))
    return service


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def session(storage, suggestions):
    """A fresh session holding the default document."""
    return EditorSession(storage=storage, storage_key=TEST_STORAGE_KEY, suggestions=suggestions)


@pytest_asyncio.fixture
async def async_client(session):
    """Async HTTP client against the ASGI app, wired to the test session."""
    app.dependency_overrides[get_editor_session] = lambda: session
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    app.dependency_overrides.clear()
