"""Shared pytest fixtures for registry and API tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from shorty.config import get_settings
from shorty.dependencies import get_registry
from shorty.main import app
from shorty.registry import ShortcodeRegistry

settings = get_settings()


@pytest.fixture
def registry() -> ShortcodeRegistry:
    return ShortcodeRegistry.from_settings(settings)


@pytest_asyncio.fixture(scope="function")
async def client(registry: ShortcodeRegistry) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_registry] = lambda: registry

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
