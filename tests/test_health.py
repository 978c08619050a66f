"""Health endpoint tests."""

import pytest
from httpx import AsyncClient

from shorty.enums import HealthStatus


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient) -> None:
    await client.post("/shorten", json={"url": "https://example.com"})

    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == HealthStatus.HEALTHY.value
    assert data["registry"] == HealthStatus.HEALTHY.value
    assert data["shortcodes"] == 1
