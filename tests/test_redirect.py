"""Redirect endpoint behavior tests."""

import pytest
from httpx import AsyncClient

NOT_FOUND_MESSAGE = "The shortcode cannot be found in the system."


@pytest.mark.asyncio
async def test_redirect_generated_code(client: AsyncClient) -> None:
    create_resp = await client.post("/shorten", json={"url": "https://example.com"})
    shortcode = create_resp.json()["shortcode"]

    response = await client.get(f"/{shortcode}", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == "https://example.com"


@pytest.mark.asyncio
async def test_redirect_custom_code(client: AsyncClient) -> None:
    await client.post("/shorten", json={"url": "https://example.com", "shortcode": "ExampleLink"})

    response = await client.get("/ExampleLink", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == "https://example.com"


@pytest.mark.asyncio
async def test_redirect_keeps_path_and_query(client: AsyncClient) -> None:
    target = "https://example.com/some/path?q=1&lang=en"
    await client.post("/shorten", json={"url": target, "shortcode": "deep_link"})

    response = await client.get("/deep_link", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == target


@pytest.mark.asyncio
async def test_redirect_percent_encodes_non_ascii_target(client: AsyncClient) -> None:
    await client.post("/shorten", json={"url": "https://example.com/ä?q=é", "shortcode": "umlaut"})

    response = await client.get("/umlaut", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == "https://example.com/%C3%A4?q=%C3%A9"


@pytest.mark.asyncio
async def test_redirect_unknown_code(client: AsyncClient) -> None:
    response = await client.get("/NoCode", follow_redirects=False)
    assert response.status_code == 404
    assert response.text == NOT_FOUND_MESSAGE


@pytest.mark.asyncio
async def test_redirect_is_case_sensitive(client: AsyncClient) -> None:
    await client.post("/shorten", json={"url": "https://example.com", "shortcode": "ExampleLink"})

    response = await client.get("/examplelink", follow_redirects=False)
    assert response.status_code == 404
