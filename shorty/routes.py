"""FastAPI route definitions for the shorty REST API.

API Endpoint Overview
=====================
::
    GET  /health
        └─ HealthResponse (200)

    POST /shorten
        ├─ {"url": ..., "shortcode": ...} (request body)
        └─ ShortenResponse (201) or 400/409/422

    GET  /:shortcode/stats
        └─ StatsResponse (200) or 404

    GET  /:shortcode
        └─ 302 Redirect or 404

Error Mapping
=============
The registry raises typed exceptions; this module alone decides how each one
looks on the wire. Error bodies are fixed plain-text strings.

    MissingURLError               400  url is not present.
    MalformedURLError             400  url is malformed.
    InvalidShortcodeFormatError   422  The shortcode fails to meet the following regexp: <pattern>.
    ShortcodeTakenError           409  The desired shortcode is already in use. ...
    ShortcodeNotFoundError        404  The shortcode cannot be found in the system.
    ShortcodeSpaceExhaustedError  500  Unable to allocate a shortcode.
"""

import json

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, RedirectResponse

from shorty.dependencies import RequestContext, get_registry, get_request_context
from shorty.enums import HealthStatus
from shorty.exceptions import (
    InvalidShortcodeFormatError,
    MalformedURLError,
    MissingURLError,
    ShortcodeNotFoundError,
    ShortcodeSpaceExhaustedError,
    ShortcodeTakenError,
    ShortyError,
)
from shorty.registry import ShortcodeRegistry
from shorty.schemas import HealthResponse, ShortenRequest, ShortenResponse, StatsResponse

__all__ = ["router", "error_response", "ERROR_RESPONSES"]

router = APIRouter()

ERROR_RESPONSES: dict[type[ShortyError], tuple[int, str]] = {
    MissingURLError: (400, "url is not present."),
    MalformedURLError: (400, "url is malformed."),
    InvalidShortcodeFormatError: (422, "The shortcode fails to meet the following regexp: {pattern}."),
    ShortcodeTakenError: (409, "The desired shortcode is already in use. Shortcodes are case-sensitive."),
    ShortcodeNotFoundError: (404, "The shortcode cannot be found in the system."),
    ShortcodeSpaceExhaustedError: (500, "Unable to allocate a shortcode."),
}


def error_response(exc: ShortyError) -> PlainTextResponse:
    status_code, message = ERROR_RESPONSES.get(type(exc), (500, "Internal server error."))
    if isinstance(exc, InvalidShortcodeFormatError):
        message = message.format(pattern=exc.pattern)
    return PlainTextResponse(message, status_code=status_code)


async def _read_shorten_request(request: Request) -> ShortenRequest:
    # Anything that is not a JSON object is treated as an empty payload.
    raw = await request.body()
    try:
        data = json.loads(raw) if raw else {}
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}
    return ShortenRequest.model_validate(data)


@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check(
    ctx: RequestContext = Depends(get_request_context),
    registry: ShortcodeRegistry = Depends(get_registry),
) -> HealthResponse:
    count = len(registry)
    ctx.logger.debug(f"Health check: {count} shortcodes registered")
    return HealthResponse(status=HealthStatus.HEALTHY, registry=HealthStatus.HEALTHY, shortcodes=count)


@router.post("/shorten", response_model=ShortenResponse, status_code=201, tags=["links"])
async def shorten_url(
    request: Request,
    ctx: RequestContext = Depends(get_request_context),
    registry: ShortcodeRegistry = Depends(get_registry),
):
    payload = await _read_shorten_request(request)
    ctx.logger.info(f"Shortening requested: url={payload.url!r} shortcode={payload.shortcode!r}")

    try:
        shortcode = registry.register(payload.url, payload.shortcode)
    except ShortyError as exc:
        ctx.logger.warning(f"Shortening failed: {exc} ({ctx.get_duration():.1f}ms)")
        return error_response(exc)

    ctx.logger.info(f"Shortened {payload.url} as {shortcode} ({ctx.get_duration():.1f}ms)")
    return ShortenResponse(shortcode=shortcode)


@router.get(
    "/{shortcode}/stats",
    response_model=StatsResponse,
    response_model_exclude_none=True,
    tags=["links"],
)
async def get_stats(
    shortcode: str,
    ctx: RequestContext = Depends(get_request_context),
    registry: ShortcodeRegistry = Depends(get_registry),
):
    try:
        stats = registry.stats(shortcode)
    except ShortcodeNotFoundError as exc:
        ctx.logger.warning(f"Stats not found for shortcode: {shortcode}")
        return error_response(exc)

    return StatsResponse.from_stats(stats)


@router.get("/{shortcode}", tags=["redirect"])
async def redirect_to_url(
    shortcode: str,
    ctx: RequestContext = Depends(get_request_context),
    registry: ShortcodeRegistry = Depends(get_registry),
):
    try:
        target_url = registry.resolve(shortcode)
    except ShortcodeNotFoundError as exc:
        ctx.logger.warning(f"Redirect failed - shortcode not found: {shortcode}")
        return error_response(exc)

    ctx.logger.info(f"Redirect: {shortcode} -> {target_url} ({ctx.get_duration():.1f}ms)")
    return RedirectResponse(url=target_url, status_code=302)
