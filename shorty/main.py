"""FastAPI application entry point for the shorty service.

Application Lifecycle Diagram
=============================
::
    ┌─────────────┐
    │  uvicorn    │
    │  startup    │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ create_app()│
    │ + registry  │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ CORS,       │
    │ metrics,    │
    │ routes      │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Serve HTTP  │
    │ requests    │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ lifespan()  │
    │ shutdown    │
    └─────────────┘

How to Use
===========
**Step 1 — Run with uvicorn**::
    uvicorn shorty.main:app --host 0.0.0.0 --port 8000

**Step 2 — Make API calls**::
    curl -X POST http://localhost:8000/shorten \
         -H "Content-Type: application/json" \
         -d '{"url": "https://example.com"}'

    curl -i http://localhost:8000/<shortcode>
    curl http://localhost:8000/<shortcode>/stats

Key Behaviours
===============
- Links live in memory only and are lost on restart.
- Prometheus metrics are exposed at /metrics.
- Interactive docs at /docs and /redoc.
"""

__all__ = ["app", "create_app"]

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from shorty.config import Settings, get_settings
from shorty.dependencies import ServiceManager
from shorty.routes import router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    services: ServiceManager = app.state.services
    services.logger.info(f"{services.settings.APP_NAME} starting ({services.settings.APP_ENV})")
    yield
    services.logger.info(f"{services.settings.APP_NAME} stopping with {len(services.registry)} shortcodes in memory")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        description="In-memory URL shortener with redirect statistics",
        lifespan=lifespan,
    )
    app.state.services = ServiceManager(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # /metrics must be registered before the /{shortcode} catch-all.
    Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=False,
        should_respect_env_var=False,
    ).instrument(app).expose(app, include_in_schema=False)

    app.include_router(router)
    return app


app = create_app()
