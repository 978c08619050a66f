"""Dependency injection for the shorty API.

A ServiceManager owns the resources shared by every request (settings, the
service logger, the shortcode registry). It lives on ``app.state`` so each
application instance has exactly one registry, and handlers reach it through
FastAPI dependencies rather than a module-level global.
"""

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Optional

from fastapi import Depends, Request

from shorty.config import Settings, get_settings
from shorty.registry import ShortcodeRegistry

__all__ = [
    "ServiceManager",
    "RequestContext",
    "get_service_manager",
    "get_request_context",
    "get_registry",
]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# ============================================================================
# SERVICE MANAGER
# ============================================================================


class ServiceManager:
    """Holder for resources shared across requests.

    Created once per application in shorty.main and attached to app.state.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.logger = self._setup_logger()
        self.registry = ShortcodeRegistry.from_settings(self.settings, logger=self.logger.getChild("registry"))

    def _setup_logger(self) -> logging.Logger:
        """Setup logger once."""
        logger = logging.getLogger("shorty")
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)
        logger.setLevel(self.settings.LOG_LEVEL.upper())
        return logger


# ============================================================================
# LIGHTWEIGHT REQUEST CONTEXT
# ============================================================================


@dataclass
class RequestContext:
    """Per-request tracking data plus access to shared resources.

    Attributes:
        service_manager: Shared resources for this application
        request_id: Unique identifier for this request
        trace_id: Correlation ID from the X-Trace-ID header
        user_agent: Client user agent string
        client_ip: Client IP address
        start_time: Request start timestamp
    """

    service_manager: ServiceManager
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    trace_id: Optional[str] = None
    user_agent: Optional[str] = None
    client_ip: Optional[str] = None
    start_time: float = field(default_factory=time.perf_counter)

    @property
    def settings(self) -> Settings:
        return self.service_manager.settings

    @property
    def logger(self) -> logging.LoggerAdapter:
        """Shared logger with this request's identifiers attached."""
        return logging.LoggerAdapter(
            self.service_manager.logger,
            {
                "request_id": self.request_id,
                "trace_id": self.trace_id or self.request_id,
                "client_ip": self.client_ip,
                "user_agent": self.user_agent,
            },
        )

    def get_duration(self) -> float:
        """Get request duration in milliseconds."""
        return (time.perf_counter() - self.start_time) * 1000


# ============================================================================
# DEPENDENCY FUNCTIONS
# ============================================================================


def get_service_manager(request: Request) -> ServiceManager:
    return request.app.state.services


def get_request_context(
    request: Request,
    manager: ServiceManager = Depends(get_service_manager),
) -> RequestContext:
    """Build the request context from client info and tracing headers."""
    return RequestContext(
        service_manager=manager,
        trace_id=request.headers.get("x-trace-id"),
        user_agent=request.headers.get("user-agent"),
        client_ip=request.client.host if request.client else None,
    )


def get_registry(manager: ServiceManager = Depends(get_service_manager)) -> ShortcodeRegistry:
    return manager.registry
