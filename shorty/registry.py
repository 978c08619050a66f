"""Shortcode registry - core business logic.

This module owns the mapping from shortcode to LinkRecord: it validates
registrations, allocates codes, and tracks redirect statistics under
concurrent access.

Flow Diagram — Registration
===========================
::
    ┌─────────────┐
    │ register()  │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Validate URL│
    │ & code fmt  │  (no lock)
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Acquire lock│
    └──────┬──────┘
    CUSTOM?  │
    ┌─────┴─────┐
    │ YES        │ NO
    ▼            ▼
┌─────────┐  ┌──────────┐
│ Taken?  │  │ Draw code│◄─┐
│ -> 409  │  │ (nanoid) │  │ collision
└────┬────┘  └────┬─────┘  │ (bounded)
     │            └────────┘
     ▼            ▼
     └─────┬──────┘
           ▼
    ┌─────────────┐
    │ Insert      │
    │ LinkRecord  │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Release lock│
    └─────────────┘

Flow Diagram — Resolve
======================
::
    ┌─────────────┐    ┌─────────────┐    ┌─────────────┐
    │ resolve()   │ ─► │ Lock: count │ ─► │ Return      │
    │             │    │ += 1, stamp │    │ target URL  │
    └─────────────┘    └─────────────┘    └─────────────┘

Concurrency
===========
A single threading.Lock guards the mapping. Every critical section is a few
dict operations with no I/O and no await, so holding it from an asyncio
handler never stalls the loop for long, and thread-pool handlers are safe too.
The existence check and the insert always happen under the same acquisition,
which is what makes concurrent registrations of one code yield exactly one
winner.

How to Use
===========
::
    registry = ShortcodeRegistry.from_settings(get_settings())
    code = registry.register("https://example.com")
    url = registry.resolve(code)
    stats = registry.stats(code)
"""

import datetime
import logging
import threading
from collections.abc import Callable, Iterable

from nanoid import generate
from prometheus_client import Counter, Gauge

from shorty.config import Settings
from shorty.enums import RequestStatus
from shorty.exceptions import (
    RegistrationError,
    ShortcodeNotFoundError,
    ShortcodeSpaceExhaustedError,
    ShortcodeTakenError,
)
from shorty.models import LinkRecord, LinkStats
from shorty.validation import SHORTCODE_ALPHABET, validate_registration

__all__ = ["ShortcodeRegistry", "generate_short_code", "utc_now"]

DEFAULT_CODE_LENGTH = 6
DEFAULT_MAX_GENERATION_ATTEMPTS = 100


# ============================================================================
# PROMETHEUS METRICS
# ============================================================================

SHORTCODE_REGISTRATIONS_TOTAL = Counter(
    "shorty_registrations_total",
    "Total shortcode registration attempts",
    ["status"],
)
SHORTCODE_RESOLUTIONS_TOTAL = Counter(
    "shorty_resolutions_total",
    "Total shortcode resolution attempts",
    ["status"],
)
SHORTCODE_COLLISIONS_TOTAL = Counter(
    "shorty_generation_collisions_total",
    "Auto-generated shortcodes discarded because they were already taken",
)
SHORTCODES_REGISTERED = Gauge(
    "shorty_registered_shortcodes",
    "Number of shortcodes currently registered",
)


def utc_now() -> datetime.datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.datetime.now(datetime.timezone.utc)


def generate_short_code(length: int = DEFAULT_CODE_LENGTH) -> str:
    """Draw a random shortcode of the given length from SHORTCODE_ALPHABET."""
    assert isinstance(length, int) and length > 0, f"length must be a positive integer, got {length!r}"
    return generate(SHORTCODE_ALPHABET, length)


class ShortcodeRegistry:
    """Thread-safe in-memory store of shortcodes and their statistics.

    Records are created by register(), mutated only by resolve(), and never
    deleted. Callers only ever receive strings and frozen LinkStats snapshots.

    Args:
        code_length: Length of auto-generated codes.
        max_generation_attempts: Draws allowed before giving up with
            ShortcodeSpaceExhaustedError.
        reserved: Codes that count as taken without being registered.
        clock: Returns the current aware datetime; injectable for tests.
        logger: Logger to use, defaults to "shorty.registry".
    """

    def __init__(
        self,
        code_length: int = DEFAULT_CODE_LENGTH,
        max_generation_attempts: int = DEFAULT_MAX_GENERATION_ATTEMPTS,
        reserved: Iterable[str] = (),
        clock: Callable[[], datetime.datetime] = utc_now,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        if code_length < 4:
            raise ValueError(f"code_length must be at least 4, got {code_length}")
        if max_generation_attempts < 1:
            raise ValueError(f"max_generation_attempts must be positive, got {max_generation_attempts}")
        self._code_length = code_length
        self._max_attempts = max_generation_attempts
        self._reserved = frozenset(reserved)
        self._clock = clock
        self._logger = logger or logging.getLogger("shorty.registry")
        self._records: dict[str, LinkRecord] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings, logger: logging.Logger | None = None) -> "ShortcodeRegistry":
        return cls(
            code_length=settings.SHORT_CODE_LENGTH,
            max_generation_attempts=settings.MAX_GENERATION_ATTEMPTS,
            reserved=settings.RESERVED_SHORTCODES,
            logger=logger,
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, shortcode: object) -> bool:
        with self._lock:
            return shortcode in self._records

    # ========================================================================
    # PUBLIC API METHODS
    # ========================================================================

    def register(self, url: object, shortcode: object = None) -> str:
        """Register a target URL and return its shortcode.

        Args:
            url: Target URL; must be an absolute URL with scheme and host.
            shortcode: Desired code, or None/"" to auto-generate one.

        Returns:
            str: The assigned shortcode.

        Raises:
            MissingURLError: URL absent or blank.
            MalformedURLError: URL not well formed.
            InvalidShortcodeFormatError: Desired code fails the pattern.
            ShortcodeTakenError: Desired code already registered or reserved.
            ShortcodeSpaceExhaustedError: No free generated code was found.
        """
        try:
            target_url, desired = validate_registration(url, shortcode)
            with self._lock:
                if desired is not None:
                    if self._is_taken(desired):
                        raise ShortcodeTakenError(desired)
                    code = desired
                else:
                    code = self._draw_free_code()
                self._records[code] = LinkRecord(shortcode=code, target_url=target_url, created_at=self._clock())
                SHORTCODES_REGISTERED.inc()
        except ShortcodeTakenError as exc:
            SHORTCODE_REGISTRATIONS_TOTAL.labels(status=RequestStatus.CONFLICT).inc()
            self._logger.warning(f"Registration rejected: {exc}")
            raise
        except RegistrationError as exc:
            SHORTCODE_REGISTRATIONS_TOTAL.labels(status=RequestStatus.VALIDATION_ERROR).inc()
            self._logger.warning(f"Registration rejected: {exc}")
            raise
        except ShortcodeSpaceExhaustedError as exc:
            SHORTCODE_REGISTRATIONS_TOTAL.labels(status=RequestStatus.ERROR).inc()
            self._logger.error(f"Registration failed: {exc}")
            raise

        SHORTCODE_REGISTRATIONS_TOTAL.labels(status=RequestStatus.SUCCESS).inc()
        self._logger.info(f"Registered shortcode {code} -> {target_url}")
        return code

    def resolve(self, shortcode: str) -> str:
        """Return the target URL for a shortcode and count the visit.

        Raises:
            ShortcodeNotFoundError: If the shortcode is not registered.
        """
        with self._lock:
            record = self._records.get(shortcode)
            if record is not None:
                record.record_visit(self._clock())
                target_url = record.target_url

        if record is None:
            SHORTCODE_RESOLUTIONS_TOTAL.labels(status=RequestStatus.NOT_FOUND).inc()
            self._logger.debug(f"Resolve miss for shortcode {shortcode!r}")
            raise ShortcodeNotFoundError(shortcode)

        SHORTCODE_RESOLUTIONS_TOTAL.labels(status=RequestStatus.SUCCESS).inc()
        return target_url

    def stats(self, shortcode: str) -> LinkStats:
        """Return a consistent statistics snapshot without counting a visit.

        Raises:
            ShortcodeNotFoundError: If the shortcode is not registered.
        """
        with self._lock:
            record = self._records.get(shortcode)
            snapshot = record.snapshot() if record is not None else None

        if snapshot is None:
            raise ShortcodeNotFoundError(shortcode)
        return snapshot

    # ========================================================================
    # PRIVATE HELPER METHODS
    # ========================================================================

    def _is_taken(self, shortcode: str) -> bool:
        return shortcode in self._records or shortcode in self._reserved

    def _draw_free_code(self) -> str:
        """Draw random codes until one is free. Caller must hold the lock."""
        for attempt in range(1, self._max_attempts + 1):
            code = generate_short_code(self._code_length)
            if not self._is_taken(code):
                return code
            SHORTCODE_COLLISIONS_TOTAL.inc()
            self._logger.debug(f"Generated shortcode {code} collided (attempt {attempt})")
        raise ShortcodeSpaceExhaustedError(self._max_attempts)
