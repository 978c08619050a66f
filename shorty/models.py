"""In-memory data models for the shortcode registry.

Model Structure
================
::
    LinkRecord (owned by ShortcodeRegistry, never handed out)
    ├─ shortcode: str (unique, case-sensitive)
    ├─ target_url: str
    ├─ created_at: datetime (UTC)
    ├─ redirect_count: int
    └─ last_seen_at: datetime | None

    LinkStats (frozen snapshot returned to callers)
    ├─ shortcode: str
    ├─ redirect_count: int
    ├─ created_at: datetime
    └─ last_seen_at: datetime | None

Key Behaviours
===============
- shortcode, target_url and created_at are write-once.
- redirect_count and last_seen_at change only through record_visit().
- last_seen_at is None until the first visit.
- Snapshots are taken under the registry lock, so count and last_seen_at
  always come from the same visit.

Classes:
    LinkRecord:  Mutable record for a registered shortcode.
    LinkStats:  Immutable statistics snapshot.
"""

import datetime
from dataclasses import dataclass

__all__ = ["LinkRecord", "LinkStats"]


@dataclass(frozen=True)
class LinkStats:
    shortcode: str
    redirect_count: int
    created_at: datetime.datetime
    last_seen_at: datetime.datetime | None = None


@dataclass
class LinkRecord:
    shortcode: str
    target_url: str
    created_at: datetime.datetime
    redirect_count: int = 0
    last_seen_at: datetime.datetime | None = None

    def record_visit(self, now: datetime.datetime) -> None:
        """Count one redirect. Caller must hold the registry lock."""
        # Clamp so a wall clock stepping back cannot move last_seen_at backwards.
        floor = self.last_seen_at or self.created_at
        self.redirect_count += 1
        self.last_seen_at = max(now, floor)

    def snapshot(self) -> LinkStats:
        return LinkStats(
            shortcode=self.shortcode,
            redirect_count=self.redirect_count,
            created_at=self.created_at,
            last_seen_at=self.last_seen_at,
        )

    def __repr__(self) -> str:
        return f"<LinkRecord(shortcode='{self.shortcode}', redirect_count={self.redirect_count})>"
