"""
Activity feed entries for extraction progress.

The extraction core never reports progress itself. Orchestrators narrate
what happened as a list of short, human-readable entries that a
presentation layer (terminal, web feed) can render in order.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ActivityLevel(str, Enum):
    """Severity tag of an activity entry."""

    INFO = "info"
    SUCCESS = "success"
    WARN = "warn"


LOG_LEVELS = {
    ActivityLevel.INFO: logging.INFO,
    ActivityLevel.SUCCESS: logging.INFO,
    ActivityLevel.WARN: logging.WARNING,
}


@dataclass(frozen=True)
class ActivityEntry:
    """A single line in the activity feed."""

    id: str
    message: str
    level: ActivityLevel = ActivityLevel.INFO
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "message": self.message,
            "level": self.level.value,
            "created_at": self.created_at.isoformat(),
        }


class ActivityFeed:
    """Ordered collection of activity entries.

    Optionally mirrors every entry to a logger so file logs carry the
    same narrative as the feed.
    """

    def __init__(self, logger: logging.Logger | logging.LoggerAdapter | None = None) -> None:
        self.entries: list[ActivityEntry] = []
        self.logger = logger

    def add(self, message: str, level: ActivityLevel = ActivityLevel.INFO) -> ActivityEntry:
        entry = ActivityEntry(id=uuid.uuid4().hex[:12], message=message, level=level)
        self.entries.append(entry)

        if self.logger is not None:
            self.logger.log(LOG_LEVELS[level], message)

        return entry

    def info(self, message: str) -> ActivityEntry:
        return self.add(message, ActivityLevel.INFO)

    def success(self, message: str) -> ActivityEntry:
        return self.add(message, ActivityLevel.SUCCESS)

    def warn(self, message: str) -> ActivityEntry:
        return self.add(message, ActivityLevel.WARN)

    def clear(self) -> None:
        self.entries.clear()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)
