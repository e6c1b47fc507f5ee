#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone

PACKAGE_LOGGER = "invoiceprint"
DEFAULT_RECENT_LIMIT = 100

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


@dataclass(frozen=True)
class LogEntry:
    timestamp: datetime
    level: str
    logger: str
    message: str
    context: dict[str, object] = field(default_factory=dict)
    error: str | None = None


class RecentRecords(logging.Handler):
    """Keep the last ``limit`` records in memory for inspection."""

    def __init__(self, limit: int = DEFAULT_RECENT_LIMIT, level: int = logging.NOTSET) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        super().__init__(level)
        self._entries: deque[LogEntry] = deque(maxlen=limit)
        self._entries_lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = _entry_from_record(record)
        except Exception:
            self.handleError(record)
            return
        with self._entries_lock:
            self._entries.append(entry)

    def entries(self, count: int | None = None) -> list[LogEntry]:
        with self._entries_lock:
            snapshot = list(self._entries)
        if count is None:
            return snapshot
        return snapshot[-count:] if count > 0 else []

    def clear(self) -> None:
        with self._entries_lock:
            self._entries.clear()


def _entry_from_record(record: logging.LogRecord) -> LogEntry:
    context = {
        key: value for key, value in vars(record).items() if key not in _STANDARD_ATTRS
    }
    error = None
    if record.exc_info and record.exc_info[1] is not None:
        exc = record.exc_info[1]
        error = f"{type(exc).__name__}: {exc}"
    return LogEntry(
        timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
        level=record.levelname,
        logger=record.name,
        message=record.getMessage(),
        context=context,
        error=error,
    )


def attach_recent_records(
    limit: int = DEFAULT_RECENT_LIMIT,
    *,
    logger_name: str = PACKAGE_LOGGER,
) -> RecentRecords:
    handler = RecentRecords(limit)
    logging.getLogger(logger_name).addHandler(handler)
    return handler


__all__ = [
    "DEFAULT_RECENT_LIMIT",
    "LogEntry",
    "PACKAGE_LOGGER",
    "RecentRecords",
    "attach_recent_records",
]
