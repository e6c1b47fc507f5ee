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

import json
import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path

from ..core.models import InvoiceFormat
from ..formats.registry import DEFAULT_FORMAT
from .installer import preferences_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatPreferences:
    default_format: InvoiceFormat = DEFAULT_FORMAT
    last_used_format: InvoiceFormat | None = None
    show_cut_lines: bool = True

    @property
    def preferred_format(self) -> InvoiceFormat:
        return self.last_used_format or self.default_format

    def to_dict(self) -> dict[str, object]:
        payload = asdict(self)
        payload["default_format"] = self.default_format.value
        payload["last_used_format"] = (
            self.last_used_format.value if self.last_used_format is not None else None
        )
        return payload


def load_preferences(path: str | Path | None = None) -> FormatPreferences:
    """Read stored preferences; anything missing or malformed falls back to defaults."""
    target = Path(path) if path else preferences_path()
    if not target.is_file():
        return FormatPreferences()
    try:
        raw = json.loads(target.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning(
            "ignoring unreadable preferences file %s: %s",
            target,
            exc,
            extra={"component": "preferences", "action": "load"},
        )
        return FormatPreferences()
    if not isinstance(raw, dict):
        logger.warning(
            "ignoring preferences file %s: expected a JSON object",
            target,
            extra={"component": "preferences", "action": "load"},
        )
        return FormatPreferences()

    default_format = _stored_format(raw.get("default_format"), key="default_format")
    last_used = _stored_format(raw.get("last_used_format"), key="last_used_format")
    show_cut_lines = raw.get("show_cut_lines", True)
    if not isinstance(show_cut_lines, bool):
        logger.warning(
            "invalid show_cut_lines preference %r; using true",
            show_cut_lines,
            extra={"component": "preferences", "action": "load"},
        )
        show_cut_lines = True
    return FormatPreferences(
        default_format=default_format or DEFAULT_FORMAT,
        last_used_format=last_used,
        show_cut_lines=show_cut_lines,
    )


def save_preferences(prefs: FormatPreferences, path: str | Path | None = None) -> Path:
    target = Path(path) if path else preferences_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_suffix(target.suffix + ".tmp")
    tmp.write_text(json.dumps(prefs.to_dict(), indent=2, sort_keys=True) + "\n", encoding="utf-8")
    tmp.replace(target)
    return target


def record_last_used_format(format: InvoiceFormat, path: str | Path | None = None) -> Path:
    prefs = load_preferences(path)
    return save_preferences(replace(prefs, last_used_format=format), path)


def set_default_format(format: InvoiceFormat, path: str | Path | None = None) -> Path:
    """Store ``format`` as the default and forget the last used one so it applies next run."""
    prefs = load_preferences(path)
    return save_preferences(replace(prefs, default_format=format, last_used_format=None), path)


def set_show_cut_lines(enabled: bool, path: str | Path | None = None) -> Path:
    prefs = load_preferences(path)
    return save_preferences(replace(prefs, show_cut_lines=enabled), path)


def clear_preferences(path: str | Path | None = None) -> bool:
    target = Path(path) if path else preferences_path()
    try:
        target.unlink()
    except FileNotFoundError:
        return False
    return True


def _stored_format(value: object, *, key: str) -> InvoiceFormat | None:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            return InvoiceFormat(value)
        except ValueError:
            pass
    logger.warning(
        "invalid %s preference %r; using %s",
        key,
        value,
        DEFAULT_FORMAT.value,
        extra={"component": "preferences", "action": "load"},
    )
    return None
