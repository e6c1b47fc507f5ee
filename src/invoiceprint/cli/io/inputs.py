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
import sys
from dataclasses import MISSING, dataclass, fields
from datetime import datetime
from pathlib import Path
from typing import Any

from ...core.models import InvoiceData

_INVOICE_FIELDS = {item.name: item for item in fields(InvoiceData)}
_REQUIRED_FIELDS = tuple(
    name
    for name, item in _INVOICE_FIELDS.items()
    if item.default is MISSING and item.default_factory is MISSING
)


@dataclass(frozen=True)
class BatchFile:
    invoices: tuple[InvoiceData, ...]
    format: str | None = None
    source: str = "-"


def load_batch_file(path: str | Path) -> BatchFile:
    """Read a JSON batch from ``path`` (``-`` for stdin)."""
    raw_path = str(path)
    if raw_path == "-":
        text = sys.stdin.read()
        source = "stdin"
    else:
        resolved = Path(raw_path).expanduser()
        if not resolved.is_file():
            raise FileNotFoundError(f"input file not found: {resolved}")
        text = resolved.read_text(encoding="utf-8")
        source = str(resolved)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{source}: invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    return parse_batch_payload(payload, source=source)


def parse_batch_payload(payload: object, *, source: str = "-") -> BatchFile:
    format_value: str | None = None
    if isinstance(payload, dict):
        raw_format = payload.get("format")
        if raw_format is not None:
            if not isinstance(raw_format, str):
                raise ValueError(f"{source}: format must be a string")
            format_value = raw_format.strip() or None
        records = payload.get("invoices")
        if records is None:
            raise ValueError(f"{source}: missing 'invoices' list")
    else:
        records = payload
    if not isinstance(records, list):
        raise ValueError(f"{source}: invoices must be a JSON list")
    invoices = tuple(_parse_invoice(record, index=idx) for idx, record in enumerate(records))
    return BatchFile(invoices=invoices, format=format_value, source=source)


def _parse_invoice(record: object, *, index: int) -> InvoiceData:
    label = f"invoices[{index}]"
    if not isinstance(record, dict):
        raise ValueError(f"{label} must be a JSON object")
    unknown = sorted(key for key in record if key not in _INVOICE_FIELDS)
    if unknown:
        raise ValueError(f"{label} has unknown field(s): {', '.join(unknown)}")
    missing = [name for name in _REQUIRED_FIELDS if name not in record]
    if missing:
        raise ValueError(f"{label} is missing required field(s): {', '.join(missing)}")
    values: dict[str, Any] = dict(record)
    values["created_at"] = _parse_datetime(record["created_at"], field=f"{label}.created_at")
    return InvoiceData(**values)


def _parse_datetime(value: object, *, field: str) -> datetime:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field} must be an ISO-8601 datetime string")
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        raise ValueError(f"{field} must be an ISO-8601 datetime string") from None
