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
import math
import re
from datetime import datetime

from ..formats.registry import parse_format
from .bounds import MAX_BATCH_INVOICES, MAX_PHONE_DIGITS, MIN_BATCH_INVOICES, MIN_PHONE_DIGITS
from .errors import BatchValidationError, ErrorCode, FieldError
from .models import BatchRequest, InvoiceData

logger = logging.getLogger(__name__)

_INVOICE_NUMBER_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_PHONE_SEPARATORS_RE = re.compile(r"[\s\-()]")
_PHONE_RE = re.compile(rf"^\+?\d{{{MIN_PHONE_DIGITS},{MAX_PHONE_DIGITS}}}$")

_OPTIONAL_TEXT_FIELDS = (
    "business_name",
    "business_address",
    "business_phone",
    "customer_second_phone",
    "tracking_number",
    "shipping_provider",
    "notes",
)


def is_non_empty_string(value: object) -> bool:
    return isinstance(value, str) and bool(value.strip())


def is_valid_invoice_number(value: object) -> bool:
    return is_non_empty_string(value) and bool(_INVOICE_NUMBER_RE.match(str(value)))


def is_valid_phone_number(value: object) -> bool:
    """Accept +94771234567, 0771234567, 077-123-4567 and similar."""
    if not is_non_empty_string(value):
        return False
    cleaned = _PHONE_SEPARATORS_RE.sub("", str(value))
    return bool(_PHONE_RE.match(cleaned))


def is_positive_number(value: object) -> bool:
    return _is_number(value) and float(value) > 0  # type: ignore[arg-type]


def is_non_negative_number(value: object) -> bool:
    return _is_number(value) and float(value) >= 0  # type: ignore[arg-type]


def is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def invoice_errors(invoice: InvoiceData, *, prefix: str = "") -> list[FieldError]:
    """Return every field-level violation of one invoice."""
    errors: list[FieldError] = []

    def add(field: str, message: str, value: object) -> None:
        errors.append(FieldError(field=f"{prefix}{field}", message=message, value=value))

    if not is_non_empty_string(invoice.invoice_number):
        add("invoice_number", "Invoice number is required", invoice.invoice_number)
    elif not is_valid_invoice_number(invoice.invoice_number):
        add(
            "invoice_number",
            "Invoice number must contain only alphanumeric characters, hyphens, or underscores",
            invoice.invoice_number,
        )

    for name, label in (
        ("customer_name", "Customer name"),
        ("customer_address", "Customer address"),
        ("product_name", "Product name"),
    ):
        value = getattr(invoice, name)
        if not is_non_empty_string(value):
            add(name, f"{label} is required", value)

    if not is_non_empty_string(invoice.customer_phone):
        add("customer_phone", "Customer phone is required", invoice.customer_phone)
    elif not is_valid_phone_number(invoice.customer_phone):
        add(
            "customer_phone",
            "Customer phone must be a valid phone number",
            invoice.customer_phone,
        )

    for name in _OPTIONAL_TEXT_FIELDS:
        value = getattr(invoice, name)
        if value is not None and not isinstance(value, str):
            add(name, f"{name} must be a string", value)

    second_phone = invoice.customer_second_phone
    if isinstance(second_phone, str) and second_phone and not is_valid_phone_number(second_phone):
        add(
            "customer_second_phone",
            "Customer second phone must be a valid phone number",
            second_phone,
        )

    if not is_positive_number(invoice.amount):
        add("amount", "Amount must be a positive number", invoice.amount)

    if not is_positive_int(invoice.quantity):
        add("quantity", "Quantity must be a positive integer", invoice.quantity)

    if not is_non_negative_number(invoice.discount):
        add("discount", "Discount cannot be negative", invoice.discount)

    if not isinstance(invoice.created_at, datetime):
        add("created_at", "Created date must be a valid datetime", invoice.created_at)

    return errors


def collect_errors(batch: BatchRequest) -> list[FieldError]:
    """Evaluate every batch rule and return all violations in one pass."""
    errors: list[FieldError] = []

    try:
        parse_format(batch.format)
    except ValueError:
        errors.append(
            FieldError(
                field="format",
                message="Invalid invoice format. Must be FULL_PAGE, HALF_PAGE, or QUARTER_PAGE",
                code=ErrorCode.INVALID_FORMAT,
                value=batch.format,
            )
        )

    count = len(batch.invoices)
    if count < MIN_BATCH_INVOICES:
        errors.append(
            FieldError(
                field="invoices",
                message="At least one invoice is required",
                code=ErrorCode.EMPTY_BATCH,
                value=count,
            )
        )
    if count > MAX_BATCH_INVOICES:
        errors.append(
            FieldError(
                field="invoices",
                message=f"Maximum {MAX_BATCH_INVOICES} invoices per batch",
                code=ErrorCode.BATCH_TOO_LARGE,
                value=count,
                details={"requested_count": count, "max_allowed": MAX_BATCH_INVOICES},
            )
        )

    for index, invoice in enumerate(batch.invoices):
        errors.extend(invoice_errors(invoice, prefix=f"invoices[{index}]."))

    return errors


def validate(batch: BatchRequest) -> None:
    errors = collect_errors(batch)
    if errors:
        logger.debug(
            "batch rejected with %d validation error(s)",
            len(errors),
            extra={"component": "validator", "action": "validate", "error_count": len(errors)},
        )
        raise BatchValidationError(errors)


__all__ = [
    "collect_errors",
    "invoice_errors",
    "is_non_empty_string",
    "is_non_negative_number",
    "is_positive_int",
    "is_positive_number",
    "is_valid_invoice_number",
    "is_valid_phone_number",
    "validate",
]
