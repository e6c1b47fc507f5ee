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

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Sequence


class InvoiceFormat(str, Enum):
    FULL_PAGE = "FULL_PAGE"
    HALF_PAGE = "HALF_PAGE"
    QUARTER_PAGE = "QUARTER_PAGE"

    @property
    def slug(self) -> str:
        return self.value.lower().replace("_", "-")


@dataclass(frozen=True)
class InvoiceData:
    """One billable record, already resolved from orders and tenant data."""

    invoice_number: str
    customer_name: str
    customer_address: str
    customer_phone: str
    amount: float
    product_name: str
    quantity: int
    discount: float
    created_at: datetime
    business_name: str | None = None
    business_address: str | None = None
    business_phone: str | None = None
    customer_second_phone: str | None = None
    tracking_number: str | None = None
    shipping_provider: str | None = None
    notes: str | None = None

    @property
    def total(self) -> float:
        return self.amount - self.discount

    @property
    def has_business_identity(self) -> bool:
        return any(
            _has_text(value)
            for value in (self.business_name, self.business_address, self.business_phone)
        )

    @property
    def barcode_value(self) -> str:
        if _has_text(self.tracking_number):
            return str(self.tracking_number)
        return self.invoice_number


@dataclass(frozen=True)
class BatchRequest:
    invoices: tuple[InvoiceData, ...] = field(default_factory=tuple)
    format: InvoiceFormat | str = InvoiceFormat.FULL_PAGE

    @classmethod
    def of(cls, invoices: Sequence[InvoiceData], format: InvoiceFormat | str) -> "BatchRequest":
        return cls(invoices=tuple(invoices), format=format)

    def __len__(self) -> int:
        return len(self.invoices)


def _has_text(value: str | None) -> bool:
    return value is not None and bool(value.strip())


__all__ = [
    "BatchRequest",
    "InvoiceData",
    "InvoiceFormat",
]
