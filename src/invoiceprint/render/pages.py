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

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Slot:
    invoice_index: int | None = None

    @property
    def is_blank(self) -> bool:
        return self.invoice_index is None


BLANK = Slot()


@dataclass(frozen=True)
class Page:
    index: int
    slots: tuple[Slot, ...]

    @property
    def capacity(self) -> int:
        return len(self.slots)

    @property
    def filled_count(self) -> int:
        return sum(1 for slot in self.slots if not slot.is_blank)

    @property
    def blank_count(self) -> int:
        return self.capacity - self.filled_count

    def filled(self) -> list[tuple[int, int]]:
        """Return ``(slot_index, invoice_index)`` pairs in slot order."""
        return [
            (slot_idx, slot.invoice_index)
            for slot_idx, slot in enumerate(self.slots)
            if slot.invoice_index is not None
        ]


def page_count(invoice_count: int, capacity: int) -> int:
    _check_args(invoice_count, capacity)
    return math.ceil(invoice_count / capacity)


def paginate(invoice_count: int, capacity: int) -> list[Page]:
    """Partition ``invoice_count`` ordered invoices into fixed-capacity pages.

    Invoices fill slots in list order; the trailing slots of the last page
    are blank so partial pages keep the full grid geometry.
    """
    total_pages = page_count(invoice_count, capacity)
    pages: list[Page] = []
    for page_idx in range(total_pages):
        start = page_idx * capacity
        slots = tuple(
            Slot(start + slot_idx) if start + slot_idx < invoice_count else BLANK
            for slot_idx in range(capacity)
        )
        pages.append(Page(index=page_idx, slots=slots))
    return pages


def _check_args(invoice_count: int, capacity: int) -> None:
    if capacity <= 0:
        raise ValueError("page capacity must be positive")
    if invoice_count < 0:
        raise ValueError("invoice count cannot be negative")
