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

from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Mapping

from ..core.bounds import MM_PER_INCH
from ..core.models import InvoiceFormat

# Grid boundaries on an A4 sheet. Kept as literals rather than derived from
# page dimensions so slot offsets stay exact across formats.
HALF_HEIGHT_MM: Final = 148.5
HALF_WIDTH_MM: Final = 105.0
SHEET_WIDTH_MM: Final = 210.0
SHEET_HEIGHT_MM: Final = 297.0

# Tolerance for coordinate comparisons
COORDINATE_EPSILON = 0.01


@dataclass(frozen=True)
class Position:
    x_mm: float
    y_mm: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x_mm, self.y_mm)


@dataclass(frozen=True)
class CutGuide:
    x1_mm: float
    y1_mm: float
    x2_mm: float
    y2_mm: float

    @property
    def horizontal(self) -> bool:
        return abs(self.y1_mm - self.y2_mm) < COORDINATE_EPSILON


_SLOT_POSITIONS: Final[Mapping[InvoiceFormat, tuple[Position, ...]]] = MappingProxyType(
    {
        InvoiceFormat.FULL_PAGE: (Position(0.0, 0.0),),
        InvoiceFormat.HALF_PAGE: (
            Position(0.0, 0.0),
            Position(0.0, HALF_HEIGHT_MM),
        ),
        InvoiceFormat.QUARTER_PAGE: (
            Position(0.0, 0.0),
            Position(HALF_WIDTH_MM, 0.0),
            Position(0.0, HALF_HEIGHT_MM),
            Position(HALF_WIDTH_MM, HALF_HEIGHT_MM),
        ),
    }
)

_HORIZONTAL_SPLIT: Final = CutGuide(0.0, HALF_HEIGHT_MM, SHEET_WIDTH_MM, HALF_HEIGHT_MM)
_VERTICAL_SPLIT: Final = CutGuide(HALF_WIDTH_MM, 0.0, HALF_WIDTH_MM, SHEET_HEIGHT_MM)

_CUT_GUIDES: Final[Mapping[InvoiceFormat, tuple[CutGuide, ...]]] = MappingProxyType(
    {
        InvoiceFormat.FULL_PAGE: (),
        InvoiceFormat.HALF_PAGE: (_HORIZONTAL_SPLIT,),
        InvoiceFormat.QUARTER_PAGE: (_HORIZONTAL_SPLIT, _VERTICAL_SPLIT),
    }
)


def slot_positions(format: InvoiceFormat) -> tuple[Position, ...]:
    return _SLOT_POSITIONS[format]


def position(format: InvoiceFormat, slot_index: int) -> Position:
    positions = _SLOT_POSITIONS[format]
    if slot_index < 0 or slot_index >= len(positions):
        raise IndexError(
            f"slot index {slot_index} out of range for {format.value} "
            f"({len(positions)} slot(s) per page)"
        )
    return positions[slot_index]


def cut_guides(format: InvoiceFormat) -> tuple[CutGuide, ...]:
    return _CUT_GUIDES[format]


def dashed_segments(
    guide: CutGuide,
    *,
    dash_mm: float,
    gap_mm: float,
) -> list[CutGuide]:
    """Split a straight guide into dash segments, clipped to its end point."""
    if dash_mm <= 0:
        raise ValueError("dash length must be positive")
    if gap_mm < 0:
        raise ValueError("gap length must be non-negative")
    step = dash_mm + gap_mm
    segments: list[CutGuide] = []
    if guide.horizontal:
        start, end = sorted((guide.x1_mm, guide.x2_mm))
        current = start
        while current < end - COORDINATE_EPSILON:
            stop = min(current + dash_mm, end)
            segments.append(CutGuide(current, guide.y1_mm, stop, guide.y1_mm))
            current += step
        return segments
    start, end = sorted((guide.y1_mm, guide.y2_mm))
    current = start
    while current < end - COORDINATE_EPSILON:
        stop = min(current + dash_mm, end)
        segments.append(CutGuide(guide.x1_mm, current, guide.x1_mm, stop))
        current += step
    return segments


def mm_to_px(mm: float, dpi: int) -> int:
    return int(round(mm / MM_PER_INCH * dpi))
