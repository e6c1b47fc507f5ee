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

from ..core.models import InvoiceFormat


@dataclass(frozen=True)
class Dimensions:
    width: float
    height: float


@dataclass(frozen=True)
class Margins:
    top: float
    right: float
    bottom: float
    left: float


@dataclass(frozen=True)
class FontSizes:
    title: float
    normal: float
    small: float


@dataclass(frozen=True)
class FormatConfig:
    format: InvoiceFormat
    invoices_per_page: int
    page_dimensions_mm: Dimensions
    margins_mm: Margins
    barcode_size_mm: Dimensions
    font_sizes_pt: FontSizes

    @property
    def content_width_mm(self) -> float:
        return self.page_dimensions_mm.width - self.margins_mm.left - self.margins_mm.right

    @property
    def content_height_mm(self) -> float:
        return self.page_dimensions_mm.height - self.margins_mm.top - self.margins_mm.bottom


@dataclass(frozen=True)
class FormatInfo:
    format: InvoiceFormat
    name: str
    description: str
    config: FormatConfig

    def to_dict(self) -> dict[str, object]:
        cfg = self.config
        return {
            "format": self.format.value,
            "name": self.name,
            "description": self.description,
            "invoices_per_page": cfg.invoices_per_page,
            "dimensions": {
                "width": cfg.page_dimensions_mm.width,
                "height": cfg.page_dimensions_mm.height,
            },
            "margins": {
                "top": cfg.margins_mm.top,
                "right": cfg.margins_mm.right,
                "bottom": cfg.margins_mm.bottom,
                "left": cfg.margins_mm.left,
            },
            "barcode_size": {
                "width": cfg.barcode_size_mm.width,
                "height": cfg.barcode_size_mm.height,
            },
            "font_size": {
                "title": cfg.font_sizes_pt.title,
                "normal": cfg.font_sizes_pt.normal,
                "small": cfg.font_sizes_pt.small,
            },
        }


# A4 portrait split into one, two (stacked) or four (2x2) slots.
_FORMAT_CONFIGS: Final[Mapping[InvoiceFormat, FormatConfig]] = MappingProxyType(
    {
        InvoiceFormat.FULL_PAGE: FormatConfig(
            format=InvoiceFormat.FULL_PAGE,
            invoices_per_page=1,
            page_dimensions_mm=Dimensions(width=210.0, height=297.0),
            margins_mm=Margins(top=20.0, right=20.0, bottom=20.0, left=20.0),
            barcode_size_mm=Dimensions(width=80.0, height=50.0),
            font_sizes_pt=FontSizes(title=16.0, normal=10.0, small=8.0),
        ),
        InvoiceFormat.HALF_PAGE: FormatConfig(
            format=InvoiceFormat.HALF_PAGE,
            invoices_per_page=2,
            page_dimensions_mm=Dimensions(width=210.0, height=148.5),
            margins_mm=Margins(top=10.0, right=15.0, bottom=10.0, left=15.0),
            barcode_size_mm=Dimensions(width=60.0, height=35.0),
            font_sizes_pt=FontSizes(title=12.0, normal=8.0, small=7.0),
        ),
        InvoiceFormat.QUARTER_PAGE: FormatConfig(
            format=InvoiceFormat.QUARTER_PAGE,
            invoices_per_page=4,
            page_dimensions_mm=Dimensions(width=105.0, height=148.5),
            margins_mm=Margins(top=8.0, right=8.0, bottom=8.0, left=8.0),
            barcode_size_mm=Dimensions(width=45.0, height=25.0),
            font_sizes_pt=FontSizes(title=10.0, normal=7.0, small=6.0),
        ),
    }
)

_FORMAT_NAMES: Final[Mapping[InvoiceFormat, tuple[str, str]]] = MappingProxyType(
    {
        InvoiceFormat.FULL_PAGE: (
            "Full Page",
            "1 invoice per page with generous spacing and detailed information",
        ),
        InvoiceFormat.HALF_PAGE: (
            "Half Page",
            "2 invoices per page with compact layout",
        ),
        InvoiceFormat.QUARTER_PAGE: (
            "Quarter Page",
            "4 invoices per page with minimal spacing for maximum efficiency",
        ),
    }
)

_FORMAT_ALIASES: Final[Mapping[str, InvoiceFormat]] = MappingProxyType(
    {
        "FULL": InvoiceFormat.FULL_PAGE,
        "HALF": InvoiceFormat.HALF_PAGE,
        "QUARTER": InvoiceFormat.QUARTER_PAGE,
    }
)

DEFAULT_FORMAT: Final = InvoiceFormat.FULL_PAGE

# The full page is the physical sheet every format prints on.
PAGE_SIZE_MM: Final = _FORMAT_CONFIGS[InvoiceFormat.FULL_PAGE].page_dimensions_mm


def config_for(format: InvoiceFormat) -> FormatConfig:
    if format is InvoiceFormat.FULL_PAGE:
        return _FORMAT_CONFIGS[InvoiceFormat.FULL_PAGE]
    if format is InvoiceFormat.HALF_PAGE:
        return _FORMAT_CONFIGS[InvoiceFormat.HALF_PAGE]
    if format is InvoiceFormat.QUARTER_PAGE:
        return _FORMAT_CONFIGS[InvoiceFormat.QUARTER_PAGE]
    raise TypeError(f"unsupported invoice format: {format!r}")


def invoices_per_page(format: InvoiceFormat) -> int:
    return config_for(format).invoices_per_page


def all_formats() -> tuple[InvoiceFormat, ...]:
    return tuple(InvoiceFormat)


def parse_format(value: object) -> InvoiceFormat:
    """Resolve an enum member or an open string to an InvoiceFormat.

    Accepts the canonical names (``QUARTER_PAGE``), CLI spellings
    (``quarter-page``) and short aliases (``quarter``).
    """
    if isinstance(value, InvoiceFormat):
        return value
    if not isinstance(value, str):
        raise ValueError("invoice format must be a string")
    normalized = value.strip().upper().replace("-", "_").replace(" ", "_")
    if not normalized:
        raise ValueError("invoice format is required")
    if normalized in _FORMAT_ALIASES:
        return _FORMAT_ALIASES[normalized]
    try:
        return InvoiceFormat(normalized)
    except ValueError:
        raise ValueError(
            f"invalid invoice format: {value!r}; must be FULL_PAGE, HALF_PAGE, or QUARTER_PAGE"
        ) from None


def format_info(format: InvoiceFormat) -> FormatInfo:
    name, description = _FORMAT_NAMES[format]
    return FormatInfo(format=format, name=name, description=description, config=config_for(format))


def format_metadata() -> list[FormatInfo]:
    return [format_info(fmt) for fmt in all_formats()]
