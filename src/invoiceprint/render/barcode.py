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

import io
import logging
import re
from dataclasses import dataclass

from barcode import Code128
from PIL import Image, ImageDraw

from ..core.bounds import BARCODE_DPI, BARCODE_QUIET_ZONE_MM, MIN_MODULE_PX
from ..core.errors import BarcodeError, ErrorCode
from ..core.models import InvoiceFormat
from ..formats.registry import Dimensions, config_for
from .geometry import mm_to_px

logger = logging.getLogger(__name__)

_BARCODE_VALUE_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_WHITE = (255, 255, 255)
_BLACK = (0, 0, 0)


@dataclass(frozen=True)
class BarcodeSpec:
    value: str
    content_width_mm: float
    content_height_mm: float
    margin_mm: float = BARCODE_QUIET_ZONE_MM

    @property
    def total_width_mm(self) -> float:
        return self.content_width_mm + 2 * self.margin_mm

    @property
    def total_height_mm(self) -> float:
        return self.content_height_mm + 2 * self.margin_mm


@dataclass(frozen=True)
class BarcodeImage:
    spec: BarcodeSpec
    png: bytes
    width_px: int
    height_px: int
    dpi: int

    @property
    def margin_px(self) -> int:
        return mm_to_px(self.spec.margin_mm, self.dpi)


def validate_barcode_value(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise BarcodeError(ErrorCode.EMPTY_VALUE, str(value or ""), "barcode value is required")
    if not _BARCODE_VALUE_RE.match(value):
        raise BarcodeError(
            ErrorCode.INVALID_CHARACTERS,
            value,
            f"barcode value {value!r} may only contain letters, digits, hyphens, or underscores",
        )
    return value


def barcode_spec(value: str, format: InvoiceFormat) -> BarcodeSpec:
    size = config_for(format).barcode_size_mm
    return BarcodeSpec(
        value=value,
        content_width_mm=size.width,
        content_height_mm=size.height,
    )


def barcode_dimensions(format: InvoiceFormat) -> Dimensions:
    """Total printed size of a barcode for ``format``, quiet zone included."""
    size = config_for(format).barcode_size_mm
    return Dimensions(
        width=size.width + 2 * BARCODE_QUIET_ZONE_MM,
        height=size.height + 2 * BARCODE_QUIET_ZONE_MM,
    )


def encode_barcode(value: str, format: InvoiceFormat, *, dpi: int = BARCODE_DPI) -> BarcodeImage:
    if dpi <= 0:
        raise ValueError("dpi must be positive")
    validate_barcode_value(value)
    spec = barcode_spec(value, format)
    modules = _code128_modules(value)

    width_px = mm_to_px(spec.total_width_mm, dpi)
    height_px = mm_to_px(spec.total_height_mm, dpi)
    margin_px = mm_to_px(spec.margin_mm, dpi)
    content_w = width_px - 2 * margin_px
    content_h = height_px - 2 * margin_px
    if content_w < len(modules) * MIN_MODULE_PX:
        raise BarcodeError(
            ErrorCode.VALUE_TOO_LONG,
            value,
            f"barcode value {value!r} is too long for the {format.value} barcode area",
        )

    # Bars stay inside the content box; the margin band is left white.
    image = Image.new("RGB", (width_px, height_px), _WHITE)
    draw = ImageDraw.Draw(image)
    total = len(modules)
    for start, stop in _dark_runs(modules):
        x0 = margin_px + round(start * content_w / total)
        x1 = margin_px + round(stop * content_w / total) - 1
        draw.rectangle((x0, margin_px, x1, margin_px + content_h - 1), fill=_BLACK)

    buf = io.BytesIO()
    image.save(buf, format="PNG", dpi=(dpi, dpi))
    logger.debug(
        "encoded barcode",
        extra={
            "component": "barcode",
            "action": "encode",
            "format": format.value,
            "modules": total,
        },
    )
    return BarcodeImage(spec=spec, png=buf.getvalue(), width_px=width_px, height_px=height_px, dpi=dpi)


def _code128_modules(value: str) -> str:
    """Return the Code 128 bar pattern as a string of ``1`` (bar) and ``0`` (space)."""
    return Code128(value).build()[0]


def _dark_runs(modules: str) -> list[tuple[int, int]]:
    runs: list[tuple[int, int]] = []
    start: int | None = None
    for idx, bit in enumerate(modules):
        if bit == "1" and start is None:
            start = idx
        elif bit != "1" and start is not None:
            runs.append((start, idx))
            start = None
    if start is not None:
        runs.append((start, len(modules)))
    return runs


__all__ = [
    "BarcodeImage",
    "BarcodeSpec",
    "barcode_dimensions",
    "barcode_spec",
    "encode_barcode",
    "validate_barcode_value",
]
