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

# Maximum invoices accepted in one generation call.
MAX_BATCH_INVOICES = 100

# Minimum invoices accepted in one generation call.
MIN_BATCH_INVOICES = 1

# Blank quiet zone around every barcode symbol, on all four sides.
BARCODE_QUIET_ZONE_MM = 2.0

# Raster resolution for barcode images embedded in the document.
BARCODE_DPI = 300

# Narrowest bar or space a barcode raster may use, in pixels.
MIN_MODULE_PX = 2

# Phone numbers must carry this many digits once separators are removed.
MIN_PHONE_DIGITS = 9
MAX_PHONE_DIGITS = 15

# Millimetres per inch, for raster sizing.
MM_PER_INCH = 25.4


__all__ = [
    "BARCODE_DPI",
    "BARCODE_QUIET_ZONE_MM",
    "MAX_BATCH_INVOICES",
    "MAX_PHONE_DIGITS",
    "MIN_BATCH_INVOICES",
    "MIN_MODULE_PX",
    "MIN_PHONE_DIGITS",
    "MM_PER_INCH",
]
