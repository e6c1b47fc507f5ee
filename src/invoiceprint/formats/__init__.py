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

from .registry import (
    DEFAULT_FORMAT,
    PAGE_SIZE_MM,
    Dimensions,
    FontSizes,
    FormatConfig,
    FormatInfo,
    Margins,
    all_formats,
    config_for,
    format_info,
    format_metadata,
    invoices_per_page,
    parse_format,
)

__all__ = [
    "DEFAULT_FORMAT",
    "Dimensions",
    "FontSizes",
    "FormatConfig",
    "FormatInfo",
    "Margins",
    "PAGE_SIZE_MM",
    "all_formats",
    "config_for",
    "format_info",
    "format_metadata",
    "invoices_per_page",
    "parse_format",
]
