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

from collections.abc import Sequence

from rich import box
from rich.panel import Panel
from rich.table import Table

from ...formats.registry import FormatInfo
from .state import UIContext, get_context, isatty

DEFAULT_CONTEXT = get_context()
THEME = DEFAULT_CONTEXT.theme
console = DEFAULT_CONTEXT.console
console_err = DEFAULT_CONTEXT.console_err


def _resolve_context(context: UIContext | None) -> UIContext:
    return context or DEFAULT_CONTEXT


def configure_ui(*, no_color: bool, quiet: bool = False, context: UIContext | None = None) -> None:
    context = _resolve_context(context)
    context.quiet = quiet
    context.console.no_color = no_color
    context.console_err.no_color = no_color


def build_kv_table(rows: Sequence[tuple[str, str]], *, title: str | None = None) -> Table:
    table = Table(title=title, show_header=False, box=box.SIMPLE, show_lines=False)
    table.add_column("Field", style="bold", no_wrap=True)
    table.add_column("Value")
    for key, value in rows:
        table.add_row(str(key), str(value))
    return table


def build_formats_table(infos: Sequence[FormatInfo]) -> Table:
    table = Table(box=box.SIMPLE_HEAD, show_lines=False)
    table.add_column("Format", style="accent", no_wrap=True)
    table.add_column("Name", no_wrap=True)
    table.add_column("Per page", justify="right")
    table.add_column("Slot (mm)", no_wrap=True)
    table.add_column("Barcode (mm)", no_wrap=True)
    table.add_column("Description", style="muted")
    for info in infos:
        cfg = info.config
        table.add_row(
            info.format.value,
            info.name,
            str(cfg.invoices_per_page),
            f"{cfg.page_dimensions_mm.width:g} x {cfg.page_dimensions_mm.height:g}",
            f"{cfg.barcode_size_mm.width:g} x {cfg.barcode_size_mm.height:g}",
            info.description,
        )
    return table


def panel(title: str, renderable, *, style: str = "panel") -> Panel:
    return Panel(
        renderable,
        title=title,
        title_align="left",
        border_style=style,
        box=box.ROUNDED,
        padding=(0, 1),
    )


__all__ = [
    "THEME",
    "UIContext",
    "build_formats_table",
    "build_kv_table",
    "configure_ui",
    "console",
    "console_err",
    "get_context",
    "isatty",
    "panel",
]
