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

import typer

from ...formats.registry import format_metadata
from ..core.common import _ctx_value, _run_cli
from ..ui import build_formats_table, console

_FORMATS_HELP = (
    "List the supported invoice layouts.\n\n"
    "Examples:\n"
    "  invoiceprint formats\n"
    "  invoiceprint formats --json\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_FORMATS_HELP)(formats)


def formats(
    ctx: typer.Context,
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print format metadata as JSON.",
        rich_help_panel="Outputs",
    ),
) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        infos = format_metadata()
        if as_json:
            typer.echo(json.dumps([info.to_dict() for info in infos], indent=2))
            return
        console.print(build_formats_table(infos))

    _run_cli(_run, debug=debug_value)
