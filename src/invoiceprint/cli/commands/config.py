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

import typer

from ...config import (
    clear_preferences,
    init_user_config,
    load_app_config,
    load_preferences,
    preferences_path,
    resolve_config_path,
    set_default_format,
    set_show_cut_lines,
)
from ...formats import parse_format
from ..core.common import _ctx_value, _run_cli
from ..ui import build_kv_table, console, panel

_CONFIG_HELP = (
    "Show the active configuration and stored format preferences.\n\n"
    "Examples:\n"
    "  invoiceprint config\n"
    "  invoiceprint config --init\n"
    "  invoiceprint config --print-path\n"
    "  invoiceprint config --set-default-format half-page\n"
    "  invoiceprint config --no-cut-lines\n"
    "  invoiceprint config --reset-preferences\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_CONFIG_HELP)(config)


def config(
    ctx: typer.Context,
    init: bool = typer.Option(
        False,
        "--init",
        help="Copy the packaged defaults to the user config directory.",
        rich_help_panel="Behavior",
    ),
    print_path: bool = typer.Option(
        False,
        "--print-path",
        help="Print the resolved config path and exit.",
        rich_help_panel="Behavior",
    ),
    reset_preferences: bool = typer.Option(
        False,
        "--reset-preferences",
        help="Forget the stored default and last used formats.",
        rich_help_panel="Behavior",
    ),
    default_format: str | None = typer.Option(
        None,
        "--set-default-format",
        help="Store the format used when none is given (FULL_PAGE, HALF_PAGE, QUARTER_PAGE).",
        rich_help_panel="Preferences",
    ),
    cut_lines: bool | None = typer.Option(
        None,
        "--cut-lines/--no-cut-lines",
        help="Store whether multi-invoice pages get cut guides.",
        rich_help_panel="Preferences",
    ),
) -> None:
    config_value = _ctx_value(ctx, "config")
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        if init:
            path = init_user_config()
            console.print(f"User config ready at {path}")
            return
        if reset_preferences:
            removed = clear_preferences()
            if not quiet_value:
                console.print("Preferences cleared." if removed else "No stored preferences.")
            return
        if default_format is not None or cut_lines is not None:
            _store_preferences(default_format, cut_lines, quiet=quiet_value)
            return
        path = resolve_config_path(config_value)
        if print_path:
            console.print(str(path), soft_wrap=True)
            return

        app_config = load_app_config(config_value)
        prefs = load_preferences()
        config_format = app_config.generate.default_format
        rows = [
            ("Config file", str(path)),
            ("Default format", config_format.value if config_format else "(preferences)"),
            ("Cut lines", "on" if app_config.generate.show_cut_lines else "off"),
            ("Output dir", app_config.generate.output_dir or "(current directory)"),
            ("Render jobs", str(app_config.runtime.render_jobs or "auto")),
            ("Log level", app_config.logging.level),
            ("Preferences file", str(preferences_path())),
            ("Stored default", prefs.default_format.value),
            ("Preferred format", prefs.preferred_format.value),
            ("Stored cut lines", "on" if prefs.show_cut_lines else "off"),
        ]
        console.print(panel("Configuration", build_kv_table(rows)))

    _run_cli(_run, debug=debug_value)


def _store_preferences(default_format: str | None, cut_lines: bool | None, *, quiet: bool) -> None:
    if default_format is not None:
        format = parse_format(default_format)
        set_default_format(format)
        if not quiet:
            console.print(f"Default format set to {format.value}.")
    if cut_lines is not None:
        set_show_cut_lines(cut_lines)
        if not quiet:
            console.print(f"Cut lines {'on' if cut_lines else 'off'}.")
