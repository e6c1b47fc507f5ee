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

from pathlib import Path

import typer

from ...config import AppConfig, load_preferences, record_last_used_format
from ...core.models import BatchRequest, InvoiceFormat
from ...service import GeneratedDocument, generate_document
from ..core.common import _ctx_app_config, _ctx_value, _run_cli
from ..core.log import _warn
from ..io.inputs import load_batch_file
from ..ui import build_kv_table, console, panel

_GENERATE_HELP = (
    "Render a batch of invoices into one printable A4 PDF.\n\n"
    "INPUT is a JSON file (or - for stdin) holding either a list of invoices or\n"
    'an object {"format": ..., "invoices": [...]}.\n\n'
    "Examples:\n"
    "  invoiceprint generate batch.json\n"
    "  invoiceprint generate batch.json --format quarter -o labels.pdf\n"
    "  cat batch.json | invoiceprint generate - --format half-page --no-cut-lines\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_GENERATE_HELP)(generate)


def generate(
    ctx: typer.Context,
    input: str = typer.Argument(..., help="JSON batch file, or - for stdin."),
    format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="FULL_PAGE, HALF_PAGE or QUARTER_PAGE (also full/half/quarter).",
        rich_help_panel="Layout",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output PDF path or directory (defaults to a generated filename).",
        rich_help_panel="Outputs",
    ),
    no_cut_lines: bool = typer.Option(
        False,
        "--no-cut-lines",
        help="Omit dashed cut guides on multi-invoice sheets.",
        rich_help_panel="Layout",
    ),
    jobs: str | None = typer.Option(
        None,
        "--jobs",
        "-j",
        help="Barcode render workers ('auto' or a positive integer).",
        rich_help_panel="Runtime",
    ),
) -> None:
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        app_config = _ctx_app_config(ctx)
        batch_file = load_batch_file(input)
        prefs = load_preferences()
        format_value: InvoiceFormat | str = (
            format
            or batch_file.format
            or app_config.generate.default_format
            or prefs.preferred_format
        )
        show_cut_lines = (
            not no_cut_lines and app_config.generate.show_cut_lines and prefs.show_cut_lines
        )
        render_jobs = jobs if jobs is not None else app_config.runtime.render_jobs

        document = generate_document(
            BatchRequest.of(batch_file.invoices, format_value),
            show_cut_lines=show_cut_lines,
            render_jobs=render_jobs,
        )
        output_path = _resolve_output_path(output, document, app_config)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(document.data)

        try:
            record_last_used_format(document.format)
        except OSError as exc:
            _warn(f"unable to save format preference: {exc}", quiet=quiet_value)

        _print_generate_summary(document, output_path, quiet=quiet_value)

    _run_cli(_run, debug=debug_value)


def _resolve_output_path(
    output: Path | None,
    document: GeneratedDocument,
    app_config: AppConfig,
) -> Path:
    if output is not None:
        resolved = output.expanduser()
        if resolved.is_dir():
            return resolved / document.filename
        return resolved
    base_dir = app_config.generate.output_dir
    if base_dir:
        return Path(base_dir).expanduser() / document.filename
    return Path.cwd() / document.filename


def _print_generate_summary(document: GeneratedDocument, output_path: Path, *, quiet: bool) -> None:
    if quiet:
        return
    invoices = "invoice" if document.invoice_count == 1 else "invoices"
    pages = "page" if document.page_count == 1 else "pages"
    rows = [
        ("Format", document.format.value),
        ("Invoices", f"{document.invoice_count} {invoices}"),
        ("Pages", f"{document.page_count} {pages}"),
        ("Size", f"{len(document.data)} bytes"),
        ("Output", str(output_path)),
    ]
    console.print(panel("Invoices generated", build_kv_table(rows)))
