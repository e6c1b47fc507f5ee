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

import concurrent.futures
import functools
import logging
import os
from datetime import datetime, timezone
from typing import Callable, Sequence

from fpdf import FPDF
from fpdf.errors import FPDFException

from ..core.errors import GenerationError, RenderError
from ..core.models import InvoiceData, InvoiceFormat
from ..formats.registry import PAGE_SIZE_MM, config_for
from .barcode import BarcodeImage, encode_barcode
from .draw import draw_cut_guides, draw_invoice
from .geometry import position
from .pages import Page

logger = logging.getLogger(__name__)

_RENDER_JOBS_ENV = "INVOICEPRINT_RENDER_JOBS"
_DEFAULT_RENDER_WORKERS_CAP = 8
_MIN_BARCODES_PER_WORKER = 4
_DOCUMENT_CREATOR = "invoiceprint"


def assemble(
    pages: Sequence[Page],
    invoices: Sequence[InvoiceData],
    format: InvoiceFormat,
    *,
    show_cut_lines: bool = True,
    render_jobs: int | str | None = None,
) -> bytes:
    """Draw ``pages`` into a single A4 PDF and return its bytes.

    Nothing is returned unless every page and barcode rendered; unexpected
    drawing failures surface as :class:`RenderError`.
    """
    _check_pages(pages, invoices, format)
    _parse_render_jobs(render_jobs, label="render_jobs")
    try:
        pdf = _build_pdf(
            pages,
            invoices,
            format,
            show_cut_lines=show_cut_lines,
            render_jobs=render_jobs,
        )
        data = bytes(pdf.output())
    except GenerationError:
        raise
    except (FPDFException, OSError, RuntimeError, ValueError, TypeError, LookupError) as exc:
        logger.error(
            "document assembly failed",
            exc_info=True,
            extra={
                "component": "assembler",
                "action": "assemble",
                "format": format.value,
                "invoice_count": len(invoices),
            },
        )
        raise RenderError(f"failed to render invoice document: {exc}") from exc
    return data


def _build_pdf(
    pages: Sequence[Page],
    invoices: Sequence[InvoiceData],
    format: InvoiceFormat,
    *,
    show_cut_lines: bool,
    render_jobs: int | str | None,
) -> FPDF:
    config = config_for(format)
    filled = [invoice_idx for page in pages for _slot_idx, invoice_idx in page.filled()]
    worker = functools.partial(encode_barcode, format=format)
    images = _render_barcodes([invoices[idx].barcode_value for idx in filled], worker, render_jobs)
    barcodes: dict[int, BarcodeImage] = dict(zip(filled, images))

    pdf = FPDF(unit="mm", format=(PAGE_SIZE_MM.width, PAGE_SIZE_MM.height))
    pdf.set_auto_page_break(False)
    pdf.set_margin(0)
    pdf.set_creator(_DOCUMENT_CREATOR)
    pdf.set_title(f"Invoices ({format.value})")
    pdf.set_creation_date(_creation_date(invoices))

    draw_guides = show_cut_lines and config.invoices_per_page > 1
    for page in pages:
        pdf.add_page()
        for slot_idx, invoice_idx in page.filled():
            draw_invoice(
                pdf,
                invoices[invoice_idx],
                config,
                position(format, slot_idx),
                barcodes[invoice_idx],
            )
        if draw_guides:
            draw_cut_guides(pdf, format)

    logger.debug(
        "assembled %d page(s)",
        len(pages),
        extra={
            "component": "assembler",
            "action": "assemble",
            "format": format.value,
            "invoice_count": len(filled),
        },
    )
    return pdf


def _check_pages(pages: Sequence[Page], invoices: Sequence[InvoiceData], format: InvoiceFormat) -> None:
    if not pages:
        raise ValueError("pages cannot be empty")
    capacity = config_for(format).invoices_per_page
    for page in pages:
        if page.capacity != capacity:
            raise ValueError(
                f"page {page.index} has {page.capacity} slot(s); {format.value} pages have {capacity}"
            )
        for _slot_idx, invoice_idx in page.filled():
            if invoice_idx < 0 or invoice_idx >= len(invoices):
                raise ValueError(f"page {page.index} references missing invoice {invoice_idx}")


def _creation_date(invoices: Sequence[InvoiceData]) -> datetime:
    stamps = [_as_utc(invoice.created_at) for invoice in invoices]
    if not stamps:
        return datetime.now(timezone.utc)
    return max(stamps)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _render_barcodes(
    values: list[str],
    barcode_worker: Callable[[str], BarcodeImage],
    render_jobs: int | str | None = None,
) -> list[BarcodeImage]:
    if not values:
        return []

    workers = _resolve_render_workers(len(values), render_jobs)
    if workers <= 1:
        return [barcode_worker(value) for value in values]

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(barcode_worker, values))


def _resolve_render_workers(task_count: int, render_jobs: int | str | None = None) -> int:
    requested = _parse_render_jobs(render_jobs, label="render_jobs")
    explicit = requested is not None
    if requested is None:
        requested = _parse_render_jobs(os.environ.get(_RENDER_JOBS_ENV), label=_RENDER_JOBS_ENV)
        explicit = requested is not None

    cpu = os.cpu_count() or 1
    if requested is None:
        requested = min(cpu, _DEFAULT_RENDER_WORKERS_CAP)

    workers = max(1, min(requested, cpu, task_count))
    if not explicit:
        workers = min(workers, max(1, task_count // _MIN_BARCODES_PER_WORKER))

    return max(1, workers)


def _parse_render_jobs(value: int | str | None, *, label: str) -> int | None:
    """Return an explicit worker count, or ``None`` for ``auto``/unset."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"{label} must be a positive integer or 'auto'")
    if isinstance(value, int):
        if value <= 0:
            raise ValueError(f"{label} must be a positive integer or 'auto'")
        return value
    raw = str(value).strip().lower()
    if not raw or raw == "auto":
        return None
    try:
        parsed = int(raw)
    except ValueError:
        raise ValueError(f"{label} must be a positive integer or 'auto'") from None
    if parsed <= 0:
        raise ValueError(f"{label} must be a positive integer or 'auto'")
    return parsed


__all__ = ["assemble"]
