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

import logging
import time
from dataclasses import dataclass
from datetime import datetime

from .core.errors import BatchValidationError, GenerationError
from .core.models import BatchRequest, InvoiceFormat
from .core.validation import validate
from .formats.registry import invoices_per_page, parse_format
from .render.pages import paginate
from .render.pdf_render import assemble

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


@dataclass(frozen=True)
class GeneratedDocument:
    data: bytes
    filename: str
    content_type: str
    format: InvoiceFormat
    invoice_count: int
    page_count: int

    def to_dict(self) -> dict[str, object]:
        return {
            "filename": self.filename,
            "content_type": self.content_type,
            "format": self.format.value,
            "invoice_count": self.invoice_count,
            "page_count": self.page_count,
            "size_bytes": len(self.data),
        }


def suggested_filename(
    format: InvoiceFormat,
    count: int,
    timestamp_ms: int,
    ext: str = "pdf",
) -> str:
    return f"invoices-{format.slug}-{count}-{timestamp_ms}.{ext.lstrip('.')}"


def generate_document(
    batch: BatchRequest,
    *,
    show_cut_lines: bool = True,
    render_jobs: int | str | None = None,
    now: datetime | None = None,
) -> GeneratedDocument:
    """Validate, paginate and render ``batch`` into one PDF.

    The whole batch either renders or fails; no partial document is produced.
    """
    count = len(batch.invoices)
    context: dict[str, object] = {
        "component": "generator",
        "action": "generate",
        "format": getattr(batch.format, "value", batch.format),
        "invoice_count": count,
    }
    try:
        validate(batch)
    except BatchValidationError as exc:
        logger.error(
            "invoice validation failed",
            extra={**context, "validation_errors": len(exc.errors)},
        )
        raise
    format = parse_format(batch.format)
    logger.info("starting invoice generation", extra=context)

    pages = paginate(count, invoices_per_page(format))
    try:
        data = assemble(
            pages,
            batch.invoices,
            format,
            show_cut_lines=show_cut_lines,
            render_jobs=render_jobs,
        )
    except GenerationError:
        logger.error("invoice generation failed", exc_info=True, extra=context)
        raise

    timestamp_ms = int(now.timestamp() * 1000) if now is not None else time.time_ns() // 1_000_000
    document = GeneratedDocument(
        data=data,
        filename=suggested_filename(format, count, timestamp_ms),
        content_type=PDF_CONTENT_TYPE,
        format=format,
        invoice_count=count,
        page_count=len(pages),
    )
    logger.info(
        "invoice generation completed",
        extra={**context, "page_count": document.page_count, "pdf_size": len(data)},
    )
    return document


__all__ = [
    "GeneratedDocument",
    "PDF_CONTENT_TYPE",
    "generate_document",
    "suggested_filename",
]
