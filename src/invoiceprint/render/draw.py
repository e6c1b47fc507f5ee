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

from fpdf import FPDF

from ..core.models import InvoiceData, InvoiceFormat
from ..formats.registry import FormatConfig
from .barcode import BarcodeImage
from .geometry import CutGuide, Position, cut_guides, dashed_segments
from .text import pdf_safe, truncate_to_width, wrap_text

FONT_FAMILY = "Helvetica"
THANK_YOU_TEXT = "Thank you for your business!"

CUT_LINE_WIDTH_MM = 0.1
CUT_LINE_COLOR = (150, 150, 150)
CUT_DASH_MM = 2.0
CUT_GAP_MM = 2.0

RULE_WIDTH_MM = 0.3
BARCODE_BOTTOM_GAP_MM = 5.0
BARCODE_CAPTION_GAP_MM = 3.0
HALF_PAGE_NOTE_LINES = 2


class _SlotWriter:
    """Baseline text cursor confined to one slot's content box."""

    def __init__(self, pdf: FPDF, config: FormatConfig, origin: Position) -> None:
        self.pdf = pdf
        self.config = config
        self.origin = origin
        self.x = origin.x_mm + config.margins_mm.left
        self.y = origin.y_mm + config.margins_mm.top
        self.width = config.content_width_mm

    def font(self, size: float, style: str = "") -> None:
        self.pdf.set_font(FONT_FAMILY, style=style, size=size)

    def text(self, value: str, *, offset: float = 0.0) -> None:
        available = max(1.0, self.width - offset)
        line = truncate_to_width(self.pdf, pdf_safe(value), available)
        self.pdf.text(self.x + offset, self.y, line)

    def advance(self, mm: float) -> None:
        self.y += mm

    def rule(self) -> None:
        self.pdf.set_line_width(RULE_WIDTH_MM)
        self.pdf.line(self.x, self.y, self.x + self.width, self.y)

    def wrapped(self, value: str, *, step: float, max_lines: int | None = None) -> None:
        for line in wrap_text(self.pdf, pdf_safe(value), self.width, max_lines=max_lines):
            self.pdf.text(self.x, self.y, line)
            self.y += step


def draw_invoice(
    pdf: FPDF,
    invoice: InvoiceData,
    config: FormatConfig,
    origin: Position,
    barcode: BarcodeImage,
) -> None:
    writer = _SlotWriter(pdf, config, origin)
    pdf.set_text_color(0, 0, 0)
    pdf.set_draw_color(0, 0, 0)
    if config.format is InvoiceFormat.FULL_PAGE:
        _draw_full_page(writer, invoice)
    elif config.format is InvoiceFormat.HALF_PAGE:
        _draw_half_page(writer, invoice)
    elif config.format is InvoiceFormat.QUARTER_PAGE:
        _draw_quarter_page(writer, invoice)
    else:
        raise TypeError(f"unsupported invoice format: {config.format!r}")
    barcode_top = draw_barcode(pdf, barcode, config, origin)
    if config.format is InvoiceFormat.FULL_PAGE:
        _draw_thank_you(pdf, config, origin, barcode_top)


def _draw_full_page(w: _SlotWriter, invoice: InvoiceData) -> None:
    sizes = w.config.font_sizes_pt
    width = w.width

    w.font(sizes.title, "B")
    w.text("INVOICE")
    w.advance(sizes.title * 0.8)

    w.font(sizes.normal)
    w.text(f"Invoice #: {invoice.invoice_number}")
    w.advance(sizes.normal * 0.8)
    w.text(f"Date: {_date(invoice)}")
    w.advance(sizes.normal * 1.2)

    if invoice.has_business_identity:
        w.font(sizes.normal, "B")
        w.text("FROM:")
        w.advance(sizes.normal * 0.7)
        w.font(sizes.normal)
        for line in _business_lines(invoice, with_address=True):
            w.text(line)
            w.advance(sizes.normal * 0.7)
        w.advance(sizes.normal * 0.8)

    w.font(sizes.normal, "B")
    w.text("TO:")
    w.advance(sizes.normal * 0.7)
    w.font(sizes.normal)
    for line in _customer_lines(invoice):
        w.text(line)
        w.advance(sizes.normal * 0.7)
    w.advance(sizes.normal * 1.2)

    w.font(sizes.normal, "B")
    w.text("ITEMIZED DETAILS:")
    w.advance(sizes.normal * 0.8)

    qty_x = width * 0.6
    price_x = width * 0.75
    w.font(sizes.small, "B")
    w.text("Product")
    w.text("Qty", offset=qty_x)
    w.text("Price", offset=price_x)
    w.advance(sizes.small * 0.7)
    w.rule()
    w.advance(sizes.small * 0.5)

    w.font(sizes.small)
    w.text(invoice.product_name)
    w.text(str(invoice.quantity), offset=qty_x)
    w.text(_money(invoice.amount), offset=price_x)
    w.advance(sizes.small * 0.8)

    if invoice.discount > 0:
        w.text("Discount")
        w.text(f"-{_money(invoice.discount)}", offset=price_x)
        w.advance(sizes.small * 0.8)

    w.rule()
    w.advance(sizes.small * 0.5)

    w.font(sizes.normal, "B")
    w.text("TOTAL:")
    w.text(_money(invoice.total), offset=price_x)
    w.advance(sizes.normal * 1.5)

    tracking = _tracking_line(invoice, prefix="Tracking")
    if tracking:
        w.font(sizes.small)
        w.text(tracking)
        w.advance(sizes.small * 0.8)

    if _present(invoice.notes):
        w.font(sizes.small, "I")
        w.wrapped(f"Notes: {invoice.notes}", step=sizes.small * 0.6)


def _draw_half_page(w: _SlotWriter, invoice: InvoiceData) -> None:
    sizes = w.config.font_sizes_pt
    half = w.width * 0.5

    w.font(sizes.title, "B")
    w.text("INVOICE")
    w.advance(sizes.title * 0.6)

    w.font(sizes.normal)
    w.text(f"#{invoice.invoice_number}")
    w.text(f"Date: {_date(invoice)}", offset=half)
    w.advance(sizes.normal * 0.8)

    if invoice.has_business_identity:
        w.font(sizes.small, "B")
        w.text("FROM:")
        w.advance(sizes.small * 0.5)
        w.font(sizes.small)
        for line in _business_lines(invoice, with_address=True):
            w.text(line)
            w.advance(sizes.small * 0.5)
        w.advance(sizes.small * 0.3)

    w.font(sizes.small, "B")
    w.text("TO:")
    w.advance(sizes.small * 0.5)
    w.font(sizes.small)
    for line in _customer_lines(invoice):
        w.text(line)
        w.advance(sizes.small * 0.5)
    w.advance(sizes.small * 0.6)

    w.font(sizes.small, "B")
    w.text("PRODUCT:")
    w.advance(sizes.small * 0.5)
    w.font(sizes.small)
    w.text(f"{invoice.product_name} (Qty: {invoice.quantity})")
    w.advance(sizes.small * 0.7)

    w.font(sizes.normal, "B")
    w.text(f"TOTAL: {_money(invoice.total)}")
    if invoice.discount > 0:
        w.font(sizes.small)
        w.text(f"(Discount: {_money(invoice.discount)})", offset=half)
    w.advance(sizes.normal * 0.8)

    tracking = _tracking_line(invoice, prefix="Track")
    if tracking:
        w.font(sizes.small)
        w.text(tracking)
        w.advance(sizes.small * 0.6)

    if _present(invoice.notes):
        w.font(sizes.small, "I")
        w.wrapped(
            f"Notes: {invoice.notes}",
            step=sizes.small * 0.5,
            max_lines=HALF_PAGE_NOTE_LINES,
        )


def _draw_quarter_page(w: _SlotWriter, invoice: InvoiceData) -> None:
    sizes = w.config.font_sizes_pt

    w.font(sizes.title, "B")
    w.text("INVOICE")
    w.advance(sizes.title * 0.5)

    w.font(sizes.small)
    w.text(f"#{invoice.invoice_number}")
    w.advance(sizes.small * 0.6)

    if invoice.has_business_identity:
        w.font(sizes.small, "B")
        w.text("FROM:")
        w.advance(sizes.small * 0.4)
        w.font(sizes.small)
        for line in _business_lines(invoice, with_address=False):
            w.text(line)
            w.advance(sizes.small * 0.4)
        w.advance(sizes.small * 0.2)

    w.font(sizes.small, "B")
    w.text("TO:")
    w.advance(sizes.small * 0.4)
    w.font(sizes.small)
    w.text(invoice.customer_name)
    w.advance(sizes.small * 0.4)
    # Single line; truncated with an ellipsis when wider than the slot.
    w.text(" ".join(invoice.customer_address.split()))
    w.advance(sizes.small * 0.4)
    w.text(f"Tel: {invoice.customer_phone}")
    w.advance(sizes.small * 0.6)

    w.text(f"{invoice.product_name} x{invoice.quantity}")
    w.advance(sizes.small * 0.5)

    w.font(sizes.small, "B")
    w.text(f"TOTAL: {_money(invoice.total)}")


def draw_barcode(pdf: FPDF, barcode: BarcodeImage, config: FormatConfig, origin: Position) -> float:
    """Place the barcode bottom-centre in the slot and caption it; return its top edge."""
    spec = barcode.spec
    slot = config.page_dimensions_mm
    x = origin.x_mm + (slot.width - spec.total_width_mm) / 2
    y = (
        origin.y_mm
        + slot.height
        - config.margins_mm.bottom
        - spec.total_height_mm
        - BARCODE_BOTTOM_GAP_MM
    )
    pdf.image(io.BytesIO(barcode.png), x=x, y=y, w=spec.total_width_mm, h=spec.total_height_mm)

    pdf.set_font(FONT_FAMILY, size=config.font_sizes_pt.small)
    caption = pdf_safe(spec.value)
    caption_x = origin.x_mm + (slot.width - pdf.get_string_width(caption)) / 2
    pdf.text(caption_x, y + spec.total_height_mm + BARCODE_CAPTION_GAP_MM, caption)
    return y


def _draw_thank_you(pdf: FPDF, config: FormatConfig, origin: Position, barcode_top: float) -> None:
    pdf.set_font(FONT_FAMILY, style="I", size=config.font_sizes_pt.normal)
    width = pdf.get_string_width(THANK_YOU_TEXT)
    x = origin.x_mm + (config.page_dimensions_mm.width - width) / 2
    pdf.text(x, barcode_top - 6.0, THANK_YOU_TEXT)


def draw_cut_guides(pdf: FPDF, format: InvoiceFormat) -> int:
    """Draw dashed cut guides for ``format``; return the number of guides drawn."""
    guides: tuple[CutGuide, ...] = cut_guides(format)
    if not guides:
        return 0
    pdf.set_line_width(CUT_LINE_WIDTH_MM)
    pdf.set_draw_color(*CUT_LINE_COLOR)
    for guide in guides:
        for dash in dashed_segments(guide, dash_mm=CUT_DASH_MM, gap_mm=CUT_GAP_MM):
            pdf.line(dash.x1_mm, dash.y1_mm, dash.x2_mm, dash.y2_mm)
    pdf.set_draw_color(0, 0, 0)
    return len(guides)


def _business_lines(invoice: InvoiceData, *, with_address: bool) -> list[str]:
    lines: list[str] = []
    if _present(invoice.business_name):
        lines.append(str(invoice.business_name))
    if with_address and _present(invoice.business_address):
        lines.append(str(invoice.business_address))
    if _present(invoice.business_phone):
        lines.append(f"Tel: {invoice.business_phone}")
    return lines


def _customer_lines(invoice: InvoiceData) -> list[str]:
    lines = [invoice.customer_name, invoice.customer_address, f"Tel: {invoice.customer_phone}"]
    if _present(invoice.customer_second_phone):
        lines.append(f"Tel 2: {invoice.customer_second_phone}")
    return lines


def _tracking_line(invoice: InvoiceData, *, prefix: str) -> str | None:
    if not _present(invoice.tracking_number):
        return None
    if _present(invoice.shipping_provider):
        return f"{prefix}: {invoice.tracking_number} ({invoice.shipping_provider})"
    return f"{prefix}: {invoice.tracking_number}"


def _date(invoice: InvoiceData) -> str:
    return invoice.created_at.strftime("%Y-%m-%d")


def _money(value: float) -> str:
    return f"{value:.2f}"


def _present(value: str | None) -> bool:
    return value is not None and bool(value.strip())
