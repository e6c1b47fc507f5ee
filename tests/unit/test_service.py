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

import unittest
from datetime import datetime, timezone
from unittest import mock

from invoiceprint.core.errors import BarcodeError, BatchValidationError, ErrorCode
from invoiceprint.core.models import BatchRequest, InvoiceFormat
from invoiceprint.service import PDF_CONTENT_TYPE, generate_document, suggested_filename
from tests.test_support import make_batch, make_invoice, make_invoices

_NOW = datetime.fromtimestamp(1_700_000_000, tz=timezone.utc)


class TestSuggestedFilename(unittest.TestCase):
    def test_pattern(self) -> None:
        self.assertEqual(
            suggested_filename(InvoiceFormat.QUARTER_PAGE, 7, 1_700_000_000_000),
            "invoices-quarter-page-7-1700000000000.pdf",
        )
        self.assertEqual(
            suggested_filename(InvoiceFormat.FULL_PAGE, 1, 5, ext=".pdf"),
            "invoices-full-page-1-5.pdf",
        )


class TestGenerateDocument(unittest.TestCase):
    def test_quarter_page_batch(self) -> None:
        document = generate_document(
            make_batch(7, InvoiceFormat.QUARTER_PAGE),
            render_jobs=1,
            now=_NOW,
        )
        self.assertTrue(document.data.startswith(b"%PDF-"))
        self.assertEqual(document.filename, "invoices-quarter-page-7-1700000000000.pdf")
        self.assertEqual(document.content_type, PDF_CONTENT_TYPE)
        self.assertIs(document.format, InvoiceFormat.QUARTER_PAGE)
        self.assertEqual(document.invoice_count, 7)
        self.assertEqual(document.page_count, 2)
        payload = document.to_dict()
        self.assertEqual(payload["format"], "QUARTER_PAGE")
        self.assertEqual(payload["size_bytes"], len(document.data))

    def test_page_counts_per_format(self) -> None:
        cases = (
            (InvoiceFormat.FULL_PAGE, 3, 3),
            (InvoiceFormat.HALF_PAGE, 5, 3),
            (InvoiceFormat.QUARTER_PAGE, 100, 25),
        )
        for fmt, count, pages in cases:
            with self.subTest(format=fmt, count=count):
                with mock.patch("invoiceprint.service.assemble", return_value=b"%PDF-1.3"):
                    document = generate_document(make_batch(count, fmt), now=_NOW)
                self.assertEqual(document.page_count, pages)

    def test_string_format_is_accepted(self) -> None:
        document = generate_document(make_batch(3, "half"), render_jobs=1, now=_NOW)
        self.assertIs(document.format, InvoiceFormat.HALF_PAGE)
        self.assertEqual(document.page_count, 2)
        self.assertTrue(document.filename.startswith("invoices-half-page-3-"))

    def test_validation_failure_skips_rendering(self) -> None:
        batch = BatchRequest.of(
            [make_invoice(1), make_invoice(2, amount=-10.0), make_invoice(3, discount=-5.0)],
            InvoiceFormat.FULL_PAGE,
        )
        with mock.patch("invoiceprint.service.assemble") as assemble:
            with self.assertLogs("invoiceprint.service", level="ERROR"):
                with self.assertRaises(BatchValidationError) as ctx:
                    generate_document(batch)
        assemble.assert_not_called()
        self.assertEqual(
            ctx.exception.fields(),
            ["invoices[1].amount", "invoices[2].discount"],
        )

    def test_batch_limits(self) -> None:
        with mock.patch("invoiceprint.service.assemble") as assemble:
            with self.assertRaises(BatchValidationError) as ctx:
                generate_document(make_batch(101, InvoiceFormat.QUARTER_PAGE))
            self.assertEqual(ctx.exception.codes(), {ErrorCode.BATCH_TOO_LARGE})
            with self.assertRaises(BatchValidationError) as ctx:
                generate_document(BatchRequest.of([], InvoiceFormat.QUARTER_PAGE))
            self.assertEqual(ctx.exception.codes(), {ErrorCode.EMPTY_BATCH})
        assemble.assert_not_called()

    def test_barcode_failure_produces_no_document(self) -> None:
        invoices = make_invoices(2)
        invoices.append(make_invoice(3, tracking_number="RA 023-61192!"))
        with self.assertLogs("invoiceprint.service", level="ERROR"):
            with self.assertRaises(BarcodeError):
                generate_document(BatchRequest.of(invoices, InvoiceFormat.HALF_PAGE), render_jobs=1)

    def test_overlong_tracking_number_fails_whole_batch(self) -> None:
        invoices = make_invoices(3)
        invoices[1] = make_invoice(2, tracking_number="AB-" * 30)
        with self.assertLogs("invoiceprint.service", level="ERROR"):
            with self.assertRaises(BarcodeError) as ctx:
                generate_document(BatchRequest.of(invoices, InvoiceFormat.QUARTER_PAGE), render_jobs=1)
        self.assertEqual(ctx.exception.code, ErrorCode.VALUE_TOO_LONG)

    def test_logs_start_and_completion(self) -> None:
        with mock.patch("invoiceprint.service.assemble", return_value=b"%PDF-1.3"):
            with self.assertLogs("invoiceprint.service", level="INFO") as logs:
                generate_document(make_batch(2, InvoiceFormat.HALF_PAGE), now=_NOW)
        messages = [record.getMessage() for record in logs.records]
        self.assertEqual(messages, ["starting invoice generation", "invoice generation completed"])
        completed = logs.records[-1]
        self.assertEqual(completed.page_count, 1)
        self.assertEqual(completed.format, "HALF_PAGE")
        self.assertEqual(completed.component, "generator")


if __name__ == "__main__":
    unittest.main()
