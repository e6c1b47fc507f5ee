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
from datetime import datetime

from invoiceprint.core.errors import BatchValidationError, ErrorCode
from invoiceprint.core.models import BatchRequest, InvoiceFormat
from invoiceprint.core.validation import (
    collect_errors,
    is_valid_invoice_number,
    is_valid_phone_number,
    validate,
)
from tests.test_support import make_batch, make_invoice, make_invoices


class TestCollectErrors(unittest.TestCase):
    def test_valid_batch_has_no_errors(self) -> None:
        for fmt in InvoiceFormat:
            with self.subTest(format=fmt):
                self.assertEqual(collect_errors(make_batch(5, fmt)), [])

    def test_empty_batch(self) -> None:
        errors = collect_errors(BatchRequest.of([], InvoiceFormat.FULL_PAGE))
        self.assertEqual([error.code for error in errors], [ErrorCode.EMPTY_BATCH])
        self.assertEqual(errors[0].field, "invoices")

    def test_batch_size_limit(self) -> None:
        self.assertEqual(collect_errors(make_batch(100, InvoiceFormat.QUARTER_PAGE)), [])

        errors = collect_errors(make_batch(101, InvoiceFormat.QUARTER_PAGE))
        self.assertEqual([error.code for error in errors], [ErrorCode.BATCH_TOO_LARGE])
        self.assertEqual(errors[0].details, {"requested_count": 101, "max_allowed": 100})
        self.assertIn("Maximum 100 invoices per batch", errors[0].message)

    def test_reports_every_bad_field(self) -> None:
        invoices = [
            make_invoice(1),
            make_invoice(2, amount=-10.0),
            make_invoice(3, discount=-5.0),
        ]
        errors = collect_errors(BatchRequest.of(invoices, InvoiceFormat.HALF_PAGE))
        self.assertEqual(
            [error.field for error in errors],
            ["invoices[1].amount", "invoices[2].discount"],
        )
        self.assertEqual(errors[0].message, "Amount must be a positive number")
        self.assertEqual(errors[1].message, "Discount cannot be negative")

    def test_invalid_format(self) -> None:
        errors = collect_errors(BatchRequest.of(make_invoices(1), "A5"))
        self.assertEqual([error.code for error in errors], [ErrorCode.INVALID_FORMAT])
        self.assertEqual(errors[0].field, "format")

    def test_format_accepts_strings(self) -> None:
        self.assertEqual(collect_errors(make_batch(2, "quarter-page")), [])

    def test_required_text_fields(self) -> None:
        cases = (
            ("invoice_number", "", "Invoice number is required"),
            ("customer_name", "   ", "Customer name is required"),
            ("customer_address", "", "Customer address is required"),
            ("product_name", "", "Product name is required"),
            ("customer_phone", "", "Customer phone is required"),
        )
        for field, value, message in cases:
            with self.subTest(field=field):
                batch = BatchRequest.of([make_invoice(1, **{field: value})], "FULL_PAGE")
                errors = collect_errors(batch)
                self.assertEqual(len(errors), 1)
                self.assertEqual(errors[0].field, f"invoices[0].{field}")
                self.assertEqual(errors[0].message, message)

    def test_numeric_fields(self) -> None:
        cases = (
            ("amount", 0, "invoices[0].amount"),
            ("amount", float("nan"), "invoices[0].amount"),
            ("quantity", 0, "invoices[0].quantity"),
            ("quantity", 1.5, "invoices[0].quantity"),
            ("quantity", True, "invoices[0].quantity"),
        )
        for field, value, expected in cases:
            with self.subTest(field=field, value=value):
                batch = BatchRequest.of([make_invoice(1, **{field: value})], "FULL_PAGE")
                self.assertEqual([error.field for error in collect_errors(batch)], [expected])

    def test_created_at_must_be_datetime(self) -> None:
        batch = BatchRequest.of([make_invoice(1, created_at="2026-03-01")], "FULL_PAGE")
        self.assertEqual(
            [error.field for error in collect_errors(batch)],
            ["invoices[0].created_at"],
        )

    def test_second_phone_is_optional_but_checked(self) -> None:
        ok = BatchRequest.of([make_invoice(1, customer_second_phone="+94 77 123 4567")], "FULL_PAGE")
        self.assertEqual(collect_errors(ok), [])
        bad = BatchRequest.of([make_invoice(1, customer_second_phone="12")], "FULL_PAGE")
        self.assertEqual(
            [error.field for error in collect_errors(bad)],
            ["invoices[0].customer_second_phone"],
        )

    def test_optional_text_fields_must_be_strings(self) -> None:
        for name in (
            "business_name",
            "business_address",
            "business_phone",
            "customer_second_phone",
            "tracking_number",
            "shipping_provider",
            "notes",
        ):
            with self.subTest(field=name):
                batch = BatchRequest.of([make_invoice(1, **{name: 2361192})], "HALF_PAGE")
                errors = collect_errors(batch)
                self.assertEqual([error.field for error in errors], [f"invoices[0].{name}"])
                self.assertEqual(errors[0].code, ErrorCode.INVALID_FIELD)
                self.assertEqual(errors[0].message, f"{name} must be a string")

    def test_non_string_tracking_number_fails_generation_cleanly(self) -> None:
        batch = BatchRequest.of([make_invoice(1, tracking_number=12345)], InvoiceFormat.FULL_PAGE)
        with self.assertRaises(BatchValidationError) as ctx:
            validate(batch)
        self.assertEqual(ctx.exception.fields(), ["invoices[0].tracking_number"])

    def test_combined_batch_and_field_errors(self) -> None:
        invoices = make_invoices(101)
        invoices[0] = make_invoice(1, quantity=0)
        errors = collect_errors(BatchRequest.of(invoices, "A5"))
        codes = [error.code for error in errors]
        self.assertEqual(
            codes,
            [ErrorCode.INVALID_FORMAT, ErrorCode.BATCH_TOO_LARGE, ErrorCode.INVALID_FIELD],
        )


class TestValidate(unittest.TestCase):
    def test_valid_batch_passes(self) -> None:
        validate(make_batch(3, InvoiceFormat.HALF_PAGE))

    def test_raises_with_all_errors(self) -> None:
        invoices = [make_invoice(1, amount=-1.0), make_invoice(2, quantity=0)]
        with self.assertRaises(BatchValidationError) as ctx:
            validate(BatchRequest.of(invoices, InvoiceFormat.FULL_PAGE))
        self.assertIsInstance(ctx.exception, ValueError)
        self.assertEqual(ctx.exception.code, ErrorCode.VALIDATION_ERROR)
        self.assertEqual(
            ctx.exception.fields(),
            ["invoices[0].amount", "invoices[1].quantity"],
        )
        self.assertIn("multiple validation errors", str(ctx.exception))
        self.assertEqual(ctx.exception.codes(), {ErrorCode.INVALID_FIELD})

    def test_single_error_message(self) -> None:
        with self.assertRaises(BatchValidationError) as ctx:
            validate(BatchRequest.of([], InvoiceFormat.FULL_PAGE))
        self.assertEqual(str(ctx.exception), "At least one invoice is required")
        self.assertEqual(ctx.exception.errors[0].to_dict()["code"], "EMPTY_BATCH")


class TestFieldRules(unittest.TestCase):
    def test_phone_numbers(self) -> None:
        valid = ("+94771234567", "0771234567", "077-123-4567", "(077) 123 4567")
        invalid = ("", "12345", "phone", "077 123 456a", "+1234567890123456")
        for value in valid:
            with self.subTest(value=value):
                self.assertTrue(is_valid_phone_number(value))
        for value in invalid:
            with self.subTest(value=value):
                self.assertFalse(is_valid_phone_number(value))

    def test_invoice_numbers(self) -> None:
        self.assertTrue(is_valid_invoice_number("INV-2026_001"))
        self.assertFalse(is_valid_invoice_number("INV 001"))
        self.assertFalse(is_valid_invoice_number("INV#1"))
        self.assertFalse(is_valid_invoice_number(None))

    def test_naive_created_at_is_accepted(self) -> None:
        batch = BatchRequest.of([make_invoice(1, created_at=datetime(2026, 1, 5))], "HALF_PAGE")
        self.assertEqual(collect_errors(batch), [])


if __name__ == "__main__":
    unittest.main()
