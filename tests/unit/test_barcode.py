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

import io
import unittest

from PIL import Image

from invoiceprint.core.bounds import MIN_MODULE_PX
from invoiceprint.core.errors import BarcodeError, ErrorCode
from invoiceprint.core.models import InvoiceFormat
from invoiceprint.formats import config_for
from invoiceprint.render.barcode import (
    _code128_modules,
    barcode_dimensions,
    barcode_spec,
    encode_barcode,
    validate_barcode_value,
)
from invoiceprint.render.geometry import mm_to_px

WHITE_EXTREMA = ((255, 255), (255, 255), (255, 255))


class TestBarcodeSizing(unittest.TestCase):
    def test_total_size_adds_quiet_zone(self) -> None:
        for fmt in InvoiceFormat:
            content = config_for(fmt).barcode_size_mm
            with self.subTest(format=fmt):
                total = barcode_dimensions(fmt)
                self.assertEqual(total.width, content.width + 4.0)
                self.assertEqual(total.height, content.height + 4.0)
                spec = barcode_spec("INV-1", fmt)
                self.assertEqual(spec.margin_mm, 2.0)
                self.assertEqual(spec.total_width_mm, total.width)
                self.assertEqual(spec.total_height_mm, total.height)

    def test_known_totals(self) -> None:
        self.assertEqual(barcode_dimensions(InvoiceFormat.FULL_PAGE).width, 84.0)
        self.assertEqual(barcode_dimensions(InvoiceFormat.HALF_PAGE).height, 39.0)
        self.assertEqual(barcode_dimensions(InvoiceFormat.QUARTER_PAGE).width, 49.0)


class TestBarcodeValidation(unittest.TestCase):
    def test_accepts_tracking_style_values(self) -> None:
        for value in ("RA02361192", "INV-0001", "order_42"):
            with self.subTest(value=value):
                self.assertEqual(validate_barcode_value(value), value)

    def test_rejects_empty(self) -> None:
        for value in ("", "   "):
            with self.subTest(value=value):
                with self.assertRaises(BarcodeError) as ctx:
                    validate_barcode_value(value)
                self.assertIs(ctx.exception.kind, ErrorCode.EMPTY_VALUE)

    def test_rejects_invalid_characters(self) -> None:
        with self.assertRaises(BarcodeError) as ctx:
            validate_barcode_value("RA 023-61192!")
        self.assertIs(ctx.exception.kind, ErrorCode.INVALID_CHARACTERS)
        self.assertIs(ctx.exception.code, ErrorCode.INVALID_CHARACTERS)
        self.assertEqual(ctx.exception.value, "RA 023-61192!")
        self.assertIsInstance(ctx.exception, ValueError)


class TestEncodeBarcode(unittest.TestCase):
    def test_code128_modules(self) -> None:
        modules = _code128_modules("RA02361192")
        self.assertTrue(modules)
        self.assertLessEqual(set(modules), {"0", "1"})
        self.assertTrue(modules.startswith("11"))
        self.assertTrue(modules.endswith("11"))

    def test_image_matches_total_size(self) -> None:
        image = encode_barcode("RA02361192", InvoiceFormat.FULL_PAGE)
        self.assertEqual((image.width_px, image.height_px), (992, 638))
        self.assertEqual(image.dpi, 300)
        self.assertEqual(image.margin_px, 24)
        with Image.open(io.BytesIO(image.png)) as decoded:
            self.assertEqual(decoded.size, (992, 638))
            self.assertEqual(decoded.mode, "RGB")

    def test_quiet_zone_is_white(self) -> None:
        for fmt in InvoiceFormat:
            with self.subTest(format=fmt):
                image = encode_barcode("RA02361192", fmt)
                margin = image.margin_px
                with Image.open(io.BytesIO(image.png)) as decoded:
                    rgb = decoded.convert("RGB")
                    width, height = rgb.size
                    corners = (
                        (0, 0),
                        (width - 1, 0),
                        (0, height - 1),
                        (width - 1, height - 1),
                    )
                    for corner in corners:
                        self.assertEqual(rgb.getpixel(corner), (255, 255, 255))
                    bands = (
                        (0, 0, width, margin),
                        (0, height - margin, width, height),
                        (0, 0, margin, height),
                        (width - margin, 0, width, height),
                    )
                    for band in bands:
                        self.assertEqual(rgb.crop(band).getextrema(), WHITE_EXTREMA)
                    content = rgb.crop((margin, margin, width - margin, height - margin))
                    self.assertEqual(content.getextrema()[0][0], 0)

    def test_symbol_starts_at_margin(self) -> None:
        image = encode_barcode("INV-0001", InvoiceFormat.QUARTER_PAGE)
        margin = image.margin_px
        with Image.open(io.BytesIO(image.png)) as decoded:
            rgb = decoded.convert("RGB")
            mid = image.height_px // 2
            self.assertEqual(rgb.getpixel((margin, mid)), (0, 0, 0))
            self.assertEqual(rgb.getpixel((margin - 1, mid)), (255, 255, 255))
            self.assertEqual(rgb.getpixel((image.width_px - margin - 1, mid)), (0, 0, 0))

    def test_invalid_value_fails(self) -> None:
        with self.assertRaises(BarcodeError):
            encode_barcode("RA 023-61192!", InvoiceFormat.HALF_PAGE)
        with self.assertRaises(BarcodeError):
            encode_barcode("", InvoiceFormat.HALF_PAGE)

    def test_value_too_long_for_barcode_area_fails(self) -> None:
        value = "AB-" * 30
        for fmt in InvoiceFormat:
            with self.subTest(format=fmt):
                with self.assertRaises(BarcodeError) as ctx:
                    encode_barcode(value, fmt)
                self.assertEqual(ctx.exception.code, ErrorCode.VALUE_TOO_LONG)
                self.assertEqual(ctx.exception.value, value)

    def test_width_limit_follows_module_count(self) -> None:
        for length in (10, 20, 25, 30, 40):
            value = "A" * length
            modules = len(_code128_modules(value))
            for fmt in InvoiceFormat:
                spec = barcode_spec(value, fmt)
                content_w = mm_to_px(spec.total_width_mm, 300) - 2 * mm_to_px(spec.margin_mm, 300)
                with self.subTest(length=length, format=fmt):
                    if content_w < modules * MIN_MODULE_PX:
                        with self.assertRaises(BarcodeError):
                            encode_barcode(value, fmt)
                    else:
                        self.assertEqual(encode_barcode(value, fmt).spec.value, value)

    def test_rejects_non_positive_dpi(self) -> None:
        with self.assertRaises(ValueError):
            encode_barcode("INV-1", InvoiceFormat.FULL_PAGE, dpi=0)


if __name__ == "__main__":
    unittest.main()
