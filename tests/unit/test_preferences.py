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

import json
import tempfile
import unittest
from pathlib import Path

from invoiceprint.config import (
    FormatPreferences,
    clear_preferences,
    load_preferences,
    preferences_path,
    record_last_used_format,
    save_preferences,
    set_default_format,
    set_show_cut_lines,
)
from invoiceprint.core.models import InvoiceFormat
from tests.test_support import temp_env


class TestFormatPreferences(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmpdir.cleanup)
        self.path = Path(self._tmpdir.name) / "prefs" / "preferences.json"

    def test_missing_file_gives_defaults(self) -> None:
        prefs = load_preferences(self.path)
        self.assertEqual(prefs, FormatPreferences())
        self.assertIs(prefs.preferred_format, InvoiceFormat.FULL_PAGE)

    def test_save_and_load(self) -> None:
        saved = FormatPreferences(
            default_format=InvoiceFormat.HALF_PAGE,
            last_used_format=InvoiceFormat.QUARTER_PAGE,
            show_cut_lines=False,
        )
        target = save_preferences(saved, self.path)
        self.assertEqual(target, self.path)
        self.assertEqual(
            json.loads(self.path.read_text(encoding="utf-8")),
            {
                "default_format": "HALF_PAGE",
                "last_used_format": "QUARTER_PAGE",
                "show_cut_lines": False,
            },
        )
        self.assertEqual(load_preferences(self.path), saved)
        self.assertFalse(self.path.with_suffix(".json.tmp").exists())

    def test_last_used_wins_over_default(self) -> None:
        prefs = FormatPreferences(default_format=InvoiceFormat.HALF_PAGE)
        self.assertIs(prefs.preferred_format, InvoiceFormat.HALF_PAGE)
        record_last_used_format(InvoiceFormat.QUARTER_PAGE, self.path)
        loaded = load_preferences(self.path)
        self.assertIs(loaded.last_used_format, InvoiceFormat.QUARTER_PAGE)
        self.assertIs(loaded.default_format, InvoiceFormat.FULL_PAGE)
        self.assertIs(loaded.preferred_format, InvoiceFormat.QUARTER_PAGE)

    def test_record_keeps_other_fields(self) -> None:
        save_preferences(FormatPreferences(default_format=InvoiceFormat.HALF_PAGE), self.path)
        record_last_used_format(InvoiceFormat.FULL_PAGE, self.path)
        loaded = load_preferences(self.path)
        self.assertIs(loaded.default_format, InvoiceFormat.HALF_PAGE)
        self.assertIs(loaded.last_used_format, InvoiceFormat.FULL_PAGE)

    def test_invalid_stored_format_falls_back(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text(
            json.dumps({"default_format": "A5", "last_used_format": 7}),
            encoding="utf-8",
        )
        with self.assertLogs("invoiceprint.config.preferences", level="WARNING") as logs:
            prefs = load_preferences(self.path)
        self.assertEqual(prefs, FormatPreferences())
        self.assertEqual(len(logs.records), 2)
        self.assertIn("using FULL_PAGE", logs.records[0].getMessage())

    def test_corrupt_file_falls_back(self) -> None:
        self.path.parent.mkdir(parents=True)
        for content in ("{not json", "[1, 2]"):
            with self.subTest(content=content):
                self.path.write_text(content, encoding="utf-8")
                with self.assertLogs("invoiceprint.config.preferences", level="WARNING"):
                    self.assertEqual(load_preferences(self.path), FormatPreferences())

    def test_invalid_cut_line_flag(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text(json.dumps({"show_cut_lines": "no"}), encoding="utf-8")
        with self.assertLogs("invoiceprint.config.preferences", level="WARNING"):
            prefs = load_preferences(self.path)
        self.assertTrue(prefs.show_cut_lines)

    def test_set_default_format_clears_last_used(self) -> None:
        record_last_used_format(InvoiceFormat.QUARTER_PAGE, self.path)
        set_default_format(InvoiceFormat.HALF_PAGE, self.path)
        loaded = load_preferences(self.path)
        self.assertIs(loaded.default_format, InvoiceFormat.HALF_PAGE)
        self.assertIsNone(loaded.last_used_format)
        self.assertIs(loaded.preferred_format, InvoiceFormat.HALF_PAGE)

    def test_set_show_cut_lines_keeps_formats(self) -> None:
        record_last_used_format(InvoiceFormat.QUARTER_PAGE, self.path)
        set_show_cut_lines(False, self.path)
        loaded = load_preferences(self.path)
        self.assertFalse(loaded.show_cut_lines)
        self.assertIs(loaded.last_used_format, InvoiceFormat.QUARTER_PAGE)

    def test_clear(self) -> None:
        self.assertFalse(clear_preferences(self.path))
        record_last_used_format(InvoiceFormat.HALF_PAGE, self.path)
        self.assertTrue(clear_preferences(self.path))
        self.assertFalse(self.path.exists())

    def test_default_location_follows_config_dir(self) -> None:
        with temp_env({"XDG_CONFIG_HOME": self._tmpdir.name}):
            expected = Path(self._tmpdir.name) / "invoiceprint" / "preferences.json"
            self.assertEqual(preferences_path(), expected)
            record_last_used_format(InvoiceFormat.HALF_PAGE)
            self.assertTrue(expected.is_file())
            self.assertIs(load_preferences().preferred_format, InvoiceFormat.HALF_PAGE)


if __name__ == "__main__":
    unittest.main()
