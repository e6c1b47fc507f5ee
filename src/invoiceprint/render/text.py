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

from typing import Sequence

from fpdf import FPDF

_ELLIPSIS = "..."


def wrap_lines_to_width(pdf: FPDF, lines: Sequence[str], max_width: float) -> list[str]:
    """Greedy word wrap against the current font; overlong words are split."""
    wrapped: list[str] = []
    for line in lines:
        if not line:
            wrapped.append("")
            continue
        current = ""
        for word in line.split(" "):
            candidate = word if not current else f"{current} {word}"
            if pdf.get_string_width(candidate) <= max_width:
                current = candidate
                continue
            if current:
                wrapped.append(current)
                current = ""
            if pdf.get_string_width(word) <= max_width:
                current = word
                continue
            parts = _split_word(pdf, word, max_width)
            wrapped.extend(parts[:-1])
            current = parts[-1] if parts else ""
        if current:
            wrapped.append(current)
    return wrapped


def wrap_text(pdf: FPDF, text: str, max_width: float, *, max_lines: int | None = None) -> list[str]:
    lines = wrap_lines_to_width(pdf, text.splitlines() or [""], max_width)
    if max_lines is None or len(lines) <= max_lines:
        return lines
    kept = lines[:max_lines]
    kept[-1] = truncate_to_width(pdf, f"{kept[-1]}{_ELLIPSIS}", max_width)
    return kept


def truncate_to_width(pdf: FPDF, text: str, max_width: float) -> str:
    if pdf.get_string_width(text) <= max_width:
        return text
    trimmed = text.removesuffix(_ELLIPSIS)
    while trimmed and pdf.get_string_width(f"{trimmed}{_ELLIPSIS}") > max_width:
        trimmed = trimmed[:-1]
    return f"{trimmed.rstrip()}{_ELLIPSIS}" if trimmed else ""


def pdf_safe(text: str) -> str:
    """Map text onto the latin-1 range the core PDF fonts can encode."""
    return text.encode("latin-1", errors="replace").decode("latin-1")


def _split_word(pdf: FPDF, word: str, max_width: float) -> list[str]:
    parts: list[str] = []
    chunk = ""
    for ch in word:
        next_chunk = f"{chunk}{ch}"
        if chunk and pdf.get_string_width(next_chunk) > max_width:
            parts.append(chunk)
            chunk = ch
        else:
            chunk = next_chunk
    if chunk:
        parts.append(chunk)
    return parts
