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

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    EMPTY_BATCH = "EMPTY_BATCH"
    BATCH_TOO_LARGE = "BATCH_TOO_LARGE"
    INVALID_FIELD = "INVALID_FIELD"
    INVALID_FORMAT = "INVALID_FORMAT"
    EMPTY_VALUE = "EMPTY_VALUE"
    INVALID_CHARACTERS = "INVALID_CHARACTERS"
    VALUE_TOO_LONG = "VALUE_TOO_LONG"
    RENDER_ERROR = "RENDER_ERROR"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str
    code: ErrorCode = ErrorCode.INVALID_FIELD
    value: Any = None
    details: dict[str, object] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "field": self.field,
            "message": self.message,
            "code": self.code.value,
        }
        if self.details:
            payload["details"] = dict(self.details)
        return payload


class GenerationError(Exception):
    """Base class for every failure of a generation call."""

    code: ErrorCode = ErrorCode.RENDER_ERROR


class BatchValidationError(GenerationError, ValueError):
    code = ErrorCode.VALIDATION_ERROR

    def __init__(self, errors: Sequence[FieldError]) -> None:
        self.errors: tuple[FieldError, ...] = tuple(errors)
        super().__init__(format_validation_errors(self.errors))

    def codes(self) -> set[ErrorCode]:
        return {error.code for error in self.errors}

    def fields(self) -> list[str]:
        return [error.field for error in self.errors]


class BarcodeError(GenerationError, ValueError):
    def __init__(self, kind: ErrorCode, value: str, message: str) -> None:
        self.kind = kind
        self.value = value
        super().__init__(message)

    @property
    def code(self) -> ErrorCode:  # type: ignore[override]
        return self.kind


class RenderError(GenerationError, RuntimeError):
    code = ErrorCode.RENDER_ERROR


def format_validation_errors(errors: Sequence[FieldError]) -> str:
    if not errors:
        return "no validation errors"
    if len(errors) == 1:
        return errors[0].message
    lines = [f"- {error.field}: {error.message}" for error in errors]
    return "multiple validation errors:\n" + "\n".join(lines)


__all__ = [
    "BarcodeError",
    "BatchValidationError",
    "ErrorCode",
    "FieldError",
    "GenerationError",
    "RenderError",
    "format_validation_errors",
]
