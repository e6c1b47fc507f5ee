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

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from ..core.models import InvoiceFormat
from ..formats.registry import parse_format
from .installer import resolve_config_path

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class GenerateDefaults:
    default_format: InvoiceFormat | None = None
    show_cut_lines: bool = True
    output_dir: str | None = None


@dataclass(frozen=True)
class RuntimeDefaults:
    render_jobs: int | Literal["auto"] | None = None


@dataclass(frozen=True)
class LoggingDefaults:
    level: str = DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class AppConfig:
    source: Path | None = None
    generate: GenerateDefaults = field(default_factory=GenerateDefaults)
    runtime: RuntimeDefaults = field(default_factory=RuntimeDefaults)
    logging: LoggingDefaults = field(default_factory=LoggingDefaults)


def load_app_config(path: str | Path | None = None) -> AppConfig:
    config_path = resolve_config_path(path)
    data = _load_toml(config_path)
    return parse_app_config(data, source=config_path)


def parse_app_config(data: dict[str, object], *, source: Path | None = None) -> AppConfig:
    return AppConfig(
        source=source,
        generate=_parse_generate_defaults(_get_dict(data, "generate")),
        runtime=_parse_runtime_defaults(_get_dict(data, "runtime")),
        logging=_parse_logging_defaults(_get_dict(data, "logging")),
    )


def _parse_generate_defaults(cfg: dict[str, object]) -> GenerateDefaults:
    return GenerateDefaults(
        default_format=_parse_optional_format(
            cfg.get("default_format"),
            field="generate.default_format",
        ),
        show_cut_lines=_parse_bool(
            cfg.get("show_cut_lines"),
            field="generate.show_cut_lines",
            default=True,
        ),
        output_dir=_parse_optional_unset_str(cfg.get("output_dir"), field="generate.output_dir"),
    )


def _parse_runtime_defaults(cfg: dict[str, object]) -> RuntimeDefaults:
    return RuntimeDefaults(
        render_jobs=_parse_optional_render_jobs(
            cfg.get("render_jobs"),
            field="runtime.render_jobs",
        ),
    )


def _parse_logging_defaults(cfg: dict[str, object]) -> LoggingDefaults:
    value = cfg.get("level")
    if value is None:
        return LoggingDefaults()
    if not isinstance(value, str):
        raise ValueError("logging.level must be a string")
    level = value.strip().upper()
    if not level:
        return LoggingDefaults()
    if level not in LOG_LEVELS:
        raise ValueError(f"logging.level must be one of {', '.join(LOG_LEVELS)}")
    return LoggingDefaults(level=level)


def _parse_optional_format(value: object, *, field: str) -> InvoiceFormat | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be FULL_PAGE, HALF_PAGE, QUARTER_PAGE, or empty")
    if not value.strip():
        return None
    try:
        return parse_format(value)
    except ValueError:
        raise ValueError(
            f"{field} must be FULL_PAGE, HALF_PAGE, QUARTER_PAGE, or empty"
        ) from None


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _parse_optional_unset_str(value: object, *, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    normalized = value.strip()
    return normalized or None


def _parse_bool(value: object, *, field: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"{field} must be a boolean")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"{field} must be a boolean")
    raise ValueError(f"{field} must be a boolean")


def _parse_optional_render_jobs(
    value: object,
    *,
    field: str,
) -> int | Literal["auto"] | None:
    if value is None:
        return None
    if isinstance(value, str):
        normalized = value.strip().lower()
        if not normalized:
            return None
        if normalized == "auto":
            return "auto"
        parsed = _parse_int_strict(normalized, field=field)
        if parsed <= 0:
            raise ValueError(f"{field} must be 'auto' or a positive integer")
        return parsed
    parsed = _parse_int_strict(value, field=field)
    if parsed <= 0:
        raise ValueError(f"{field} must be 'auto' or a positive integer")
    return parsed


def _parse_int_strict(value: object, *, field: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{field} must be an integer")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError(f"{field} must be an integer")
        try:
            return int(text)
        except ValueError as exc:
            raise ValueError(f"{field} must be an integer") from exc
    raise ValueError(f"{field} must be an integer")
