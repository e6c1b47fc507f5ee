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

from rich.logging import RichHandler
from rich.text import Text

from ...core.log import PACKAGE_LOGGER
from ..ui import console_err

_HANDLER_NAME = "invoiceprint-cli"


def _warn(message: str, *, quiet: bool) -> None:
    if quiet:
        return
    console_err.print(Text.assemble(("Warning:", "yellow"), " ", message))


def _configure_logging(level: int | str) -> logging.Handler:
    """Route package logs to stderr through rich, replacing a previous CLI handler."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logger.removeHandler(existing)
    handler = RichHandler(console=console_err, show_path=False, markup=False)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
