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

from .installer import (
    CONFIG_PATH_ENV,
    DEFAULT_CONFIG_PATH,
    init_user_config,
    preferences_path,
    resolve_config_path,
    user_config_needs_init,
    user_config_path,
)
from .loader import (
    AppConfig,
    GenerateDefaults,
    LoggingDefaults,
    RuntimeDefaults,
    load_app_config,
    parse_app_config,
)
from .preferences import (
    FormatPreferences,
    clear_preferences,
    load_preferences,
    record_last_used_format,
    save_preferences,
    set_default_format,
    set_show_cut_lines,
)

__all__ = [
    "AppConfig",
    "CONFIG_PATH_ENV",
    "DEFAULT_CONFIG_PATH",
    "FormatPreferences",
    "GenerateDefaults",
    "LoggingDefaults",
    "RuntimeDefaults",
    "clear_preferences",
    "init_user_config",
    "load_app_config",
    "load_preferences",
    "parse_app_config",
    "preferences_path",
    "record_last_used_format",
    "resolve_config_path",
    "save_preferences",
    "set_default_format",
    "set_show_cut_lines",
    "user_config_needs_init",
    "user_config_path",
]
