# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Host settings loading for editorsync.

Settings live in ``editorsync.toml``, ``.editorsync.toml`` or the
``[tool.editorsync]`` table of ``pyproject.toml``.
"""

from __future__ import annotations

import logging
import tomllib as toml
from pathlib import Path
from typing import Final, cast

from pydantic import ValidationError

from editorsync.core.model_types import LogComponent
from editorsync.logging import structured_extra

from .models import (
    CONFIG_VERSION,
    ConfigReadError,
    HostSettings,
    HostSettingsModel,
    InvalidConfigFileError,
    UnsupportedConfigVersionError,
    settings_from_model,
)

logger: logging.Logger = logging.getLogger("editorsync.config")

CONFIG_FILENAMES: Final[tuple[str, ...]] = ("editorsync.toml", ".editorsync.toml", "pyproject.toml")


def _read_toml(path: Path) -> dict[str, object]:
    try:
        return toml.loads(path.read_text(encoding="utf-8"))
    except (OSError, toml.TOMLDecodeError) as exc:
        raise ConfigReadError(path, exc) from exc


def _settings_section(path: Path, raw_map: dict[str, object]) -> dict[str, object] | None:
    if path.name != "pyproject.toml":
        return raw_map
    tool_obj = raw_map.get("tool")
    if not isinstance(tool_obj, dict):
        return None
    section = cast("dict[str, object]", tool_obj).get("editorsync")
    if not isinstance(section, dict):
        return None
    return cast("dict[str, object]", section)


def _check_version(section: dict[str, object]) -> None:
    version = section.get("config_version", CONFIG_VERSION)
    if isinstance(version, int) and not isinstance(version, bool) and version != CONFIG_VERSION:
        raise UnsupportedConfigVersionError(version, CONFIG_VERSION)


def load_host_settings(explicit_path: Path | None = None, *, search_dir: Path | None = None) -> HostSettings:
    """Load host settings from a TOML file or use defaults.

    The search order is ``editorsync.toml``, ``.editorsync.toml`` and then the
    ``[tool.editorsync]`` table of ``pyproject.toml`` in ``search_dir`` (the
    current directory by default). A ``pyproject.toml`` without the table is
    skipped.

    Args:
        explicit_path: Optional explicit settings file. If provided, only this
            file is checked.
        search_dir: Directory searched when no explicit path is given.

    Returns:
        The validated host settings, or the built-in defaults when no settings
        file is found.

    Raises:
        ConfigReadError: If a settings file cannot be read or parsed as TOML.
        UnsupportedConfigVersionError: If a settings file declares another
            ``config_version``.
        InvalidConfigFileError: If a settings file fails validation.
    """
    if explicit_path is not None:
        search_order = [explicit_path]
    else:
        base = search_dir if search_dir is not None else Path.cwd()
        search_order = [base / name for name in CONFIG_FILENAMES]

    for candidate in search_order:
        if not candidate.is_file():
            continue
        section = _settings_section(candidate, _read_toml(candidate))
        if section is None:
            continue
        _check_version(section)
        try:
            model = HostSettingsModel.model_validate(section)
        except ValidationError as exc:
            raise InvalidConfigFileError(candidate, exc) from exc
        logger.debug(
            "Loaded host settings from %s",
            candidate,
            extra=structured_extra(component=LogComponent.CONFIG, path=candidate),
        )
        return settings_from_model(model)

    return HostSettings()


__all__ = ["CONFIG_FILENAMES", "load_host_settings"]
