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

"""Scaffold a root ``.editorconfig`` from the host's current settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from editorsync.core.model_types import LogComponent
from editorsync.core.types import CONFIG_FILENAME, HostEditorOptions
from editorsync.logging import structured_extra
from editorsync.translate import host_options_to_config_properties

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from editorsync.host.protocols import EditorHost

logger: logging.Logger = logging.getLogger("editorsync.commands")

SUPPORTED_PROPERTIES: Final[tuple[str, ...]] = ("indent_style", "indent_size", "tab_width")
NO_WORKSPACE_MESSAGE: Final[str] = "Please open a folder before generating an .editorconfig file"
ALREADY_EXISTS_MESSAGE: Final[str] = "An .editorconfig file already exists in your workspace."


def render_editorconfig(properties: Mapping[str, object]) -> str:
    """Render the minimal root configuration for ``properties``.

    Only ``indent_style``, ``indent_size`` and ``tab_width`` are written, in that
    order, under a ``[*]`` section.
    """
    lines = ["root = true", "", "[*]"]
    lines.extend(f"{name} = {properties[name]}" for name in SUPPORTED_PROPERTIES if name in properties)
    return "\n".join(lines) + "\n"


def generate_editorconfig(host: EditorHost) -> Path | None:
    """Write ``.editorconfig`` at the workspace root from current host settings.

    Nothing is written when no workspace is open or the file already exists;
    both cases are reported as informational messages. Write failures are
    reported verbatim as an error message.

    Args:
        host: Host surface providing the workspace root, settings and messages.

    Returns:
        Path of the written file, or ``None`` when nothing was written.
    """
    root = host.workspace_root
    if root is None:
        host.show_information_message(NO_WORKSPACE_MESSAGE)
        return None

    settings = host.host_settings()
    properties = host_options_to_config_properties(
        HostEditorOptions(tab_size=settings.tab_size, insert_spaces=settings.insert_spaces),
    )
    contents = render_editorconfig(properties)

    target = root / CONFIG_FILENAME
    if target.exists():
        host.show_information_message(ALREADY_EXISTS_MESSAGE)
        return None

    try:
        _ = target.write_text(contents, encoding="utf-8")
    except OSError as exc:
        host.show_error_message(str(exc))
        return None

    logger.debug(
        "Wrote %s",
        target,
        extra=structured_extra(component=LogComponent.COMMANDS, path=target, details=properties),
    )
    return target


__all__ = [
    "ALREADY_EXISTS_MESSAGE",
    "NO_WORKSPACE_MESSAGE",
    "SUPPORTED_PROPERTIES",
    "generate_editorconfig",
    "render_editorconfig",
]
