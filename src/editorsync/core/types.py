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

"""Core value types for resolved configuration and host editor options."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final, Literal, TypeAlias

AUTO: Final = "auto"
CONFIG_FILENAME: Final[str] = ".editorconfig"
STATUS_MESSAGE_TIMEOUT_MS: Final[int] = 1500

Auto: TypeAlias = Literal["auto"]
TabSize: TypeAlias = int | Auto
InsertSpaces: TypeAlias = bool | Auto

# Read-only view over the merged properties for one file path.
ResolvedConfig: TypeAlias = Mapping[str, object]


@dataclass(slots=True, frozen=True)
class DefaultSettings:
    """Host-wide fallbacks used whenever a per-file property is absent.

    Replaced wholesale on every host configuration change, never mutated.

    Attributes:
        tab_size: Host tab size, numeric or ``"auto"``.
        insert_spaces: Whether the host indents with spaces, or ``"auto"``.
    """

    tab_size: TabSize = 4
    insert_spaces: InsertSpaces = True


@dataclass(slots=True, frozen=True)
class HostEditorOptions:
    """Indentation options pushed to a live editor view.

    Computed fresh from a resolved configuration and the current defaults on
    every application.

    Attributes:
        tab_size: Width of a tab stop.
        insert_spaces: Whether the editor inserts spaces on Tab, or ``"auto"``.
    """

    tab_size: TabSize
    insert_spaces: InsertSpaces

    def describe(self) -> str:
        """Return the short status-bar summary for these options."""
        if self.insert_spaces == AUTO:
            spaces_or_tabs = AUTO
        else:
            spaces_or_tabs = "Spaces" if self.insert_spaces else "Tabs"
        return f"EditorConfig: {spaces_or_tabs}: {self.tab_size}"


__all__ = [
    "AUTO",
    "CONFIG_FILENAME",
    "STATUS_MESSAGE_TIMEOUT_MS",
    "Auto",
    "DefaultSettings",
    "HostEditorOptions",
    "InsertSpaces",
    "ResolvedConfig",
    "TabSize",
]
