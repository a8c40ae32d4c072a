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

"""Conversion between configuration properties and host editor options.

Both directions are pure functions: no state and no I/O. Forward
translation falls back through ``tab_width``, ``indent_size`` and the host
defaults; reverse translation produces the properties written by the
configuration scaffolding command.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, cast

from editorsync.core.model_types import IndentStyle
from editorsync.core.types import AUTO, DefaultSettings, HostEditorOptions, InsertSpaces, TabSize
from editorsync.exceptions import TabSizeError

if TYPE_CHECKING:
    from editorsync.core.types import ResolvedConfig

AUTO_TAB_SIZE: Final[int] = 4


def resolve_to_host_options(config: ResolvedConfig, defaults: DefaultSettings) -> HostEditorOptions:
    """Convert resolved configuration properties to host editor options.

    ``insert_spaces`` follows ``indent_style`` when present (anything but
    ``tab`` means spaces), otherwise the host default. ``tab_size`` takes the
    first present value of ``tab_width``, ``indent_size`` and the host
    default.

    Args:
        config: Resolved configuration for one file.
        defaults: Current host-wide fallbacks.

    Returns:
        The options to push to the editor view.
    """
    indent_style = config.get("indent_style")
    insert_spaces: InsertSpaces
    if indent_style is not None:
        insert_spaces = indent_style != IndentStyle.TAB
    else:
        insert_spaces = defaults.insert_spaces

    tab_size = _first_present(config.get("tab_width"), config.get("indent_size"))
    if tab_size is None:
        tab_size = defaults.tab_size
    return HostEditorOptions(tab_size=cast("TabSize", tab_size), insert_spaces=insert_spaces)


def host_options_to_config_properties(options: HostEditorOptions) -> dict[str, object]:
    """Convert host editor options to configuration properties.

    Args:
        options: Host indentation options.

    Returns:
        ``indent_style``/``indent_size`` for space indentation,
        ``indent_style``/``tab_width`` for tab (or ``auto``) indentation, and an
        empty mapping for any other ``insert_spaces`` value.
    """
    match options.insert_spaces:
        case True:
            return {
                "indent_style": IndentStyle.SPACE.value,
                "indent_size": resolve_tab_size(options.tab_size),
            }
        case False | "auto":
            return {
                "indent_style": IndentStyle.TAB.value,
                "tab_width": resolve_tab_size(options.tab_size),
            }
        case _:
            return {}


def resolve_tab_size(tab_size: object) -> int:
    """Convert a host tab size option into a numeric value.

    Args:
        tab_size: Host tab size; the ``"auto"`` sentinel maps to 4.

    Returns:
        The tab size as an integer; strings are parsed in base 10 and
        integral floats are truncated.

    Raises:
        TabSizeError: If the value is neither an integral number nor ``"auto"``.
    """
    if tab_size == AUTO:
        return AUTO_TAB_SIZE
    if isinstance(tab_size, bool):
        raise TabSizeError(tab_size)
    if isinstance(tab_size, int):
        return tab_size
    if isinstance(tab_size, float):
        if not tab_size.is_integer():
            raise TabSizeError(tab_size)
        return int(tab_size)
    try:
        return int(str(tab_size).strip(), 10)
    except ValueError as exc:
        raise TabSizeError(tab_size) from exc


def _first_present(*values: object) -> object | None:
    for value in values:
        if value is not None:
            return value
    return None


__all__ = [
    "AUTO_TAB_SIZE",
    "host_options_to_config_properties",
    "resolve_tab_size",
    "resolve_to_host_options",
]
