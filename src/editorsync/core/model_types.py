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

"""Enumerations shared across editorsync.

This module defines:

- Property vocabulary of the configuration format (indent style, line endings)
- Host lifecycle signals dispatched to the application controller
- Logging components and formats
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class IndentStyle(StrEnum):
    """Values understood for the ``indent_style`` property.

    Attributes:
        TAB: Indent with hard tabs.
        SPACE: Indent with spaces.
    """

    TAB = "tab"
    SPACE = "space"


class EndOfLine(StrEnum):
    """Values understood for the ``end_of_line`` property.

    Attributes:
        LF: Unix line feed.
        CR: Classic Mac carriage return.
        CRLF: Windows carriage return + line feed.
    """

    LF = "lf"
    CR = "cr"
    CRLF = "crlf"

    @property
    def sequence(self) -> str:
        """Return the literal newline sequence for this line ending."""
        return _NEWLINE_SEQUENCES[self]

    @classmethod
    def coerce(cls, raw: object) -> EndOfLine:
        """Coerce an arbitrary property value to a line ending.

        Matching is case-insensitive. Missing or unrecognised values fall back
        to ``LF``.

        Args:
            raw: Value of the ``end_of_line`` property, if any.

        Returns:
            EndOfLine enum value, defaulting to LF.
        """
        if not isinstance(raw, str):
            return cls.LF
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.LF


_NEWLINE_SEQUENCES: Final[dict[EndOfLine, str]] = {
    EndOfLine.LF: "\n",
    EndOfLine.CR: "\r",
    EndOfLine.CRLF: "\r\n",
}


class HostEvent(StrEnum):
    """Lifecycle signals the host delivers to the application controller.

    Attributes:
        ACTIVATED: Initial activation of the extension.
        ACTIVE_EDITOR_CHANGED: A different editor became active.
        CONFIGURATION_CHANGED: Host-wide editor settings changed.
        DOCUMENT_SAVED: A document was written to disk.
    """

    ACTIVATED = "activated"
    ACTIVE_EDITOR_CHANGED = "active-editor-changed"
    CONFIGURATION_CHANGED = "configuration-changed"
    DOCUMENT_SAVED = "document-saved"


class LogComponent(StrEnum):
    """Enumeration of loggable system components."""

    CACHE = "cache"
    RESOLVER = "resolver"
    TRANSFORMS = "transforms"
    CONTROLLER = "controller"
    COMMANDS = "commands"
    CONFIG = "config"
    CLI = "cli"


class LogFormat(StrEnum):
    """Enumeration of log output formats.

    Attributes:
        TEXT: Human-readable text format.
        JSON: Machine-readable JSON format.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


__all__ = ["EndOfLine", "HostEvent", "IndentStyle", "LogComponent", "LogFormat"]
