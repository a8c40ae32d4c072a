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

"""Interfaces of the host editor surface and of the configuration collaborators.

The host exposes line-indexed documents, editor views accepting option and
edit batches, and transient messaging. The resolution engine only talks to
these protocols, so any editor integration (or the in-memory host used by the
CLI and tests) can drive it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from editorsync.config.models import HostSettings
    from editorsync.core.types import DefaultSettings, HostEditorOptions, ResolvedConfig


@dataclass(slots=True, frozen=True, order=True)
class Position:
    """Zero-based (line, character) location in a document."""

    line: int
    character: int


@dataclass(slots=True, frozen=True)
class Range:
    """Half-open span between two positions."""

    start: Position
    end: Position

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


@dataclass(slots=True, frozen=True)
class TextEdit:
    """Replace ``range`` with ``new_text``; insertions use an empty range."""

    range: Range
    new_text: str

    @classmethod
    def insert(cls, position: Position, text: str) -> TextEdit:
        return cls(Range(position, position), text)

    @classmethod
    def delete(cls, span: Range) -> TextEdit:
        return cls(span, "")


class TextDocument(Protocol):
    """Line-indexed read access to a document plus its save primitive."""

    @property
    def file_name(self) -> str: ...

    @property
    def is_untitled(self) -> bool:
        """True for buffers with no on-disk path (no stable path identity)."""
        ...

    @property
    def line_count(self) -> int: ...

    def line_at(self, line: int) -> str:
        """Return the text of ``line`` without its line break."""
        ...

    async def save(self) -> bool: ...


class TextEditor(Protocol):
    """Editor view showing a document."""

    options: HostEditorOptions | None

    @property
    def document(self) -> TextDocument: ...

    async def edit(self, edits: Sequence[TextEdit]) -> bool:
        """Apply ``edits`` atomically as one batch."""
        ...


class EditorHost(Protocol):
    """Workspace and window surface of the host editor."""

    @property
    def text_documents(self) -> Sequence[TextDocument]: ...

    @property
    def visible_editors(self) -> Sequence[TextEditor]: ...

    @property
    def active_editor(self) -> TextEditor | None: ...

    @property
    def workspace_root(self) -> Path | None: ...

    def host_settings(self) -> HostSettings: ...

    def set_status_message(self, message: str, timeout_ms: int) -> None: ...

    def show_information_message(self, message: str) -> None: ...

    def show_error_message(self, message: str) -> None: ...


class SettingsProvider(Protocol):
    """Source of per-document configuration and host defaults."""

    def settings_for_document(self, document: TextDocument) -> ResolvedConfig | None: ...

    def default_settings(self) -> DefaultSettings: ...


class ConfigResolver(Protocol):
    """Resolves the merged configuration properties for an absolute path."""

    async def resolve(self, path: str) -> Mapping[str, object]: ...


def find_editor(editors: Sequence[TextEditor], document: TextDocument) -> TextEditor | None:
    """Return the visible editor showing ``document``, if any."""
    for editor in editors:
        if editor.document is document:
            return editor
    return None


__all__ = [
    "ConfigResolver",
    "EditorHost",
    "Position",
    "Range",
    "SettingsProvider",
    "TextDocument",
    "TextEdit",
    "TextEditor",
    "find_editor",
]
