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

"""In-memory implementation of the host editor surface.

Documents are plain text buffers addressed by (line, character) positions.
``\\n``, ``\\r\\n`` and ``\\r`` all count as line breaks, and the buffer keeps
whichever sequences the text contains. The command-line interface drives the
resolution engine through this host, and the test suite uses it as the live
editor.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import re
from typing import TYPE_CHECKING, Final

from editorsync.config.models import HostSettings
from editorsync.exceptions import DocumentDecodeError, EditConflictError, EditorSyncValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from editorsync.core.types import HostEditorOptions
    from editorsync.host.protocols import Position, TextEdit

logger: logging.Logger = logging.getLogger("editorsync.host")

LINE_BREAK: Final[re.Pattern[str]] = re.compile(r"\r\n|\r|\n")
_UNTITLED_IDS = itertools.count(1)


class InMemoryDocument:
    """Mutable text buffer with optional write-through to disk."""

    def __init__(
        self,
        text: str = "",
        *,
        path: Path | None = None,
        write_through: bool = False,
        encoding: str = "utf-8",
    ) -> None:
        self._text = text
        self._path = path
        self._untitled_name = None if path is not None else f"Untitled-{next(_UNTITLED_IDS)}"
        self.write_through = write_through
        self.encoding = encoding
        self.original_text = text
        self.version = 0
        self.dirty = False
        self.save_count = 0

    @classmethod
    def open(cls, path: Path, *, write_through: bool = True, encoding: str = "utf-8") -> InMemoryDocument:
        """Load ``path`` keeping its line breaks untouched.

        Raises:
            DocumentDecodeError: If the file is not valid in ``encoding``.
        """
        resolved = path.resolve()
        try:
            with resolved.open(encoding=encoding, newline="") as handle:
                text = handle.read()
        except UnicodeDecodeError as exc:
            raise DocumentDecodeError(str(resolved), exc) from exc
        return cls(text, path=resolved, write_through=write_through, encoding=encoding)

    def __repr__(self) -> str:
        return f"InMemoryDocument({self.file_name!r}, lines={self.line_count}, dirty={self.dirty})"

    @property
    def file_name(self) -> str:
        if self._path is None:
            return self._untitled_name or "Untitled"
        return str(self._path)

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def is_untitled(self) -> bool:
        return self._path is None

    @property
    def text(self) -> str:
        return self._text

    @property
    def modified(self) -> bool:
        """Whether the buffer differs from the text it was opened with."""
        return self._text != self.original_text

    @property
    def line_count(self) -> int:
        return len(self.lines())

    def lines(self) -> list[str]:
        return LINE_BREAK.split(self._text)

    def line_at(self, line: int) -> str:
        lines = self.lines()
        if not 0 <= line < len(lines):
            message = f"line {line} out of range (document has {len(lines)} lines)"
            raise EditorSyncValidationError(message)
        return lines[line]

    def offset_at(self, position: Position) -> int:
        """Convert a (line, character) position into a text offset."""
        starts = [0, *(match.end() for match in LINE_BREAK.finditer(self._text))]
        if not 0 <= position.line < len(starts):
            message = f"line {position.line} out of range (document has {len(starts)} lines)"
            raise EditorSyncValidationError(message)
        line_length = len(self.line_at(position.line))
        if not 0 <= position.character <= line_length:
            message = f"character {position.character} out of range for line {position.line}"
            raise EditorSyncValidationError(message)
        return starts[position.line] + position.character

    def apply_edits(self, edits: Sequence[TextEdit]) -> None:
        """Apply a batch of edits atomically.

        Raises:
            EditorSyncValidationError: If a position lies outside the document.
            EditConflictError: If two edits of the batch overlap.
        """
        spans = sorted(
            ((self.offset_at(edit.range.start), self.offset_at(edit.range.end), edit.new_text) for edit in edits),
            key=lambda span: (span[0], span[1]),
        )
        for (_, previous_end, _), (start, _, _) in itertools.pairwise(spans):
            if start < previous_end:
                message = "edits in one batch must not overlap"
                raise EditConflictError(message)
        text = self._text
        for start, end, new_text in reversed(spans):
            text = text[:start] + new_text + text[end:]
        if text != self._text:
            self._text = text
            self.version += 1
            self.dirty = True

    async def save(self) -> bool:
        """Persist the buffer; untitled documents cannot be saved."""
        if self._path is None:
            return False
        self.save_count += 1
        if self.write_through and self.dirty:
            with self._path.open("w", encoding=self.encoding, newline="") as handle:
                _ = handle.write(self._text)
            self.original_text = self._text
        self.dirty = False
        return True


class InMemoryEditor:
    """Editor view over an :class:`InMemoryDocument`."""

    def __init__(self, document: InMemoryDocument) -> None:
        self._document = document
        self.options: HostEditorOptions | None = None

    def __repr__(self) -> str:
        return f"InMemoryEditor({self._document.file_name!r})"

    @property
    def document(self) -> InMemoryDocument:
        return self._document

    async def edit(self, edits: Sequence[TextEdit]) -> bool:
        # Yield first so concurrently issued batches interleave like host round-trips.
        await asyncio.sleep(0)
        self._document.apply_edits(edits)
        return True


class InMemoryHost:
    """Host surface holding open documents, editors and emitted messages."""

    def __init__(self, settings: HostSettings | None = None, *, workspace_root: Path | None = None) -> None:
        self._settings = settings if settings is not None else HostSettings()
        self._workspace_root = workspace_root
        self._documents: list[InMemoryDocument] = []
        self._editors: list[InMemoryEditor] = []
        self._active: InMemoryEditor | None = None
        self.status_messages: list[tuple[str, int]] = []
        self.information_messages: list[str] = []
        self.error_messages: list[str] = []

    @property
    def text_documents(self) -> list[InMemoryDocument]:
        return list(self._documents)

    @property
    def visible_editors(self) -> list[InMemoryEditor]:
        return list(self._editors)

    @property
    def active_editor(self) -> InMemoryEditor | None:
        return self._active

    @property
    def workspace_root(self) -> Path | None:
        return self._workspace_root

    def host_settings(self) -> HostSettings:
        return self._settings

    def update_settings(self, settings: HostSettings) -> None:
        self._settings = settings

    def add_document(self, document: InMemoryDocument, *, show: bool = True) -> InMemoryEditor | None:
        """Register ``document`` as open, optionally showing it in an editor."""
        if document not in self._documents:
            self._documents.append(document)
        if not show:
            return None
        editor = self.editor_for(document)
        if editor is None:
            editor = InMemoryEditor(document)
            self._editors.append(editor)
        return editor

    def open_file(self, path: Path, *, write_through: bool = True, show: bool = True) -> InMemoryDocument:
        document = InMemoryDocument.open(path, write_through=write_through)
        _ = self.add_document(document, show=show)
        return document

    def close_document(self, document: InMemoryDocument) -> None:
        self._documents = [item for item in self._documents if item is not document]
        self._editors = [editor for editor in self._editors if editor.document is not document]
        if self._active is not None and self._active.document is document:
            self._active = None

    def editor_for(self, document: InMemoryDocument) -> InMemoryEditor | None:
        for editor in self._editors:
            if editor.document is document:
                return editor
        return None

    def set_active_editor(self, editor: InMemoryEditor | None) -> None:
        self._active = editor

    def set_status_message(self, message: str, timeout_ms: int) -> None:
        self.status_messages.append((message, timeout_ms))

    def show_information_message(self, message: str) -> None:
        self.information_messages.append(message)
        logger.debug(message)

    def show_error_message(self, message: str) -> None:
        self.error_messages.append(message)
        logger.debug(message)


__all__ = ["LINE_BREAK", "InMemoryDocument", "InMemoryEditor", "InMemoryHost"]
