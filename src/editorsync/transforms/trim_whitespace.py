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

"""Trim trailing whitespace from every line of a document."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Final

from editorsync.core.model_types import LogComponent
from editorsync.host.protocols import Position, Range, TextEdit
from editorsync.logging import structured_extra

if TYPE_CHECKING:
    from editorsync.core.types import ResolvedConfig
    from editorsync.host.protocols import TextEditor

logger: logging.Logger = logging.getLogger("editorsync.transforms")

TRAILING_WHITESPACE: Final[re.Pattern[str]] = re.compile(r"[\s\uFEFF\xA0]+\Z")


def strip_trailing_whitespace(text: str) -> str:
    """Return ``text`` without trailing whitespace, BOM or no-break spaces."""
    return TRAILING_WHITESPACE.sub("", text)


async def trim_trailing_whitespace(
    config: ResolvedConfig,
    editor: TextEditor,
    *,
    host_trims_whitespace: bool = False,
) -> int:
    """Delete the trailing whitespace span of every line in the editor's document.

    Skipped when the host already trims on save or when the configuration does
    not ask for trimming. The deletions are computed against one snapshot of
    the document and sent as a single atomic batch, so removing a
    whitespace-only line between a lone ``\\r`` and ``\\n`` cannot shift the
    positions of later edits.

    Args:
        config: Resolved configuration of the document.
        editor: Editor showing the document.
        host_trims_whitespace: Whether the host's own trimming is active.

    Returns:
        Number of lines edited.
    """
    if host_trims_whitespace or not config.get("trim_trailing_whitespace"):
        return 0

    document = editor.document
    edits: list[TextEdit] = []
    for line in range(document.line_count):
        text = document.line_at(line)
        trimmed = strip_trailing_whitespace(text)
        if trimmed == text:
            continue
        span = Range(Position(line, len(trimmed)), Position(line, len(text)))
        edits.append(TextEdit.delete(span))

    if edits:
        _ = await editor.edit(edits)
        logger.debug(
            "Trimmed trailing whitespace on %d line(s)",
            len(edits),
            extra=structured_extra(
                component=LogComponent.TRANSFORMS,
                path=document.file_name,
                edits=len(edits),
            ),
        )
    return len(edits)


__all__ = ["TRAILING_WHITESPACE", "strip_trailing_whitespace", "trim_trailing_whitespace"]
