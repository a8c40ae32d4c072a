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

"""Ensure a document ends with exactly one newline sequence."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from editorsync.core.model_types import EndOfLine, LogComponent
from editorsync.host.protocols import Position, TextEdit
from editorsync.logging import structured_extra

if TYPE_CHECKING:
    from editorsync.core.types import ResolvedConfig
    from editorsync.host.protocols import TextEditor

logger: logging.Logger = logging.getLogger("editorsync.transforms")


def newline_for(config: ResolvedConfig) -> str:
    """Return ``\\r``, ``\\r\\n`` or ``\\n`` according to ``end_of_line``."""
    return EndOfLine.coerce(config.get("end_of_line")).sequence


async def insert_final_newline(config: ResolvedConfig, editor: TextEditor) -> int:
    """Append a newline to the last line when it is not already empty.

    Args:
        config: Resolved configuration of the document.
        editor: Editor showing the document.

    Returns:
        ``1`` when a newline was inserted, ``0`` otherwise.
    """
    document = editor.document
    line_count = document.line_count
    if not config.get("insert_final_newline") or line_count == 0:
        return 0

    last_line = line_count - 1
    last_length = len(document.line_at(last_line))
    if last_length < 1:
        return 0

    _ = await editor.edit([TextEdit.insert(Position(last_line, last_length), newline_for(config))])
    logger.debug(
        "Inserted final newline",
        extra=structured_extra(component=LogComponent.TRANSFORMS, path=document.file_name, edits=1),
    )
    return 1


__all__ = ["insert_final_newline", "newline_for"]
