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

"""Save-time transform pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from editorsync.core.model_types import LogComponent
from editorsync.host.protocols import find_editor
from editorsync.logging import structured_extra

from .final_newline import insert_final_newline
from .trim_whitespace import trim_trailing_whitespace

if TYPE_CHECKING:
    from editorsync.host.protocols import EditorHost, SettingsProvider, TextDocument

logger: logging.Logger = logging.getLogger("editorsync.transforms")


@dataclass(slots=True, frozen=True)
class PipelineResult:
    """Outcome of one save pipeline run.

    Attributes:
        trimmed_lines: Lines whose trailing whitespace was removed.
        inserted_newline: Whether a final newline was appended.
        saved: Whether the document reported a write.
    """

    trimmed_lines: int = 0
    inserted_newline: bool = False
    saved: bool = False

    @property
    def changed(self) -> bool:
        return self.trimmed_lines > 0 or self.inserted_newline


async def run_save_pipeline(
    document: TextDocument,
    provider: SettingsProvider,
    host: EditorHost,
) -> PipelineResult | None:
    """Trim trailing whitespace, then insert the final newline, then save.

    The pipeline is skipped when the document has no resolved configuration
    or no visible editor shows it.

    Args:
        document: The document that was saved.
        provider: Source of the document's resolved configuration.
        host: Host surface providing visible editors and host settings.

    Returns:
        The pipeline outcome, or ``None`` when skipped.
    """
    config = provider.settings_for_document(document)
    if config is None:
        logger.debug(
            "No configuration; skipping save transforms",
            extra=structured_extra(component=LogComponent.TRANSFORMS, path=document.file_name),
        )
        return None

    editor = find_editor(host.visible_editors, document)
    if editor is None:
        logger.debug(
            "No visible editor; skipping save transforms",
            extra=structured_extra(component=LogComponent.TRANSFORMS, path=document.file_name),
        )
        return None

    trimmed = await trim_trailing_whitespace(
        config,
        editor,
        host_trims_whitespace=host.host_settings().trim_trailing_whitespace,
    )
    inserted = await insert_final_newline(config, editor)
    saved = await document.save()
    return PipelineResult(trimmed_lines=trimmed, inserted_newline=inserted > 0, saved=saved)


__all__ = ["PipelineResult", "run_save_pipeline"]
