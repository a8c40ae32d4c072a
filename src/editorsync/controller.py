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

"""Orchestration of resolution, option application and save transforms.

The controller owns the resolution cache and reacts to host lifecycle signals
through an explicit dispatch table:

- activation: load host defaults, then resolve every open document
- active editor changed: resolve the editor's document and push its options
- configuration changed: replace the host defaults
- document saved: rebuild the cache first when a ``.editorconfig`` was saved,
  then run the save transforms on the document

Every handler returns an awaitable, so a host integration (or a test) can
await a signal's full effect.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from pathlib import PurePath
from types import MappingProxyType
from typing import TYPE_CHECKING, cast

from editorsync.cache import ConfigResolutionCache
from editorsync.core.model_types import HostEvent, LogComponent
from editorsync.core.types import CONFIG_FILENAME, STATUS_MESSAGE_TIMEOUT_MS
from editorsync.exceptions import EditorSyncError
from editorsync.logging import structured_extra
from editorsync.transforms import run_save_pipeline
from editorsync.translate import resolve_to_host_options

if TYPE_CHECKING:
    from collections.abc import Mapping

    from editorsync.core.types import HostEditorOptions
    from editorsync.host.protocols import ConfigResolver, EditorHost, TextDocument, TextEditor
    from editorsync.transforms import PipelineResult

logger: logging.Logger = logging.getLogger("editorsync.controller")

EventHandler = Callable[[object], Awaitable[object]]


def is_config_file(document: TextDocument) -> bool:
    """Return True when ``document`` is itself a ``.editorconfig`` file."""
    return PurePath(document.file_name).name == CONFIG_FILENAME


class ControllerDisposedError(EditorSyncError):
    """Raised when a signal is dispatched to a disposed controller."""


class ApplicationController:
    """Glue between the host surface, the resolution cache and the transforms.

    Args:
        host: Host editor surface.
        resolver: Collaborator resolving configuration properties for a path.
    """

    def __init__(self, host: EditorHost, resolver: ConfigResolver) -> None:
        self._host = host
        self._cache = ConfigResolutionCache(
            resolver,
            on_resolved=self.refresh_active_editor,
            defaults=host.host_settings().defaults(),
        )
        self._handlers: Mapping[HostEvent, EventHandler] = MappingProxyType(
            {
                HostEvent.ACTIVATED: self._handle_activated,
                HostEvent.ACTIVE_EDITOR_CHANGED: self._handle_active_editor_changed,
                HostEvent.CONFIGURATION_CHANGED: self._handle_configuration_changed,
                HostEvent.DOCUMENT_SAVED: self._handle_document_saved,
            },
        )
        self._disposed = False

    @property
    def cache(self) -> ConfigResolutionCache:
        return self._cache

    @property
    def handlers(self) -> Mapping[HostEvent, EventHandler]:
        return self._handlers

    def dispatch(self, event: HostEvent, payload: object = None) -> Awaitable[object]:
        """Route a host signal to its handler.

        Args:
            event: Signal kind.
            payload: Editor for ``ACTIVE_EDITOR_CHANGED``, document for
                ``DOCUMENT_SAVED``, ignored otherwise.

        Returns:
            Awaitable completing when the handler's work has settled.

        Raises:
            ControllerDisposedError: If the controller was disposed.
        """
        if self._disposed:
            message = f"Cannot dispatch {event} after dispose()"
            raise ControllerDisposedError(message)
        logger.debug(
            "Dispatching %s",
            event,
            extra=structured_extra(component=LogComponent.CONTROLLER, event=event),
        )
        return self._handlers[event](payload)

    async def activate(self) -> None:
        """Load host defaults and resolve documents opened before activation."""
        self.reload_defaults()
        await self._cache.rebuild_all(self._host.text_documents)

    def dispose(self) -> None:
        """Drop cached state; further dispatches fail."""
        self._cache.clear()
        self._handlers = MappingProxyType({})
        self._disposed = True

    def reload_defaults(self) -> None:
        """Replace the cached defaults with the host's current settings."""
        self._cache.replace_defaults(self._host.host_settings().defaults())

    def refresh_active_editor(self) -> HostEditorOptions | None:
        """Push resolved options to whichever editor is currently active."""
        return self.apply_to_editor(self._host.active_editor)

    def apply_to_editor(self, editor: TextEditor | None) -> HostEditorOptions | None:
        """Compute and push host options for ``editor``'s document.

        Returns:
            The options applied, or ``None`` when there is no editor or no
            configuration for its document.
        """
        if editor is None:
            return None
        config = self._cache.settings_for_document(editor.document)
        if config is None:
            return None
        options = resolve_to_host_options(config, self._cache.default_settings())
        self._host.set_status_message(options.describe(), STATUS_MESSAGE_TIMEOUT_MS)
        editor.options = options
        return options

    async def on_active_editor_changed(self, editor: TextEditor | None) -> None:
        if editor is None:
            return
        await self._cache.ensure_resolved(editor.document)

    async def on_document_saved(self, document: TextDocument) -> PipelineResult | None:
        if is_config_file(document):
            logger.info(
                "Configuration file saved; rebuilding cache",
                extra=structured_extra(
                    component=LogComponent.CONTROLLER,
                    path=document.file_name,
                    event=HostEvent.DOCUMENT_SAVED,
                ),
            )
            await self._cache.rebuild_all(self._host.text_documents)
        return await run_save_pipeline(document, self._cache, self._host)

    async def _handle_activated(self, _payload: object) -> None:
        await self.activate()

    async def _handle_active_editor_changed(self, payload: object) -> None:
        await self.on_active_editor_changed(cast("TextEditor | None", payload))

    async def _handle_configuration_changed(self, _payload: object) -> None:
        self.reload_defaults()

    async def _handle_document_saved(self, payload: object) -> PipelineResult | None:
        return await self.on_document_saved(cast("TextDocument", payload))


__all__ = ["ApplicationController", "ControllerDisposedError", "EventHandler", "is_config_file"]
