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

"""In-memory cache of resolved configuration per open document.

Entries are keyed by the document's on-disk path, created on first observation
and reused until the whole map is rebuilt after a configuration file is saved.
Untitled buffers are never cached. The cache also owns the host-wide
``DefaultSettings`` and implements ``SettingsProvider`` for the transforms.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from editorsync.core.model_types import LogComponent
from editorsync.core.types import DefaultSettings
from editorsync.exceptions import ConfigResolutionError
from editorsync.logging import structured_extra
from editorsync.properties import build_resolved_config

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from editorsync.core.types import ResolvedConfig
    from editorsync.host.protocols import ConfigResolver, TextDocument

logger: logging.Logger = logging.getLogger("editorsync.cache")


class ConfigResolutionCache:
    """Mapping from document path to its resolved configuration.

    Args:
        resolver: Collaborator resolving raw properties for a path.
        on_resolved: Called after every resolution request that leaves the
            document's configuration available (fresh or cached), used to
            refresh the active editor's options.
        defaults: Initial host-wide fallbacks.
    """

    def __init__(
        self,
        resolver: ConfigResolver,
        *,
        on_resolved: Callable[[], object] | None = None,
        defaults: DefaultSettings | None = None,
    ) -> None:
        self._resolver = resolver
        self._on_resolved = on_resolved
        self._entries: dict[str, ResolvedConfig] = {}
        self._defaults = defaults if defaults is not None else DefaultSettings()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._entries))

    def lookup(self, path: str) -> ResolvedConfig | None:
        """Return the cached configuration for ``path``, if any."""
        return self._entries.get(path)

    def settings_for_document(self, document: TextDocument) -> ResolvedConfig | None:
        if document.is_untitled:
            return None
        return self.lookup(document.file_name)

    def default_settings(self) -> DefaultSettings:
        return self._defaults

    def replace_defaults(self, defaults: DefaultSettings) -> None:
        """Swap in a new defaults instance."""
        self._defaults = defaults

    def clear(self) -> None:
        self._entries = {}

    async def ensure_resolved(self, document: TextDocument) -> None:
        """Resolve and cache the configuration for ``document`` when missing.

        Untitled documents and already cached paths are not resolved again;
        both still trigger the refresh callback. Resolution failures are
        logged and leave the path without an entry.

        Args:
            document: Document observed by the host.
        """
        if document.is_untitled or document.file_name in self._entries:
            self._notify()
            return

        path = document.file_name
        try:
            raw = await self._resolver.resolve(path)
            config = build_resolved_config(raw, path=path)
        except ConfigResolutionError as exc:
            logger.warning(
                "Configuration unavailable: %s",
                exc,
                extra=structured_extra(component=LogComponent.CACHE, path=path),
            )
            return

        self._entries[path] = config
        logger.debug(
            "Stored configuration",
            extra=structured_extra(component=LogComponent.CACHE, path=path, details=dict(config)),
        )
        self._notify()

    async def rebuild_all(self, documents: Iterable[TextDocument]) -> None:
        """Discard every entry and resolve all ``documents`` concurrently.

        Completes only once every per-document resolution has settled.
        """
        self.clear()
        pending = [self.ensure_resolved(document) for document in documents]
        _ = await asyncio.gather(*pending)
        logger.debug(
            "Rebuilt configuration cache for %d document(s)",
            len(self._entries),
            extra=structured_extra(component=LogComponent.CACHE, details={"requested": len(pending)}),
        )

    def _notify(self) -> None:
        if self._on_resolved is not None:
            _ = self._on_resolved()


__all__ = ["ConfigResolutionCache"]
