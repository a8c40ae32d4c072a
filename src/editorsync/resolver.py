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

"""Configuration resolution backed by the EditorConfig core library.

The library walks the ancestor directories of a path, applies section glob
matching and precedence, and returns the merged properties. Parsing runs in a
worker thread so the control loop is never blocked on file I/O.
"""

from __future__ import annotations

import asyncio
import logging
import time

from editorconfig import get_properties
from editorconfig.exceptions import EditorConfigError

from editorsync.core.model_types import LogComponent
from editorsync.exceptions import ConfigResolutionError
from editorsync.logging import structured_extra

logger: logging.Logger = logging.getLogger("editorsync.resolver")


def resolve_properties(path: str) -> dict[str, object]:
    """Return the merged configuration properties for ``path``.

    Args:
        path: Absolute path of the file being edited.

    Returns:
        Property mapping with string values as reported by the parser.

    Raises:
        ConfigResolutionError: If the configuration cannot be read, decoded or
            parsed.
    """
    started = time.perf_counter()
    try:
        properties = get_properties(path)
    except (EditorConfigError, OSError, UnicodeDecodeError) as exc:
        raise ConfigResolutionError(path, exc) from exc
    logger.debug(
        "Resolved %d properties",
        len(properties),
        extra=structured_extra(
            component=LogComponent.RESOLVER,
            path=path,
            duration_ms=(time.perf_counter() - started) * 1000,
        ),
    )
    return dict(properties)


class EditorConfigResolver:
    """Asynchronous adapter over :func:`resolve_properties`."""

    async def resolve(self, path: str) -> dict[str, object]:
        return await asyncio.to_thread(resolve_properties, path)


__all__ = ["EditorConfigResolver", "resolve_properties"]
