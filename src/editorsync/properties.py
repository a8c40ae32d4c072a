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

"""Normalisation of raw configuration properties into a resolved configuration.

The configuration parser reports every value as a string. This module coerces
the properties editorsync consumes into typed values with pydantic, drops
``unset`` and unparseable values, and enforces that ``indent_size`` never
keeps the ``tab`` marker once stored.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Final, Literal

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from editorsync.core.model_types import LogComponent
from editorsync.logging import structured_extra

if TYPE_CHECKING:
    from editorsync.core.types import ResolvedConfig

logger: logging.Logger = logging.getLogger("editorsync.resolver")

TAB_MARKER: Final = "tab"
UNSET: Final = "unset"


class EditorConfigProperties(BaseModel):
    """Typed view of the properties editorsync reads.

    Unknown properties are preserved as extras so the resolved configuration
    keeps everything the parser reported.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    indent_style: str | None = None
    indent_size: int | Literal["tab"] | None = None
    tab_width: int | None = None
    end_of_line: str | None = None
    insert_final_newline: bool | None = None
    trim_trailing_whitespace: bool | None = None

    @field_validator("indent_style", "end_of_line", mode="before")
    @classmethod
    def _lowercase(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("indent_size", "tab_width", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


def _is_unset(value: object) -> bool:
    return isinstance(value, str) and value.strip().lower() == UNSET


def coerce_properties(
    raw: Mapping[str, object],
    *,
    path: str | os.PathLike[str] | None = None,
) -> dict[str, object]:
    """Coerce raw parser output into typed property values.

    Args:
        raw: Property mapping as reported by the configuration parser.
        path: File the properties apply to, used for diagnostics only.

    Returns:
        A new dictionary without ``unset`` or unparseable entries.
    """
    prepared = {str(key): value for key, value in raw.items() if not _is_unset(value)}
    try:
        model = EditorConfigProperties.model_validate(prepared)
    except ValidationError as exc:
        invalid = sorted({str(error["loc"][0]) for error in exc.errors() if error["loc"]})
        logger.warning(
            "Ignoring invalid properties %s",
            ", ".join(invalid),
            extra=structured_extra(
                component=LogComponent.RESOLVER,
                path=path,
                details={key: prepared.get(key) for key in invalid},
            ),
        )
        prepared = {key: value for key, value in prepared.items() if key not in invalid}
        model = EditorConfigProperties.model_validate(prepared)
    return model.model_dump(exclude_none=True)


def normalise_indent_size(properties: Mapping[str, object]) -> dict[str, object]:
    """Rewrite ``indent_size = tab`` to the value of ``tab_width``.

    When ``tab_width`` is absent the ``indent_size`` key is removed instead, so
    the ``tab`` marker is never stored.

    Args:
        properties: Coerced property mapping.

    Returns:
        A new dictionary satisfying the invariant.
    """
    result = dict(properties)
    if result.get("indent_size") == TAB_MARKER:
        tab_width = result.get("tab_width")
        if tab_width is None:
            del result["indent_size"]
        else:
            result["indent_size"] = tab_width
    return result


def build_resolved_config(
    raw: Mapping[str, object],
    *,
    path: str | os.PathLike[str] | None = None,
) -> ResolvedConfig:
    """Coerce, normalise and freeze parser output for storage."""
    return MappingProxyType(normalise_indent_size(coerce_properties(raw, path=path)))


__all__ = [
    "TAB_MARKER",
    "UNSET",
    "EditorConfigProperties",
    "build_resolved_config",
    "coerce_properties",
    "normalise_indent_size",
]
