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

"""Common exception hierarchy for editorsync."""

from __future__ import annotations

__all__ = [
    "ConfigResolutionError",
    "DocumentDecodeError",
    "EditConflictError",
    "EditorSyncError",
    "EditorSyncTypeError",
    "EditorSyncValidationError",
    "TabSizeError",
]


class EditorSyncError(Exception):
    """Base error for all editorsync exceptions."""


class EditorSyncValidationError(EditorSyncError, ValueError):
    """Raised when input data fails validation checks."""


class EditorSyncTypeError(EditorSyncError, TypeError):
    """Raised when input data has an unexpected type."""


class ConfigResolutionError(EditorSyncError):
    """Raised when no configuration can be resolved for a file path.

    The resolution cache absorbs this error per document; a failing path is
    simply left without configuration.
    """

    def __init__(self, path: str, error: Exception | str) -> None:
        """Initialize the exception with the failing path and its cause.

        Args:
            path: The file path whose configuration could not be resolved.
            error: The underlying exception or a description of the failure.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to resolve configuration for {path}: {error}")


class TabSizeError(EditorSyncValidationError):
    """Raised when a tab size is neither numeric nor the ``auto`` sentinel."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"tab size must be an integer or 'auto' (got {value!r})")


class EditConflictError(EditorSyncValidationError):
    """Raised when a batch of edits contains overlapping ranges."""


class DocumentDecodeError(EditorSyncValidationError):
    """Raised when a file cannot be decoded into a text document."""

    def __init__(self, path: str, error: UnicodeDecodeError) -> None:
        self.path = path
        self.error = error
        super().__init__(f"Unable to decode {path}: {error}")
