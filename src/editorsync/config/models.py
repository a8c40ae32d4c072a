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

"""Host settings models and validation for editorsync.

Host settings describe the editor-wide behaviour that per-file configuration
falls back to: the default tab size, whether spaces are inserted, and whether
the host already trims trailing whitespace on save. Pydantic models validate
the TOML payload; the frozen ``HostSettings`` dataclass is the runtime shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from editorsync.core.types import DefaultSettings, InsertSpaces, TabSize
from editorsync.exceptions import EditorSyncValidationError

if TYPE_CHECKING:
    from pathlib import Path

CONFIG_VERSION: Final[int] = 0


class ConfigValidationError(EditorSyncValidationError):
    """Raised when configuration data contains invalid values."""


class UnsupportedConfigVersionError(ConfigValidationError):
    """Raised when a configuration file declares an unsupported schema version."""

    def __init__(self, provided: int, expected: int) -> None:
        """Initialize the exception with version information.

        Args:
            provided: The config_version value provided in the configuration file.
            expected: The config_version value expected by this version of editorsync.
        """
        self.provided = provided
        self.expected = expected
        super().__init__(f"Unsupported config_version {provided}; expected {expected}")


class ConfigReadError(ConfigValidationError):
    """Raised when a configuration file cannot be read from disk."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and underlying error.

        Args:
            path: The path to the configuration file that could not be read.
            error: The underlying exception that caused the read failure.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class InvalidConfigFileError(ConfigValidationError):
    """Raised when the settings file fails validation."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with configuration file path and validation error.

        Args:
            path: The path to the configuration file that failed validation.
            error: The underlying validation exception.
        """
        self.path = path
        self.error = error
        super().__init__(f"Invalid editorsync configuration in {path}: {error}")


@dataclass(slots=True, frozen=True)
class HostSettings:
    """Editor-wide settings of the host.

    Attributes:
        tab_size: Default tab size, numeric or ``"auto"``.
        insert_spaces: Whether the host inserts spaces by default, or ``"auto"``.
        trim_trailing_whitespace: Whether the host itself trims trailing
            whitespace on save; editorsync then skips its own trimming.
    """

    tab_size: TabSize = 4
    insert_spaces: InsertSpaces = True
    trim_trailing_whitespace: bool = False

    def defaults(self) -> DefaultSettings:
        """Return the fallback pair used for per-file option resolution."""
        return DefaultSettings(tab_size=self.tab_size, insert_spaces=self.insert_spaces)


class EditorSectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tab_size: int | Literal["auto"] = Field(default=4)
    insert_spaces: bool | Literal["auto"] = Field(default=True)

    @field_validator("tab_size")
    @classmethod
    def _positive_tab_size(cls, value: int | str) -> int | str:
        if isinstance(value, int) and value < 1:
            message = f"tab_size must be positive (got {value})"
            raise ValueError(message)
        return value


class FilesSectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    trim_trailing_whitespace: bool = False


class HostSettingsModel(BaseModel):
    """Root schema of ``editorsync.toml``."""

    model_config = ConfigDict(extra="forbid")

    config_version: int = Field(default=CONFIG_VERSION)
    editor: EditorSectionModel = Field(default_factory=EditorSectionModel)
    files: FilesSectionModel = Field(default_factory=FilesSectionModel)


def settings_from_model(model: HostSettingsModel) -> HostSettings:
    return HostSettings(
        tab_size=model.editor.tab_size,
        insert_spaces=model.editor.insert_spaces,
        trim_trailing_whitespace=model.files.trim_trailing_whitespace,
    )


__all__ = [
    "CONFIG_VERSION",
    "ConfigReadError",
    "ConfigValidationError",
    "EditorSectionModel",
    "FilesSectionModel",
    "HostSettings",
    "HostSettingsModel",
    "InvalidConfigFileError",
    "UnsupportedConfigVersionError",
    "settings_from_model",
]
