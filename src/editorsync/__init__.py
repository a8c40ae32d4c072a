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

"""editorsync - apply ``.editorconfig`` settings to an editor host.

Resolves per-file EditorConfig properties, translates them into host editor
options, and normalises whitespace when documents are saved.
"""

from __future__ import annotations

from editorsync.exceptions import (
    ConfigResolutionError,
    DocumentDecodeError,
    EditConflictError,
    EditorSyncError,
    EditorSyncTypeError,
    EditorSyncValidationError,
    TabSizeError,
)

from .cache import ConfigResolutionCache
from .commands import generate_editorconfig
from .config import HostSettings, load_host_settings
from .controller import ApplicationController
from .core.types import DefaultSettings, HostEditorOptions
from .resolver import EditorConfigResolver
from .translate import host_options_to_config_properties, resolve_tab_size, resolve_to_host_options

__version__ = "0.1.0"

__all__ = [
    "ApplicationController",
    "ConfigResolutionCache",
    "ConfigResolutionError",
    "DefaultSettings",
    "DocumentDecodeError",
    "EditConflictError",
    "EditorConfigResolver",
    "EditorSyncError",
    "EditorSyncTypeError",
    "EditorSyncValidationError",
    "HostEditorOptions",
    "HostSettings",
    "TabSizeError",
    "__version__",
    "generate_editorconfig",
    "host_options_to_config_properties",
    "load_host_settings",
    "resolve_tab_size",
    "resolve_to_host_options",
]
