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

"""Host editor surface: protocols and the in-memory implementation."""

from __future__ import annotations

from .memory import InMemoryDocument, InMemoryEditor, InMemoryHost
from .protocols import (
    ConfigResolver,
    EditorHost,
    Position,
    Range,
    SettingsProvider,
    TextDocument,
    TextEdit,
    TextEditor,
    find_editor,
)

__all__ = [
    "ConfigResolver",
    "EditorHost",
    "InMemoryDocument",
    "InMemoryEditor",
    "InMemoryHost",
    "Position",
    "Range",
    "SettingsProvider",
    "TextDocument",
    "TextEdit",
    "TextEditor",
    "find_editor",
]
