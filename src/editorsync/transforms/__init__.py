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

"""Idempotent, configuration-driven document transforms applied at save time."""

from __future__ import annotations

from .final_newline import insert_final_newline, newline_for
from .pipeline import PipelineResult, run_save_pipeline
from .trim_whitespace import strip_trailing_whitespace, trim_trailing_whitespace

__all__ = [
    "PipelineResult",
    "insert_final_newline",
    "newline_for",
    "run_save_pipeline",
    "strip_trailing_whitespace",
    "trim_trailing_whitespace",
]
