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

"""Unit tests for trailing whitespace trimming."""

from __future__ import annotations

import pytest

from editorsync.host.memory import InMemoryEditor
from editorsync.transforms import strip_trailing_whitespace, trim_trailing_whitespace
from tests.fixtures.editors import make_document

pytestmark = pytest.mark.unit

TRIM = {"trim_trailing_whitespace": True}


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("code  ", "code"),
        ("code\t \t", "code"),
        ("code\ufeff", "code"),
        ("code\xa0 ", "code"),
        ("  indented", "  indented"),
        ("   ", ""),
        ("", ""),
    ],
)
def test_strip_trailing_whitespace(text: str, expected: str) -> None:
    assert strip_trailing_whitespace(text) == expected


@pytest.mark.asyncio
async def test_trims_every_changed_line() -> None:
    document = make_document("a  \nb\nc\t\r\n  \nd")
    editor = InMemoryEditor(document)

    edited = await trim_trailing_whitespace(TRIM, editor)

    assert edited == 3
    assert document.text == "a\nb\nc\r\n\nd"


@pytest.mark.asyncio
async def test_second_pass_produces_no_edits() -> None:
    document = make_document("one \ntwo\t\nthree")
    editor = InMemoryEditor(document)

    _ = await trim_trailing_whitespace(TRIM, editor)
    version = document.version

    assert await trim_trailing_whitespace(TRIM, editor) == 0
    assert document.version == version


@pytest.mark.asyncio
async def test_skipped_when_host_trims_itself() -> None:
    document = make_document("x   ")
    edited = await trim_trailing_whitespace(TRIM, InMemoryEditor(document), host_trims_whitespace=True)
    assert edited == 0
    assert document.text == "x   "


@pytest.mark.parametrize("config", [{}, {"trim_trailing_whitespace": False}])
@pytest.mark.asyncio
async def test_skipped_when_not_configured(config: dict[str, object]) -> None:
    document = make_document("x   ")
    assert await trim_trailing_whitespace(config, InMemoryEditor(document)) == 0
    assert not document.dirty


@pytest.mark.asyncio
async def test_blank_line_between_lone_breaks_is_trimmed_in_one_batch() -> None:
    document = make_document("x\r \nb  \nc ")
    editor = InMemoryEditor(document)

    edited = await trim_trailing_whitespace(TRIM, editor)

    assert edited == 3
    assert document.text == "x\r\nb\nc"
    assert document.version == 1
