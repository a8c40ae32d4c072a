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

"""Property-based tests for settings translation and property normalisation."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from editorsync.core.model_types import EndOfLine
from editorsync.core.types import DefaultSettings, HostEditorOptions, InsertSpaces, TabSize
from editorsync.properties import build_resolved_config
from editorsync.translate import host_options_to_config_properties, resolve_to_host_options

pytestmark = pytest.mark.property

tab_sizes: st.SearchStrategy[TabSize] = st.one_of(st.integers(min_value=1, max_value=16), st.just("auto"))
insert_spaces_values: st.SearchStrategy[InsertSpaces] = st.sampled_from([True, False, "auto"])
defaults_strategy = st.builds(DefaultSettings, tab_size=tab_sizes, insert_spaces=insert_spaces_values)


@given(defaults_strategy)
def test_empty_config_yields_defaults(defaults: DefaultSettings) -> None:
    options = resolve_to_host_options({}, defaults)
    assert options == HostEditorOptions(tab_size=defaults.tab_size, insert_spaces=defaults.insert_spaces)


@given(st.integers(min_value=1, max_value=32), defaults_strategy)
def test_space_options_round_trip(tab_size: int, defaults: DefaultSettings) -> None:
    original = HostEditorOptions(tab_size=tab_size, insert_spaces=True)
    assert resolve_to_host_options(host_options_to_config_properties(original), defaults) == original


@given(tab_sizes, st.sampled_from([False, "auto"]), defaults_strategy)
def test_tab_options_translate_to_tabs(tab_size: TabSize, insert_spaces: InsertSpaces, defaults: DefaultSettings) -> None:
    properties = host_options_to_config_properties(HostEditorOptions(tab_size=tab_size, insert_spaces=insert_spaces))
    options = resolve_to_host_options(properties, defaults)
    assert options.insert_spaces is False
    assert isinstance(options.tab_size, int)


@given(st.integers(min_value=1, max_value=64), st.sampled_from(["tab", "TAB", " Tab "]))
def test_tab_marker_never_survives(tab_width: int, marker: str) -> None:
    config = build_resolved_config({"indent_size": marker, "tab_width": str(tab_width)})
    assert config["indent_size"] == tab_width


@given(st.sampled_from(["tab", "Tab"]), st.dictionaries(st.sampled_from(["charset", "indent_style"]), st.text(min_size=1)))
def test_tab_marker_without_tab_width_is_dropped(marker: str, others: dict[str, str]) -> None:
    config = build_resolved_config({**others, "indent_size": marker})
    assert "indent_size" not in config


@given(st.text())
def test_end_of_line_coercion_is_total(raw: str) -> None:
    assert EndOfLine.coerce(raw).sequence in {"\n", "\r", "\r\n"}
