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

"""Unit tests for the application controller."""

from __future__ import annotations

import pytest

from editorsync.config import HostSettings
from editorsync.controller import ApplicationController, ControllerDisposedError, is_config_file
from editorsync.core.model_types import HostEvent
from editorsync.core.types import DefaultSettings, HostEditorOptions
from editorsync.host.memory import InMemoryDocument, InMemoryEditor, InMemoryHost
from editorsync.transforms import PipelineResult
from tests.fixtures.editors import FakeResolver, make_document, workspace_path

pytestmark = pytest.mark.unit


def _open(host: InMemoryHost, document: InMemoryDocument) -> InMemoryEditor:
    editor = host.add_document(document)
    assert editor is not None
    return editor


def test_handler_table_covers_every_event(memory_host: InMemoryHost, fake_resolver: FakeResolver) -> None:
    controller = ApplicationController(memory_host, fake_resolver)
    assert set(controller.handlers) == set(HostEvent)


def test_is_config_file_matches_basename_only() -> None:
    assert is_config_file(make_document("", ".editorconfig"))
    assert is_config_file(make_document("", "nested/.editorconfig"))
    assert not is_config_file(make_document("", "editorconfig.txt"))
    assert not is_config_file(InMemoryDocument(""))


@pytest.mark.asyncio
async def test_activation_resolves_open_documents(memory_host: InMemoryHost, fake_resolver: FakeResolver) -> None:
    fake_resolver.set(workspace_path("a.py"), indent_style="tab", tab_width="8")
    editor = _open(memory_host, make_document("", "a.py"))
    _ = _open(memory_host, make_document("", "b.py"))
    memory_host.set_active_editor(editor)
    controller = ApplicationController(memory_host, fake_resolver)

    await controller.dispatch(HostEvent.ACTIVATED)

    assert len(controller.cache) == 2
    assert editor.options == HostEditorOptions(tab_size=8, insert_spaces=False)
    assert memory_host.status_messages[-1] == ("EditorConfig: Tabs: 8", 1500)


@pytest.mark.asyncio
async def test_active_editor_change_applies_options(memory_host: InMemoryHost, fake_resolver: FakeResolver) -> None:
    fake_resolver.set(workspace_path("a.py"), indent_style="space", indent_size="2")
    editor = _open(memory_host, make_document("", "a.py"))
    memory_host.set_active_editor(editor)
    controller = ApplicationController(memory_host, fake_resolver)

    await controller.dispatch(HostEvent.ACTIVE_EDITOR_CHANGED, editor)

    assert editor.options == HostEditorOptions(tab_size=2, insert_spaces=True)
    assert memory_host.status_messages == [("EditorConfig: Spaces: 2", 1500)]


@pytest.mark.asyncio
async def test_missing_properties_fall_back_to_host_settings(fake_resolver: FakeResolver) -> None:
    host = InMemoryHost(HostSettings(tab_size="auto", insert_spaces="auto"))
    editor = _open(host, make_document("", "a.py"))
    host.set_active_editor(editor)
    controller = ApplicationController(host, fake_resolver)

    await controller.dispatch(HostEvent.ACTIVE_EDITOR_CHANGED, editor)

    assert editor.options == HostEditorOptions(tab_size="auto", insert_spaces="auto")
    assert host.status_messages[-1] == ("EditorConfig: auto: auto", 1500)


@pytest.mark.asyncio
async def test_active_editor_change_without_editor_is_noop(
    memory_host: InMemoryHost,
    fake_resolver: FakeResolver,
) -> None:
    controller = ApplicationController(memory_host, fake_resolver)
    await controller.dispatch(HostEvent.ACTIVE_EDITOR_CHANGED, None)
    assert fake_resolver.calls == []


@pytest.mark.asyncio
async def test_any_resolution_refreshes_the_active_editor(
    memory_host: InMemoryHost,
    fake_resolver: FakeResolver,
) -> None:
    fake_resolver.set(workspace_path("active.py"), indent_size="3")
    fake_resolver.set(workspace_path("background.py"), indent_size="7")
    active = _open(memory_host, make_document("", "active.py"))
    memory_host.set_active_editor(active)
    controller = ApplicationController(memory_host, fake_resolver)
    await controller.activate()
    background = _open(memory_host, make_document("", "background.py"))
    memory_host.status_messages.clear()

    await controller.cache.ensure_resolved(background.document)

    # Resolving a background document re-applies the active editor's options.
    assert background.options is None
    assert active.options == HostEditorOptions(tab_size=3, insert_spaces=True)
    assert memory_host.status_messages == [("EditorConfig: Spaces: 3", 1500)]


@pytest.mark.asyncio
async def test_configuration_change_replaces_defaults(fake_resolver: FakeResolver) -> None:
    host = InMemoryHost(HostSettings(tab_size=4, insert_spaces=True))
    controller = ApplicationController(host, fake_resolver)

    host.update_settings(HostSettings(tab_size=2, insert_spaces=False))
    await controller.dispatch(HostEvent.CONFIGURATION_CHANGED)

    assert controller.cache.default_settings() == DefaultSettings(tab_size=2, insert_spaces=False)


@pytest.mark.asyncio
async def test_document_saved_runs_transforms(memory_host: InMemoryHost, fake_resolver: FakeResolver) -> None:
    fake_resolver.set(workspace_path("a.py"), trim_trailing_whitespace="true", insert_final_newline="true")
    document = make_document("value = 1   ", "a.py")
    _ = _open(memory_host, document)
    controller = ApplicationController(memory_host, fake_resolver)
    await controller.activate()

    result = await controller.dispatch(HostEvent.DOCUMENT_SAVED, document)

    assert result == PipelineResult(trimmed_lines=1, inserted_newline=True, saved=True)
    assert document.text == "value = 1\n"


@pytest.mark.asyncio
async def test_config_file_save_rebuilds_cache_before_transforms(
    memory_host: InMemoryHost,
    fake_resolver: FakeResolver,
) -> None:
    config_path = str(workspace_path(".editorconfig"))
    other_path = str(workspace_path("other.py"))
    config_document = make_document("root = true  ", ".editorconfig")
    other = make_document("", "other.py")
    _ = _open(memory_host, config_document)
    _ = memory_host.add_document(other, show=False)
    controller = ApplicationController(memory_host, fake_resolver)
    await controller.activate()
    fake_resolver.events.clear()

    # The stale entry does not trim; only the rebuilt one does.
    fake_resolver.set(config_path, trim_trailing_whitespace="true")
    result = await controller.dispatch(HostEvent.DOCUMENT_SAVED, config_document)

    assert result is not None
    assert result.trimmed_lines == 1
    assert config_document.text == "root = true"
    assert sorted(fake_resolver.events) == [f"resolved {config_path}", f"resolved {other_path}"]


@pytest.mark.asyncio
async def test_dispose_clears_cache_and_rejects_dispatch(
    memory_host: InMemoryHost,
    fake_resolver: FakeResolver,
) -> None:
    _ = _open(memory_host, make_document("", "a.py"))
    controller = ApplicationController(memory_host, fake_resolver)
    await controller.activate()

    controller.dispose()

    assert len(controller.cache) == 0
    assert dict(controller.handlers) == {}
    with pytest.raises(ControllerDisposedError):
        _ = controller.dispatch(HostEvent.ACTIVATED)
