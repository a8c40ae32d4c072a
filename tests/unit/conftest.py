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

"""Fixtures shared across all unit tests."""

from __future__ import annotations

import pytest

from editorsync.host.memory import InMemoryHost
from tests.fixtures.editors import WORKSPACE, FakeResolver


@pytest.fixture
def fake_resolver() -> FakeResolver:
    """Return a resolver with no canned properties."""
    return FakeResolver()


@pytest.fixture
def memory_host() -> InMemoryHost:
    """Return an in-memory host rooted at the fake workspace."""
    return InMemoryHost(workspace_root=WORKSPACE)
