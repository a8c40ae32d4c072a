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

"""Unit tests for the editorsync command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from editorsync import __version__
from editorsync.cli import main
from editorsync.exceptions import ConfigResolutionError

pytestmark = [pytest.mark.unit, pytest.mark.cli]


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Return a workspace with a root ``.editorconfig`` as the working directory."""
    _ = (tmp_path / ".editorconfig").write_text(
        "root = true\n\n[*]\nindent_style = tab\ntab_width = 8\n"
        "trim_trailing_whitespace = true\ninsert_final_newline = true\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("EDITORSYNC_LOG_FORMAT", raising=False)
    monkeypatch.delenv("EDITORSYNC_LOG_LEVEL", raising=False)
    return tmp_path


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == f"editorsync {__version__}"


def test_missing_command_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        _ = main([])
    assert excinfo.value.code == 2


def test_resolve_text(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["resolve", str(workspace / "main.py")]) == 0

    out = capsys.readouterr().out
    assert "indent_style = tab" in out
    assert "tab_width = 8" in out
    assert "insert_final_newline = true" in out
    assert "-> EditorConfig: Tabs: 8" in out


def test_resolve_json(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["resolve", "main.py", "--format", "json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["path"] == str((workspace / "main.py").resolve())
    assert payload["properties"]["tab_width"] == 8
    assert payload["properties"]["trim_trailing_whitespace"] is True
    assert payload["host_options"] == {"tab_size": 8, "insert_spaces": False}


def test_resolve_failure_exits_non_zero(
    workspace: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    def _fail(path: str) -> dict[str, object]:
        raise ConfigResolutionError(path, "unreadable")

    monkeypatch.setattr("editorsync.resolver.resolve_properties", _fail)

    assert main(["resolve", str(workspace / "main.py")]) == 1
    assert "Unable to resolve configuration" in capsys.readouterr().err


def test_fix_check_then_fix(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = workspace / "notes.txt"
    clean = workspace / "clean.txt"
    _ = target.write_bytes(b"first  \nsecond\t")
    _ = clean.write_bytes(b"done\n")

    assert main(["fix", "--check", str(target), str(clean)]) == 1
    out = capsys.readouterr().out
    assert f"Would fix {target.resolve()}" in out
    assert "trimmed 2 line(s), inserted final newline" in out
    assert str(clean) not in out
    assert target.read_bytes() == b"first  \nsecond\t"

    assert main(["fix", str(target), str(clean)]) == 0
    assert f"Fixed {target.resolve()}" in capsys.readouterr().out
    assert target.read_bytes() == b"first\nsecond\n"
    assert clean.read_bytes() == b"done\n"

    assert main(["fix", "--check", str(target)]) == 0


def test_fix_rejects_missing_files(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["fix", str(workspace / "absent.py")]) == 1
    assert "Not a file" in capsys.readouterr().err


def test_fix_reports_undecodable_files(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = workspace / "notes.txt"
    binary = workspace / "image.bin"
    _ = target.write_bytes(b"first  ")
    _ = binary.write_bytes(b"\xff\xfe  ")

    assert main(["fix", str(target), str(binary)]) == 1

    err = capsys.readouterr().err
    assert "[editorsync] Unable to decode" in err
    assert "image.bin" in err
    assert target.read_bytes() == b"first  "


def test_fix_mixed_line_breaks(workspace: Path) -> None:
    target = workspace / "mixed.txt"
    _ = target.write_bytes(b"x\r \nb  \nc ")

    assert main(["fix", str(target)]) == 0
    assert target.read_bytes() == b"x\r\nb\nc\n"


def test_malformed_editorconfig_is_absorbed(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    broken_dir = workspace / "broken"
    broken_dir.mkdir()
    _ = (broken_dir / ".editorconfig").write_bytes(b"[*]\nindent_style = \xff\xfe tab\n")
    broken = broken_dir / "a.txt"
    fine = workspace / "b.txt"
    _ = broken.write_bytes(b"keep  ")
    _ = fine.write_bytes(b"trim  ")

    assert main(["resolve", str(broken)]) == 1
    assert "Unable to resolve configuration" in capsys.readouterr().err

    assert main(["fix", str(broken), str(fine)]) == 0
    assert broken.read_bytes() == b"keep  "
    assert fine.read_bytes() == b"trim\n"


def test_fix_honours_host_trimming(workspace: Path) -> None:
    _ = (workspace / "editorsync.toml").write_text("[files]\ntrim_trailing_whitespace = true\n", encoding="utf-8")
    target = workspace / "notes.txt"
    _ = target.write_bytes(b"keep  ")

    assert main(["fix", str(target)]) == 0
    assert target.read_bytes() == b"keep  \n"


def test_init_writes_then_reports_existing(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    settings = tmp_path / "host.toml"
    _ = settings.write_text("[editor]\ntab_size = 2\ninsert_spaces = true\n", encoding="utf-8")

    assert main(["--config", str(settings), "init", "--root", str(tmp_path)]) == 0
    assert (tmp_path / ".editorconfig").read_text(encoding="utf-8") == (
        "root = true\n\n[*]\nindent_style = space\nindent_size = 2\n"
    )
    assert "Wrote" in capsys.readouterr().out

    assert main(["--config", str(settings), "init", "--root", str(tmp_path)]) == 0
    assert "already exists" in capsys.readouterr().out


def test_init_without_workspace(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.chdir(tmp_path)
    assert main(["init", "--root", str(tmp_path / "nowhere")]) == 0
    assert "Please open a folder" in capsys.readouterr().out


def test_invalid_settings_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    settings = tmp_path / "host.toml"
    _ = settings.write_text("[editor]\nunknown = 1\n", encoding="utf-8")

    assert main(["--config", str(settings), "resolve", str(tmp_path / "a.py")]) == 2
    assert "Invalid editorsync configuration" in capsys.readouterr().err
