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

"""CLI entry point and orchestration for editorsync commands."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from collections.abc import Callable, Sequence
from contextlib import suppress
from pathlib import Path
from typing import TYPE_CHECKING, Final, cast

from editorsync import __version__
from editorsync.commands.generate import generate_editorconfig
from editorsync.config import ConfigValidationError, HostSettings, load_host_settings
from editorsync.controller import ApplicationController
from editorsync.core.model_types import HostEvent, LogComponent
from editorsync.exceptions import DocumentDecodeError
from editorsync.host.memory import InMemoryDocument, InMemoryHost
from editorsync.logging import LOG_FORMATS, LOG_LEVELS, configure_logging, structured_extra
from editorsync.resolver import EditorConfigResolver

from .io import echo

if TYPE_CHECKING:
    from editorsync.core.types import HostEditorOptions, ResolvedConfig
    from editorsync.transforms import PipelineResult

logger: logging.Logger = logging.getLogger("editorsync.cli")

EDITORSYNC_VERSION: Final[str] = __version__

CommandHandler = Callable[[argparse.Namespace, HostSettings], int]


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point for the editorsync command-line interface.

    Args:
        argv: Command-line arguments to parse. If None, uses sys.argv.

    Returns:
        int: Exit code from the executed command handler (0 for success, non-zero for failure).
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.version:
        echo(f"editorsync {EDITORSYNC_VERSION}")
        return 0
    if args.command is None:
        parser.error("No command provided.")
    _initialize_logging(args.log_format, args.log_level)
    handler = _command_handlers().get(args.command)
    if handler is None:
        parser.error(f"Unknown command {args.command}")
    try:
        settings = load_host_settings(args.config)
    except ConfigValidationError as exc:
        echo(f"[editorsync] {exc}", err=True)
        return 2
    return handler(args, settings)


def _build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with global options and the resolve, fix and init commands."""
    parser = argparse.ArgumentParser(
        prog="editorsync",
        description="Resolve .editorconfig settings and apply them to files.",
    )
    _ = parser.add_argument("--version", action="store_true", help="Print the editorsync version and exit.")
    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Host settings file (default: editorsync.toml, .editorsync.toml or pyproject.toml).",
    )
    _ = parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Log output format (default: $EDITORSYNC_LOG_FORMAT or text).",
    )
    _ = parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Log verbosity (default: $EDITORSYNC_LOG_LEVEL or info).",
    )
    subparsers = parser.add_subparsers(dest="command")

    resolve = subparsers.add_parser(
        "resolve",
        help="Print the resolved configuration for a file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    _ = resolve.add_argument("path", type=Path, help="File to resolve configuration for.")
    _ = resolve.add_argument("--format", choices=("text", "json"), default="text", help="Output format.")

    fix = subparsers.add_parser(
        "fix",
        help="Trim trailing whitespace and insert final newlines as configured",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    _ = fix.add_argument("paths", type=Path, nargs="+", help="Files to fix.")
    _ = fix.add_argument(
        "--check",
        action="store_true",
        help="Report files that would change without writing them; exit 1 if any would.",
    )

    init = subparsers.add_parser(
        "init",
        help="Generate a root .editorconfig from the host settings",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    _ = init.add_argument("--root", type=Path, default=Path(), help="Workspace root to write into.")
    return parser


def _initialize_logging(log_format: str | None, log_level: str | None) -> None:
    """Configure logging; an unknown format from the environment leaves logging untouched."""
    with suppress(ValueError):
        _ = configure_logging(log_format, log_level=log_level)


def _command_handlers() -> dict[str, CommandHandler]:
    """Return a mapping of command names to their handler functions."""
    return {
        "resolve": _handle_resolve,
        "fix": _handle_fix,
        "init": _handle_init,
    }


async def _resolve_one(path: Path, settings: HostSettings) -> tuple[ResolvedConfig | None, HostEditorOptions | None]:
    host = InMemoryHost(settings, workspace_root=Path.cwd())
    document = InMemoryDocument(path=path.resolve())
    host.set_active_editor(host.add_document(document))
    controller = ApplicationController(host, EditorConfigResolver())
    await controller.activate()
    editor = host.active_editor
    return controller.cache.lookup(document.file_name), editor.options if editor is not None else None


def _handle_resolve(args: argparse.Namespace, settings: HostSettings) -> int:
    path: Path = args.path.resolve()
    config, options = asyncio.run(_resolve_one(path, settings))
    if config is None:
        echo(f"[editorsync] Unable to resolve configuration for {path}", err=True)
        return 1
    if args.format == "json":
        payload = {
            "path": str(path),
            "properties": dict(config),
            "host_options": None
            if options is None
            else {"tab_size": options.tab_size, "insert_spaces": options.insert_spaces},
        }
        echo(json.dumps(payload, indent=2, sort_keys=True))
        return 0
    echo(str(path))
    for name, value in sorted(config.items()):
        echo(f"  {name} = {_format_value(value)}")
    if options is not None:
        echo(f"  -> {options.describe()}")
    return 0


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


async def _fix_all(
    paths: Sequence[Path],
    settings: HostSettings,
    *,
    check: bool,
) -> list[tuple[InMemoryDocument, PipelineResult | None]]:
    host = InMemoryHost(settings, workspace_root=Path.cwd())
    documents = [host.open_file(path, write_through=not check) for path in paths]
    controller = ApplicationController(host, EditorConfigResolver())
    await controller.activate()
    results: list[tuple[InMemoryDocument, PipelineResult | None]] = []
    for document in documents:
        result = await controller.dispatch(HostEvent.DOCUMENT_SAVED, document)
        results.append((document, cast("PipelineResult | None", result)))
    controller.dispose()
    return results


def _handle_fix(args: argparse.Namespace, settings: HostSettings) -> int:
    paths: list[Path] = args.paths
    missing = [path for path in paths if not path.is_file()]
    if missing:
        for path in missing:
            echo(f"[editorsync] Not a file: {path}", err=True)
        return 1

    check: bool = args.check
    try:
        results = asyncio.run(_fix_all(paths, settings, check=check))
    except DocumentDecodeError as exc:
        echo(f"[editorsync] {exc}", err=True)
        return 1
    changed = 0
    for document, result in results:
        if result is None or not result.changed:
            continue
        changed += 1
        detail = _describe_result(result)
        verb = "Would fix" if check else "Fixed"
        echo(f"[editorsync] {verb} {document.file_name} ({detail})")
    logger.info(
        "%d of %d file(s) %s",
        changed,
        len(results),
        "need changes" if check else "changed",
        extra=structured_extra(component=LogComponent.CLI, edits=changed),
    )
    return 1 if check and changed else 0


def _describe_result(result: PipelineResult) -> str:
    parts: list[str] = []
    if result.trimmed_lines:
        parts.append(f"trimmed {result.trimmed_lines} line(s)")
    if result.inserted_newline:
        parts.append("inserted final newline")
    return ", ".join(parts)


def _handle_init(args: argparse.Namespace, settings: HostSettings) -> int:
    root: Path = args.root
    host = InMemoryHost(settings, workspace_root=root.resolve() if root.is_dir() else None)
    target = generate_editorconfig(host)
    for message in host.information_messages:
        echo(f"[editorsync] {message}")
    for message in host.error_messages:
        echo(f"[editorsync] {message}", err=True)
    if target is not None:
        echo(f"[editorsync] Wrote {target}")
    return 1 if host.error_messages else 0


__all__ = ["main"]
