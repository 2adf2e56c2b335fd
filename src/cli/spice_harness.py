# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Command-line harness for the Spice analyzer and toolchain."""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Prompt
from rich.style import Style
from rich.table import Table

from spice_lang.commands import SpiceCommands
from spice_lang.config import (
    AnalyzerSettings,
    JsonSettingsStore,
    SettingsError,
    SettingsStore,
)
from spice_lang.features import find_definition, outline
from spice_lang.gating import PromptChoice
from spice_lang.project import FileReport, ScanError, analyze_project
from spice_lang.service import Document
from spice_lang.shadowing import Override
from spice_lang.text import Position, SourceText
from spice_lang.toolchain import ToolchainError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path.home() / ".spice" / "settings.json"

_PROMPT_ANSWERS: dict[str, PromptChoice] = {
    "continue": PromptChoice.CONTINUE,
    "cancel": PromptChoice.CANCEL,
    "never": PromptChoice.DONT_SHOW_AGAIN,
}


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="spice-analyzer")
    parser.add_argument(
        "--settings",
        default=str(DEFAULT_SETTINGS_PATH),
        help="Settings JSON file.",
    )
    parser.add_argument(
        "--compiler-path", required=False, help="Override the compiler executable."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    outline_parser = subparsers.add_parser("outline")
    outline_parser.add_argument("--file", required=True, help="Spice source file.")
    outline_parser.add_argument(
        "--format", choices=("table", "json"), default="table", help="Output format."
    )

    lint_parser = subparsers.add_parser("lint")
    lint_parser.add_argument(
        "--path", required=True, help="Spice file or project directory."
    )
    lint_parser.add_argument(
        "--format", choices=("table", "json"), default="table", help="Output format."
    )

    definition_parser = subparsers.add_parser("definition")
    definition_parser.add_argument("--file", required=True, help="Spice source file.")
    definition_parser.add_argument(
        "--line", type=int, required=True, help="Line number (1-based)."
    )
    definition_parser.add_argument(
        "--column", type=int, required=True, help="Column number (1-based)."
    )

    for name in ("compile", "run"):
        action_parser = subparsers.add_parser(name)
        action_parser.add_argument("--file", required=True, help="Spice source file.")
        answer = action_parser.add_mutually_exclusive_group()
        answer.add_argument(
            "--yes", action="store_true", help="Continue despite built-in overrides."
        )
        answer.add_argument(
            "--no", action="store_true", help="Cancel when built-in overrides exist."
        )

    check_parser = subparsers.add_parser("check")
    check_parser.add_argument("--file", required=True, help="Spice source file.")

    subparsers.add_parser("enable-override-check")
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run CLI command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2

    store = _CliSettingsStore(
        JsonSettingsStore(Path(args.settings)), compiler_path=args.compiler_path
    )
    try:
        store.load()
    except SettingsError as exc:
        logger.warning(f"Invalid settings (path={args.settings} error={exc})")
        stderr.write(f"{exc}\n")
        return 2

    if args.command == "outline":
        return _run_outline(args=args, stdout=stdout, stderr=stderr)
    if args.command == "lint":
        return _run_lint(args=args, stdout=stdout, stderr=stderr)
    if args.command == "definition":
        return _run_definition(args=args, stdout=stdout, stderr=stderr)
    if args.command in ("compile", "run", "check"):
        return _run_toolchain_command(args=args, store=store, stdout=stdout, stderr=stderr)
    if args.command == "enable-override-check":
        return _run_enable_override_check(store=store, stdout=stdout, stderr=stderr)

    logger.warning(f"Unsupported command (command={args.command})")
    stderr.write(f"Unsupported command: {args.command}\n")
    return 2


class _CliSettingsStore:
    """Apply command-line overrides on top of a persistent store."""

    def __init__(self, inner: SettingsStore, compiler_path: str | None) -> None:
        self._inner = inner
        self._compiler_path = compiler_path

    def load(self) -> AnalyzerSettings:
        settings = self._inner.load()
        if self._compiler_path:
            return replace(settings, compiler_path=self._compiler_path)
        return settings

    def save(self, settings: AnalyzerSettings) -> None:
        if self._compiler_path:
            # Keep the one-off flag out of the persisted file.
            settings = replace(settings, compiler_path=self._inner.load().compiler_path)
        self._inner.save(settings)


class _ConsolePrompt:
    """Ask about built-in overrides on the console, or answer up front."""

    def __init__(self, console: Console, answer: PromptChoice | None = None) -> None:
        self._console = console
        self._answer = answer

    def __call__(self, overrides: list[Override], message: str) -> PromptChoice | None:
        self._console.print(message, markup=False, highlight=False)
        if self._answer is not None:
            return self._answer
        reply = Prompt.ask(
            "continue / cancel / never",
            choices=list(_PROMPT_ANSWERS),
            default="cancel",
            console=self._console,
        )
        return _PROMPT_ANSWERS.get(reply)


def _load_document(file_arg: str, stderr: TextIO) -> Document | None:
    path = Path(file_arg)
    if not path.is_file():
        logger.warning(f"File does not exist (path={path})")
        stderr.write(f"File does not exist: {path}\n")
        return None
    try:
        return Document.from_path(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(f"Failed to read file (path={path} error={exc})")
        stderr.write(f"Failed to read file: {path}\n")
        return None


def _run_outline(args: argparse.Namespace, stdout: TextIO, stderr: TextIO) -> int:
    """Run outline command.

    Args:
        args: Parsed CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    document = _load_document(args.file, stderr)
    if document is None:
        return 2
    source = document.source
    rows = [
        {
            "name": symbol.name,
            "kind": symbol.kind.value,
            "start": _format_position(source, symbol.range_start),
            "end": _format_position(source, symbol.range_end),
        }
        for symbol in outline(source)
    ]
    console = _console(stdout)
    if args.format == "json":
        _print_json(console, {"symbols": rows})
        return 0
    table = Table(show_header=True, expand=True)
    for column in ("name", "kind", "start", "end"):
        table.add_column(column, overflow="fold")
    for row in rows:
        table.add_row(row["name"], row["kind"], row["start"], row["end"])
    console.print(table)
    return 0


def _run_lint(args: argparse.Namespace, stdout: TextIO, stderr: TextIO) -> int:
    """Run lint command over a file or project directory.

    Returns:
        Exit code; 0 even when findings exist.
    """
    root_path = Path(args.path)
    if not root_path.exists():
        logger.warning(f"Path does not exist (path={root_path})")
        stderr.write(f"Path does not exist: {root_path}\n")
        return 2
    try:
        reports, errors = analyze_project(root_path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(f"Failed to read .gitignore files (error={exc})")
        stderr.write(f"Failed to read .gitignore files: {exc}\n")
        return 2

    for error in errors:
        stderr.write(f"scan_error: {error.file_path}: {error.message}\n")
    console = _console(stdout)
    if args.format == "json":
        _print_json(console, _lint_payload(reports, errors))
    else:
        _write_lint_tables(console, reports)
    return 0


def _run_definition(args: argparse.Namespace, stdout: TextIO, stderr: TextIO) -> int:
    document = _load_document(args.file, stderr)
    if document is None:
        return 2
    location = find_definition(
        document.source, Position(line=args.line - 1, column=args.column - 1)
    )
    if location is None:
        stderr.write("No definition found\n")
        return 1
    _console(stdout).print(
        f"{document.path}:{location.position.line + 1}:{location.position.column + 1}",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
    return 0


def _run_toolchain_command(
    args: argparse.Namespace,
    store: SettingsStore,
    stdout: TextIO,
    stderr: TextIO,
) -> int:
    """Run compile, run or check for one file.

    Returns:
        Exit code: 0 on success, 1 on tool failure or cancel, 2 on bad input.
    """
    document = _load_document(args.file, stderr)
    if document is None:
        return 2
    console = _console(stdout)
    answer = None
    if getattr(args, "yes", False):
        answer = PromptChoice.CONTINUE
    elif getattr(args, "no", False):
        answer = PromptChoice.CANCEL
    commands = SpiceCommands(settings_store=store, prompt=_ConsolePrompt(console, answer))

    try:
        if args.command == "check":
            console.print(commands.check_syntax(document).message, markup=False, soft_wrap=True)
            return 0
        if args.command == "compile":
            result = commands.compile(document)
            if result is None:
                stderr.write("Compilation cancelled\n")
                return 1
            console.print(result.message, markup=False, soft_wrap=True)
            return 0
        exit_code = commands.run(document)
    except (ToolchainError, SettingsError) as exc:
        logger.warning(f"Command failed (command={args.command} error={exc})")
        stderr.write(f"{exc}\n")
        return 1
    if exit_code is None:
        stderr.write("Run cancelled\n")
        return 1
    return exit_code


def _run_enable_override_check(store: SettingsStore, stdout: TextIO, stderr: TextIO) -> int:
    commands = SpiceCommands(settings_store=store, prompt=_ConsolePrompt(_console(stdout)))
    try:
        commands.enable_override_check()
    except SettingsError as exc:
        stderr.write(f"{exc}\n")
        return 1
    _console(stdout).print("Built-in override warnings have been re-enabled.")
    return 0


def _console(stdout: TextIO) -> Console:
    return Console(file=stdout, force_terminal=False, color_system="truecolor")


def _print_json(console: Console, payload: dict[str, Any]) -> None:
    console.print(
        json.dumps(payload, indent=2, sort_keys=True),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def _format_position(source: SourceText, offset: int) -> str:
    position = source.position_at(offset)
    return f"{position.line + 1}:{position.column + 1}"


def _lint_payload(reports: list[FileReport], errors: list[ScanError]) -> dict[str, Any]:
    return {
        "files": [
            {
                "file_path": report.file_path,
                "diagnostics": [
                    {
                        "line": diagnostic.line + 1,
                        "column": diagnostic.start_column + 1,
                        "end_column": diagnostic.end_column + 1,
                        "severity": diagnostic.severity.name.lower(),
                        "code": diagnostic.code,
                        "message": diagnostic.message,
                    }
                    for diagnostic in report.analysis.diagnostics
                ],
                "overrides": [
                    {
                        "name": override.name,
                        "line": override.line_number,
                        "kind": override.kind.value,
                    }
                    for override in report.analysis.overrides
                ],
            }
            for report in reports
        ],
        "errors": [
            {"file_path": error.file_path, "message": error.message} for error in errors
        ],
    }


def _write_lint_tables(console: Console, reports: list[FileReport]) -> None:
    """Write one findings table per analyzed file."""
    for report in reports:
        console.rule(report.file_path, style=Style(color="cyan"), characters="-")
        table = Table(show_header=True, expand=True)
        table.add_column("line", justify="right")
        table.add_column("column", justify="right")
        table.add_column("kind")
        table.add_column("detail", overflow="fold")
        for diagnostic in report.analysis.diagnostics:
            table.add_row(
                str(diagnostic.line + 1),
                str(diagnostic.start_column + 1),
                diagnostic.code,
                diagnostic.message,
            )
        for override in report.analysis.overrides:
            table.add_row(
                str(override.line_number),
                "",
                "builtin-override",
                f"{override.name} ({override.kind.label})",
            )
        console.print(table)


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
