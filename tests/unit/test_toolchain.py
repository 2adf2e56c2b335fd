# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for external compiler, checker and runner invocation."""

from pathlib import Path

import pytest

from spice_lang.config import AnalyzerSettings
from spice_lang.toolchain import SpiceToolchain, ToolchainError, compiled_path_for

_WRITING_COMPILER = """
import sys
args = sys.argv[1:]
if "-o" in args:
    with open(args[args.index("-o") + 1], "w", encoding="utf-8") as handle:
        handle.write("print('compiled')\\n")
"""


def test_compiled_path_replaces_spice_suffix() -> None:
    assert compiled_path_for(Path("src/app.spc")) == Path("src/app.py")
    assert compiled_path_for(Path("src/app.txt")) == Path("src/app.txt")


def test_compile_invokes_compiler_with_output_flag(tmp_path: Path, write_file, python_tool) -> None:
    source = write_file(tmp_path / "app.spc", "x = 1;\n")
    toolchain = SpiceToolchain(
        AnalyzerSettings(compiler_path=python_tool("compiler", _WRITING_COMPILER))
    )

    result = toolchain.compile(source)

    assert result.output_path == tmp_path / "app.py"
    assert result.message == "Successfully compiled to app.py"
    assert (tmp_path / "app.py").read_text(encoding="utf-8").startswith("print(")


def test_check_syntax_passes_on_silent_success(tmp_path: Path, write_file, python_tool) -> None:
    source = write_file(tmp_path / "app.spc", "x = 1;\n")
    toolchain = SpiceToolchain(
        AnalyzerSettings(compiler_path=python_tool("checker", "import sys\n"))
    )

    assert toolchain.check_syntax(source).message == "Syntax check passed!"


def test_stderr_output_is_reported_verbatim(tmp_path: Path, write_file, python_tool) -> None:
    source = write_file(tmp_path / "app.spc", "x = 1\n")
    compiler = python_tool(
        "noisy", "import sys\nsys.stderr.write('line 1: missing ;\\n')\n"
    )
    toolchain = SpiceToolchain(AnalyzerSettings(compiler_path=compiler))

    with pytest.raises(ToolchainError, match="Compilation error: line 1: missing ;"):
        toolchain.compile(source)
    with pytest.raises(ToolchainError, match="Syntax error: line 1: missing ;"):
        toolchain.check_syntax(source)


def test_non_zero_exit_is_a_failure(tmp_path: Path, write_file, python_tool) -> None:
    source = write_file(tmp_path / "app.spc", "x = 1;\n")
    toolchain = SpiceToolchain(
        AnalyzerSettings(compiler_path=python_tool("failing", "raise SystemExit(3)\n"))
    )

    with pytest.raises(ToolchainError, match="exit status 3"):
        toolchain.compile(source)


def test_missing_compiler_and_timeout_are_failures(tmp_path: Path, write_file, python_tool) -> None:
    source = write_file(tmp_path / "app.spc", "x = 1;\n")
    missing = SpiceToolchain(
        AnalyzerSettings(compiler_path=str(tmp_path / "no-such-compiler"))
    )
    slow = SpiceToolchain(
        AnalyzerSettings(
            compiler_path=python_tool("slow", "import time\ntime.sleep(5)\n"),
            process_timeout_seconds=0.2,
        )
    )

    with pytest.raises(ToolchainError, match="Failed to compile"):
        missing.compile(source)
    with pytest.raises(ToolchainError, match="timed out"):
        slow.check_syntax(source)


def test_run_returns_runner_exit_status(tmp_path: Path, write_file, python_tool) -> None:
    source = write_file(tmp_path / "app.spc", "x = 1;\n")
    toolchain = SpiceToolchain(
        AnalyzerSettings(runner_path=python_tool("runner", "raise SystemExit(4)\n"))
    )

    assert toolchain.run(source) == 4
    with pytest.raises(ToolchainError):
        SpiceToolchain(AnalyzerSettings(runner_path=str(tmp_path / "nope"))).run(source)
