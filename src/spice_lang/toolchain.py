# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""External compiler, syntax checker and runner invocation."""

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

from spice_lang.config import AnalyzerSettings
from spice_lang.language import COMPILED_SUFFIX, SOURCE_SUFFIX

logger = logging.getLogger(__name__)


class ToolchainError(RuntimeError):
    """Represent a failed compile, check, run or pre-invocation save."""


@dataclass(frozen=True)
class ToolResult:
    """Represent a successful external tool invocation.

    Attributes:
        message: User-facing success message.
        output_path: Generated file, when the tool produces one.
    """

    message: str
    output_path: Path | None = None


def compiled_path_for(source_path: Path) -> Path:
    """Return the Python output path for a Spice source path."""
    if source_path.suffix == SOURCE_SUFFIX:
        return source_path.with_suffix(COMPILED_SUFFIX)
    return source_path


class SpiceToolchain:
    """Invoke the Spice compiler and runner executables."""

    def __init__(self, settings: AnalyzerSettings) -> None:
        """Initialize with the settings that name the executables.

        Args:
            settings: Analyzer settings.
        """
        self._settings = settings

    def compile(self, source_path: Path) -> ToolResult:
        """Compile a Spice file to Python.

        Args:
            source_path: Spice source file.

        Returns:
            Result naming the generated file.

        Raises:
            ToolchainError: If the compiler fails or writes to stderr.
        """
        output_path = compiled_path_for(source_path)
        stderr = self._run_captured(
            [str(source_path), "-o", str(output_path)], action="compile"
        )
        if stderr:
            raise ToolchainError(f"Compilation error: {stderr}")
        return ToolResult(
            message=f"Successfully compiled to {output_path.name}",
            output_path=output_path,
        )

    def check_syntax(self, source_path: Path) -> ToolResult:
        """Run the compiler in check-only mode.

        Raises:
            ToolchainError: If the checker fails or writes to stderr.
        """
        stderr = self._run_captured([str(source_path), "-c"], action="check")
        if stderr:
            raise ToolchainError(f"Syntax error: {stderr}")
        return ToolResult(message="Syntax check passed!")

    def run(self, source_path: Path) -> int:
        """Run a Spice file attached to the current terminal.

        Output is not captured.

        Args:
            source_path: Spice source file.

        Returns:
            Exit status of the runner.

        Raises:
            ToolchainError: If the runner cannot be launched.
        """
        command = [*shlex.split(self._settings.runner_path), str(source_path)]
        logger.info(f"Running Spice file (command={command})")
        try:
            completed = subprocess.run(command, check=False)
        except OSError as exc:
            logger.warning(f"Runner launch failed (command={command} error={exc})")
            raise ToolchainError(f"Failed to run: {exc}") from exc
        return completed.returncode

    def _run_captured(self, arguments: list[str], action: str) -> str:
        """Run the compiler and return its stripped stderr.

        Raises:
            ToolchainError: If the process cannot start, times out or exits
                non-zero.
        """
        command = [*shlex.split(self._settings.compiler_path), *arguments]
        timeout = self._settings.process_timeout_seconds
        logger.info(f"Invoking compiler (action={action} command={command})")
        try:
            completed = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as exc:
            logger.warning(f"Compiler timed out (action={action} timeout={timeout})")
            raise ToolchainError(f"Failed to {action}: timed out after {timeout}s") from exc
        except OSError as exc:
            logger.warning(f"Compiler launch failed (action={action} error={exc})")
            raise ToolchainError(f"Failed to {action}: {exc}") from exc

        stderr = completed.stderr.strip()
        if completed.returncode != 0:
            logger.warning(
                f"Compiler exited non-zero (action={action} returncode={completed.returncode})"
            )
            raise ToolchainError(
                f"Failed to {action}: {stderr or f'exit status {completed.returncode}'}"
            )
        return stderr
