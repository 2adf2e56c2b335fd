# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Best-effort analysis of every Spice file beneath a project root."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import pathspec

from spice_lang.language import SOURCE_SUFFIX
from spice_lang.service import DocumentAnalysis, analyze_source
from spice_lang.text import SourceText

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileReport:
    """Represent analyzer output for one project file.

    Attributes:
        file_path: Project-relative POSIX path.
        analysis: Symbols, overrides and diagnostics of the file.
        source: Analyzed text snapshot, for offset to position mapping.
    """

    file_path: str
    analysis: DocumentAnalysis
    source: SourceText


@dataclass(frozen=True)
class ScanError:
    """Represent a file that could not be analyzed."""

    file_path: str
    message: str


@dataclass(frozen=True)
class _IgnoreLayer:
    """Patterns of one .gitignore, matched relative to its directory."""

    base: Path
    spec: pathspec.GitIgnoreSpec

    def excludes(self, path: Path, is_dir: bool) -> bool:
        relative = path.relative_to(self.base).as_posix()
        return self.spec.match_file(f"{relative}/" if is_dir else relative)


def _read_ignore_layer(directory: Path) -> _IgnoreLayer | None:
    ignore_file = directory / ".gitignore"
    if not ignore_file.is_file():
        return None
    lines = ignore_file.read_text(encoding="utf-8").splitlines()
    return _IgnoreLayer(base=directory, spec=pathspec.GitIgnoreSpec.from_lines(lines))


def discover_sources(root_path: Path) -> list[Path]:
    """List Spice sources under a root, skipping ``.git`` and gitignored paths.

    Every directory's .gitignore applies to that directory and below. A path
    is skipped when any enclosing .gitignore excludes it.

    Args:
        root_path: Project root.

    Returns:
        Source files sorted by relative path.

    Raises:
        OSError: If a .gitignore file cannot be read.
        UnicodeDecodeError: If a .gitignore file contains invalid UTF-8.
    """
    layers_by_dir: dict[Path, list[_IgnoreLayer]] = {}
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root_path):
        current = Path(dirpath)
        layers = list(layers_by_dir.pop(current, []))
        own_layer = _read_ignore_layer(current)
        if own_layer is not None:
            layers.append(own_layer)

        kept_dirs = []
        for name in sorted(dirnames):
            child = current / name
            if name == ".git" or any(layer.excludes(child, True) for layer in layers):
                continue
            kept_dirs.append(name)
            layers_by_dir[child] = layers
        dirnames[:] = kept_dirs

        found.extend(
            current / name
            for name in filenames
            if name.endswith(SOURCE_SUFFIX)
            and not any(layer.excludes(current / name, False) for layer in layers)
        )
    return sorted(found, key=lambda path: path.relative_to(root_path).as_posix())


def analyze_project(root_path: Path) -> tuple[list[FileReport], list[ScanError]]:
    """Analyze a single Spice file or every Spice file under a directory.

    Args:
        root_path: File or directory to analyze.

    Returns:
        Per-file reports and recoverable per-file errors.

    Raises:
        OSError: If .gitignore files cannot be read.
        UnicodeDecodeError: If .gitignore files contain invalid UTF-8.
    """
    if root_path.is_file():
        base = root_path.parent
        files = [root_path]
    else:
        base = root_path
        files = discover_sources(root_path)

    reports: list[FileReport] = []
    errors: list[ScanError] = []
    for file_path in files:
        relative_path = file_path.relative_to(base).as_posix()
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                f"Skipping file due to read failure (file_path={relative_path} error={exc})"
            )
            errors.append(ScanError(file_path=relative_path, message=str(exc)))
            continue
        source = SourceText(text)
        reports.append(
            FileReport(file_path=relative_path, analysis=analyze_source(source), source=source)
        )
    logger.info(
        f"Project analyzed (path={root_path} files={len(reports)} errors={len(errors)})"
    )
    return reports, errors
