# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Analyzer settings and settings stores."""

import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class SettingsError(RuntimeError):
    """Represent an unreadable or malformed settings source."""


@dataclass(frozen=True)
class AnalyzerSettings:
    """Represent user-facing analyzer settings.

    Attributes:
        compiler_path: Compiler executable used for compile and syntax check.
        runner_path: Executable used to run Spice sources.
        enable_diagnostics: Whether live diagnostics are produced.
        check_builtin_overrides: Whether compile/run warn about built-in overrides.
        process_timeout_seconds: Timeout for compiler and checker processes.
    """

    compiler_path: str = "spicy"
    runner_path: str = "spice"
    enable_diagnostics: bool = True
    check_builtin_overrides: bool = True
    process_timeout_seconds: float = 60.0

    def with_override_check(self, enabled: bool) -> "AnalyzerSettings":
        return replace(self, check_builtin_overrides=enabled)


class SettingsStore(Protocol):
    """Define loading and saving of analyzer settings."""

    def load(self) -> AnalyzerSettings:
        """Load current settings."""

    def save(self, settings: AnalyzerSettings) -> None:
        """Persist settings."""


class InMemorySettingsStore:
    """Keep settings for the lifetime of the process."""

    def __init__(self, settings: AnalyzerSettings | None = None) -> None:
        self._settings = settings or AnalyzerSettings()

    def load(self) -> AnalyzerSettings:
        return self._settings

    def save(self, settings: AnalyzerSettings) -> None:
        self._settings = settings


class JsonSettingsStore:
    """Read and write settings as a flat JSON object."""

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: Settings file location. A missing file means defaults.
        """
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> AnalyzerSettings:
        """Load settings from disk.

        Unknown keys are ignored.

        Returns:
            Loaded settings, or defaults when the file does not exist.

        Raises:
            SettingsError: If the file cannot be read, is not a JSON object, or
                holds a known key with a value of the wrong type.
        """
        if not self._path.exists():
            return AnalyzerSettings()
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning(f"Failed to read settings (path={self._path} error={exc})")
            raise SettingsError(f"Cannot read settings file {self._path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise SettingsError(f"Settings file must contain a JSON object: {self._path}")

        known = {item.name for item in fields(AnalyzerSettings)}
        ignored = sorted(key for key in payload if key not in known)
        if ignored:
            logger.warning(
                f"Ignoring unknown settings keys (path={self._path} keys={ignored})"
            )
        values = {key: value for key, value in payload.items() if key in known}
        for key, value in values.items():
            _check_setting_type(key, value, self._path)
        if "process_timeout_seconds" in values:
            values["process_timeout_seconds"] = float(values["process_timeout_seconds"])
        return AnalyzerSettings(**values)

    def save(self, settings: AnalyzerSettings) -> None:
        """Write settings to disk.

        Raises:
            SettingsError: If the file cannot be written.
        """
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(asdict(settings), indent=2, sort_keys=True), encoding="utf-8"
            )
        except OSError as exc:
            logger.warning(f"Failed to write settings (path={self._path} error={exc})")
            raise SettingsError(f"Cannot write settings file {self._path}: {exc}") from exc


_STRING_SETTINGS = frozenset({"compiler_path", "runner_path"})
_BOOL_SETTINGS = frozenset({"enable_diagnostics", "check_builtin_overrides"})


def _check_setting_type(key: str, value: object, path: Path) -> None:
    if key in _STRING_SETTINGS:
        valid = isinstance(value, str)
        expected = "a string"
    elif key in _BOOL_SETTINGS:
        valid = isinstance(value, bool)
        expected = "a boolean"
    else:
        # bool is an int subclass; true/false is not a timeout
        valid = isinstance(value, (int, float)) and not isinstance(value, bool)
        expected = "a number"
    if not valid:
        raise SettingsError(
            f"Setting {key!r} must be {expected}, got {type(value).__name__}: {path}"
        )
