# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for analyzer settings stores."""

import json
from pathlib import Path

import pytest

from spice_lang.config import (
    AnalyzerSettings,
    InMemorySettingsStore,
    JsonSettingsStore,
    SettingsError,
)


def test_missing_settings_file_yields_defaults(tmp_path: Path) -> None:
    store = JsonSettingsStore(tmp_path / "absent.json")

    settings = store.load()

    assert settings == AnalyzerSettings()
    assert settings.compiler_path == "spicy"
    assert settings.check_builtin_overrides is True


def test_settings_round_trip_and_unknown_keys_are_ignored(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "settings.json"
    store = JsonSettingsStore(path)
    store.save(AnalyzerSettings(compiler_path="/opt/spicy", enable_diagnostics=False))

    payload = json.loads(path.read_text(encoding="utf-8"))
    payload["colour"] = "blue"
    path.write_text(json.dumps(payload), encoding="utf-8")

    loaded = store.load()
    assert loaded.compiler_path == "/opt/spicy"
    assert loaded.enable_diagnostics is False


def test_malformed_settings_raise_settings_error(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SettingsError):
        JsonSettingsStore(path).load()

    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(SettingsError):
        JsonSettingsStore(path).load()


def test_in_memory_store_and_override_toggle() -> None:
    store = InMemorySettingsStore()

    store.save(store.load().with_override_check(False))

    assert store.load().check_builtin_overrides is False
    assert store.load().with_override_check(True).check_builtin_overrides is True


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("enable_diagnostics", "false"),
        ("check_builtin_overrides", 0),
        ("compiler_path", 42),
        ("runner_path", None),
        ("process_timeout_seconds", "5"),
        ("process_timeout_seconds", True),
    ],
)
def test_wrongly_typed_setting_raises_settings_error_naming_key(
    tmp_path: Path, key: str, value: object
) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({key: value}), encoding="utf-8")

    with pytest.raises(SettingsError, match=key):
        JsonSettingsStore(path).load()


def test_integer_timeout_is_accepted_as_seconds(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"process_timeout_seconds": 5}), encoding="utf-8")

    settings = JsonSettingsStore(path).load()

    assert settings.process_timeout_seconds == 5.0
    assert isinstance(settings.process_timeout_seconds, float)
