# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""User commands that save a document and hand it to the toolchain."""

import logging
from typing import Callable

from spice_lang.config import AnalyzerSettings, SettingsStore
from spice_lang.gating import GateOutcome, OverridePrompt, gate_overrides
from spice_lang.service import Document
from spice_lang.shadowing import detect_overrides
from spice_lang.toolchain import SpiceToolchain, ToolResult

logger = logging.getLogger(__name__)

ToolchainFactory = Callable[[AnalyzerSettings], SpiceToolchain]


class SpiceCommands:
    """Run compile, check and run actions for one document at a time."""

    def __init__(
        self,
        settings_store: SettingsStore,
        prompt: OverridePrompt,
        toolchain_factory: ToolchainFactory = SpiceToolchain,
    ) -> None:
        """Initialize command dependencies.

        Args:
            settings_store: Settings source; updated when warnings are suppressed.
            prompt: Capability that asks the user about built-in overrides.
            toolchain_factory: Builds a toolchain from the current settings.
        """
        self._settings_store = settings_store
        self._prompt = prompt
        self._toolchain_factory = toolchain_factory

    def compile(self, document: Document) -> ToolResult | None:
        """Save, gate and compile a document.

        Returns:
            Compile result, or ``None`` when the user cancelled.

        Raises:
            ToolchainError: If saving or compiling fails.
        """
        document.save()
        settings = self._settings_store.load()
        if not self._gate(document, settings):
            return None
        return self._toolchain_factory(self._settings_store.load()).compile(document.path)

    def run(self, document: Document) -> int | None:
        """Save, gate and run a document.

        Returns:
            Runner exit status, or ``None`` when the user cancelled.

        Raises:
            ToolchainError: If saving fails or the runner cannot start.
        """
        document.save()
        settings = self._settings_store.load()
        if not self._gate(document, settings):
            return None
        return self._toolchain_factory(self._settings_store.load()).run(document.path)

    def check_syntax(self, document: Document) -> ToolResult:
        """Save a document and run the syntax checker.

        Raises:
            ToolchainError: If saving or checking fails.
        """
        document.save()
        return self._toolchain_factory(self._settings_store.load()).check_syntax(
            document.path
        )

    def enable_override_check(self) -> None:
        """Re-enable the built-in override warning."""
        settings = self._settings_store.load()
        self._settings_store.save(settings.with_override_check(True))
        logger.info("Built-in override warnings re-enabled")

    def _gate(self, document: Document, settings: AnalyzerSettings) -> bool:
        outcome = gate_overrides(
            overrides=detect_overrides(document.source),
            check_enabled=settings.check_builtin_overrides,
            prompt=self._prompt,
        )
        if outcome is GateOutcome.PROCEED_AND_SUPPRESS:
            self._settings_store.save(settings.with_override_check(False))
            logger.info("Built-in override warnings disabled")
        return outcome.proceeds
