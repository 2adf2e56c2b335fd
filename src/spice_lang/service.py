# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Document snapshots and event-driven re-analysis."""

import logging
from dataclasses import dataclass, replace
from pathlib import Path

from spice_lang.config import SettingsStore
from spice_lang.diagnostics import Diagnostic, DiagnosticStore, generate_diagnostics
from spice_lang.shadowing import Override, detect_overrides
from spice_lang.symbols import Symbol, scan_symbols
from spice_lang.text import SourceText
from spice_lang.toolchain import ToolchainError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Document:
    """Represent one open editor document.

    Attributes:
        uri: Document identity used to key diagnostics.
        path: Backing file path.
        text: Current text, possibly unsaved.
        version: Edit counter, incremented by ``with_text``.
    """

    uri: str
    path: Path
    text: str
    version: int = 0

    @classmethod
    def from_path(cls, path: Path) -> "Document":
        """Load a document from disk.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
        """
        return cls(uri=path.resolve().as_uri(), path=path, text=path.read_text(encoding="utf-8"))

    @property
    def source(self) -> SourceText:
        return SourceText(self.text)

    def with_text(self, text: str) -> "Document":
        return replace(self, text=text, version=self.version + 1)

    def save(self) -> None:
        """Write the current text to the backing file.

        Raises:
            ToolchainError: If the file cannot be written.
        """
        try:
            self.path.write_text(self.text, encoding="utf-8")
        except OSError as exc:
            logger.warning(f"Failed to save document (path={self.path} error={exc})")
            raise ToolchainError(f"Failed to save {self.path}: {exc}") from exc


@dataclass(frozen=True)
class DocumentAnalysis:
    """Represent every analyzer output for one text snapshot."""

    symbols: list[Symbol]
    overrides: list[Override]
    diagnostics: list[Diagnostic]


def analyze_source(source: SourceText) -> DocumentAnalysis:
    """Run the symbol scanner, shadow detector and diagnostic generator."""
    return DocumentAnalysis(
        symbols=scan_symbols(source),
        overrides=detect_overrides(source),
        diagnostics=generate_diagnostics(source),
    )


class AnalysisService:
    """Recompute live diagnostics on document open and change events."""

    def __init__(
        self, settings_store: SettingsStore, store: DiagnosticStore | None = None
    ) -> None:
        """Initialize the service.

        Args:
            settings_store: Source of the ``enable_diagnostics`` toggle.
            store: Diagnostic store to publish into.
        """
        self._settings_store = settings_store
        self._store = store or DiagnosticStore()

    @property
    def store(self) -> DiagnosticStore:
        return self._store

    def did_open(self, document: Document) -> tuple[Diagnostic, ...]:
        return self._refresh(document)

    def did_change(self, document: Document) -> tuple[Diagnostic, ...]:
        return self._refresh(document)

    def did_close(self, document: Document) -> None:
        self._store.clear(document.uri)

    def _refresh(self, document: Document) -> tuple[Diagnostic, ...]:
        """Replace the document's diagnostics with a fresh computation.

        Args:
            document: Opened or changed document.

        Returns:
            Diagnostics now published for the document.
        """
        if not self._settings_store.load().enable_diagnostics:
            self._store.clear(document.uri)
            return ()
        self._store.replace(document.uri, generate_diagnostics(document.source))
        logger.debug(f"Document analyzed (uri={document.uri} version={document.version})")
        return self._store.get(document.uri)
