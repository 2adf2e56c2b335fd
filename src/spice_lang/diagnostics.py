# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Per-line lint diagnostics and the per-document diagnostic store."""

import logging
from dataclasses import dataclass
from enum import IntEnum

from spice_lang.language import STATEMENT_TERMINATORS
from spice_lang.text import SourceText

logger = logging.getLogger(__name__)

MISSING_TERMINATOR_CODE = "spice-missing-terminator"
MISSING_TERMINATOR_MESSAGE = "statement should end with a terminator"


class Severity(IntEnum):
    """Diagnostic severity using LSP numbering."""

    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


@dataclass(frozen=True)
class Diagnostic:
    """Represent one lint finding on a single line.

    Attributes:
        line: Line index (0-based).
        start_column: First flagged column (0-based).
        end_column: Column just after the flagged range.
        message: Human-readable message.
        severity: Finding severity.
        code: Stable diagnostic code.
    """

    line: int
    start_column: int
    end_column: int
    message: str
    severity: Severity
    code: str


def generate_diagnostics(source: SourceText) -> list[Diagnostic]:
    """Flag lines that do not end with an accepted statement terminator.

    Each line is judged on its own, so continuation lines of multi-line
    statements are flagged too.

    Args:
        source: Document snapshot.

    Returns:
        Diagnostics in line order.
    """
    diagnostics: list[Diagnostic] = []
    for index, line in enumerate(source.lines):
        trimmed = line.strip()
        if not trimmed or trimmed.endswith(STATEMENT_TERMINATORS):
            continue
        raw_line = line[:-1] if line.endswith("\r") else line
        last_column = len(raw_line) - 1
        diagnostics.append(
            Diagnostic(
                line=index,
                start_column=last_column,
                end_column=last_column + 1,
                message=MISSING_TERMINATOR_MESSAGE,
                severity=Severity.WARNING,
                code=MISSING_TERMINATOR_CODE,
            )
        )
    return diagnostics


class DiagnosticStore:
    """Keep the latest diagnostics per document identity."""

    def __init__(self) -> None:
        self._by_document: dict[str, tuple[Diagnostic, ...]] = {}

    def replace(self, document_id: str, diagnostics: list[Diagnostic]) -> None:
        """Replace every diagnostic of one document.

        Args:
            document_id: Document identity, typically its URI or path.
            diagnostics: Complete new diagnostic set.
        """
        self._by_document[document_id] = tuple(diagnostics)
        logger.debug(
            f"Diagnostics replaced (document_id={document_id} count={len(diagnostics)})"
        )

    def get(self, document_id: str) -> tuple[Diagnostic, ...]:
        return self._by_document.get(document_id, ())

    def clear(self, document_id: str) -> None:
        self._by_document.pop(document_id, None)

    def documents(self) -> list[str]:
        return sorted(self._by_document)
