# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Detection of user code that shadows reserved built-in names.

Comment handling is whole-line only: a line is skipped when its trimmed text
starts with ``#`` or ``//``. Trailing comments and text inside string literals
are still inspected.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum

from spice_lang.language import RESERVED_NAMES
from spice_lang.text import SourceText

logger = logging.getLogger(__name__)

_COMMENT_PREFIXES: tuple[str, ...] = ("#", "//")
_RELATIONAL_OPERATORS: tuple[str, ...] = ("==", "!=", "<=", ">=")
_FUNCTION_DEF_PATTERN = re.compile(r"^(?:(?:static|final|abstract)\s+)*def\s+(\w+)\s*\(")
_ASSIGNMENT_PATTERN = re.compile(r"^(\w+)\s*=")


class OverrideKind(Enum):
    """How a reserved name is redefined."""

    FUNCTION_DEFINITION = "function"
    ASSIGNMENT = "assignment"

    @property
    def label(self) -> str:
        if self is OverrideKind.FUNCTION_DEFINITION:
            return "function definition"
        return "variable assignment"


@dataclass(frozen=True)
class Override:
    """Represent one redefinition of a reserved name.

    Attributes:
        name: Reserved name being redefined.
        line_number: Source line (1-based).
        kind: Redefinition form.
    """

    name: str
    line_number: int
    kind: OverrideKind


def detect_overrides(
    source: SourceText, reserved_names: frozenset[str] = RESERVED_NAMES
) -> list[Override]:
    """Find lines that redefine reserved built-in names.

    Args:
        source: Document snapshot.
        reserved_names: Names that must not be redefined.

    Returns:
        Overrides in line order, at most one per line.
    """
    overrides: list[Override] = []
    for index, line in enumerate(source.lines):
        override = _check_line(line.strip(), index + 1, reserved_names)
        if override is not None:
            overrides.append(override)
    if overrides:
        logger.debug(f"Detected built-in overrides (count={len(overrides)})")
    return overrides


def _check_line(
    trimmed: str, line_number: int, reserved_names: frozenset[str]
) -> Override | None:
    if not trimmed or trimmed.startswith(_COMMENT_PREFIXES):
        return None

    function_match = _FUNCTION_DEF_PATTERN.match(trimmed)
    if function_match:
        name = function_match.group(1)
        if name in reserved_names:
            return Override(
                name=name,
                line_number=line_number,
                kind=OverrideKind.FUNCTION_DEFINITION,
            )
        return None

    assignment_match = _ASSIGNMENT_PATTERN.match(trimmed)
    if assignment_match is None:
        return None
    if any(operator in trimmed for operator in _RELATIONAL_OPERATORS):
        return None
    name = assignment_match.group(1)
    if name not in reserved_names:
        return None
    return Override(name=name, line_number=line_number, kind=OverrideKind.ASSIGNMENT)
