# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Declaration scanning and the queryable symbol table."""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from spice_lang.blocks import find_block_end
from spice_lang.text import SourceText

logger = logging.getLogger(__name__)


class SymbolKind(Enum):
    """Declaration category."""

    CLASS = "class"
    INTERFACE = "interface"
    FUNCTION = "function"


_CLASS_PATTERN = re.compile(
    r"\b(?:(?:abstract|final)\s+)?class\s+(\w+)"
    r"(?:\s+extends\s+\w+)?(?:\s+implements\s+\w+(?:\s*,\s*\w+)*)?"
)
_INTERFACE_PATTERN = re.compile(r"\binterface\s+(\w+)")
_FUNCTION_PATTERN = re.compile(
    r"\b(?:(?:static|final|abstract)\s+)?def\s+(\w+)\s*\([^)]*\)(?:\s*->\s*\w+)?"
)

# Resolution precedence follows this order.
_PATTERNS: tuple[tuple[SymbolKind, re.Pattern[str]], ...] = (
    (SymbolKind.CLASS, _CLASS_PATTERN),
    (SymbolKind.INTERFACE, _INTERFACE_PATTERN),
    (SymbolKind.FUNCTION, _FUNCTION_PATTERN),
)


@dataclass(frozen=True)
class Symbol:
    """Represent one declaration site.

    Attributes:
        name: Declared identifier.
        kind: Declaration category.
        declaration_offset: Offset where the declaration (with modifiers) starts.
        name_offset: Offset of the identifier itself.
        range_start: Start of the symbol range; equals ``declaration_offset``.
        range_end: Offset just after the closing brace, or end of document
            when the block is unterminated.
    """

    name: str
    kind: SymbolKind
    declaration_offset: int
    name_offset: int
    range_start: int
    range_end: int

    @property
    def range(self) -> tuple[int, int]:
        return (self.range_start, self.range_end)


def scan_symbols(source: SourceText) -> list[Symbol]:
    """Scan a document for class, interface and function declarations.

    Nesting is not tracked: a method inside a class is reported as its own
    function symbol.

    Args:
        source: Document snapshot.

    Returns:
        Symbols ordered by declaration offset.
    """
    symbols: list[Symbol] = []
    for kind, pattern in _PATTERNS:
        for match in pattern.finditer(source.text):
            start = match.start()
            symbols.append(
                Symbol(
                    name=match.group(1),
                    kind=kind,
                    declaration_offset=start,
                    name_offset=match.start(1),
                    range_start=start,
                    range_end=find_block_end(source, start),
                )
            )
    symbols.sort(key=lambda symbol: symbol.declaration_offset)
    logger.debug(f"Scanned symbols (count={len(symbols)})")
    return symbols


class SymbolTable:
    """Hold the symbols of one document snapshot."""

    def __init__(self, symbols: list[Symbol]) -> None:
        """Initialize the table.

        Args:
            symbols: Symbols ordered by declaration offset.
        """
        self._symbols = tuple(symbols)

    @classmethod
    def from_source(cls, source: SourceText) -> "SymbolTable":
        return cls(scan_symbols(source))

    @property
    def symbols(self) -> tuple[Symbol, ...]:
        return self._symbols

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def of_kind(self, kind: SymbolKind) -> list[Symbol]:
        return [symbol for symbol in self._symbols if symbol.kind is kind]

    def resolve(self, name: str) -> Symbol | None:
        """Resolve a name to its defining symbol.

        Classes win over interfaces, interfaces over functions; within a kind
        the earliest declaration wins.

        Args:
            name: Identifier to look up.

        Returns:
            Matching symbol, or ``None``.
        """
        for kind, _ in _PATTERNS:
            for symbol in self._symbols:
                if symbol.kind is kind and symbol.name == name:
                    return symbol
        return None
