# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Editor-facing queries built on the symbol table and language tables."""

import re
from dataclasses import dataclass
from enum import Enum

from spice_lang.language import BUILTIN_NAMES, KEYWORD_DOCS, KEYWORDS, SNIPPETS
from spice_lang.symbols import Symbol, SymbolKind, SymbolTable
from spice_lang.text import Position, SourceText

_CALL_HEAD_PATTERN = re.compile(r"(\w+)\s*\(")


class CompletionKind(Enum):
    """Completion candidate category."""

    KEYWORD = "keyword"
    FUNCTION = "function"
    CLASS = "class"
    INTERFACE = "interface"
    SNIPPET = "snippet"


_SYMBOL_COMPLETION_KINDS: dict[SymbolKind, CompletionKind] = {
    SymbolKind.CLASS: CompletionKind.CLASS,
    SymbolKind.INTERFACE: CompletionKind.INTERFACE,
    SymbolKind.FUNCTION: CompletionKind.FUNCTION,
}


@dataclass(frozen=True)
class CompletionItem:
    """Represent one completion candidate.

    Attributes:
        label: Text shown in the completion list.
        kind: Candidate category.
        detail: Short description.
        insert_text: Snippet body to insert; ``None`` inserts ``label``.
        documentation: Optional longer description.
    """

    label: str
    kind: CompletionKind
    detail: str
    insert_text: str | None = None
    documentation: str | None = None


@dataclass(frozen=True)
class SignatureHelp:
    """Represent a callable signature with documented parameters."""

    label: str
    parameters: tuple[tuple[str, str], ...]
    active_parameter: int = 0


@dataclass(frozen=True)
class Location:
    """Represent a definition target inside the queried document."""

    offset: int
    position: Position


_KNOWN_SIGNATURES: dict[str, SignatureHelp] = {
    "print": SignatureHelp(
        label='print(*objects, sep=" ", end="\\n")',
        parameters=(
            ("*objects", "Objects to print"),
            ('sep=" "', "String separator"),
            ('end="\\n"', "String appended after the last value"),
        ),
    ),
}


def complete(source: SourceText) -> list[CompletionItem]:
    """Build completion candidates for a document.

    Args:
        source: Document snapshot.

    Returns:
        Keywords, built-ins, snippets and then user-defined symbols.
    """
    items = [
        CompletionItem(label=keyword, kind=CompletionKind.KEYWORD, detail="Spice keyword")
        for keyword in KEYWORDS
    ]
    items.extend(
        CompletionItem(label=name, kind=CompletionKind.FUNCTION, detail="Built-in function")
        for name in BUILTIN_NAMES
    )
    items.extend(
        CompletionItem(
            label=label,
            kind=CompletionKind.SNIPPET,
            detail=detail,
            insert_text=body,
            documentation=documentation,
        )
        for label, detail, body, documentation in SNIPPETS
    )
    items.extend(
        CompletionItem(
            label=symbol.name,
            kind=_SYMBOL_COMPLETION_KINDS[symbol.kind],
            detail=f"User-defined {symbol.kind.value}",
        )
        for symbol in SymbolTable.from_source(source)
    )
    return items


def hover(source: SourceText, position: Position) -> tuple[str, ...] | None:
    """Return markdown hover paragraphs for the modifier keyword under a position."""
    span = source.word_at(position)
    if span is None:
        return None
    return KEYWORD_DOCS.get(span.word)


def signature_help(source: SourceText, position: Position) -> SignatureHelp | None:
    """Return the signature of a known call whose head contains the position.

    Args:
        source: Document snapshot.
        position: Cursor position.

    Returns:
        Signature help, or ``None`` when no known call head is under the cursor.
    """
    line_text = source.line_text(position.line)
    for match in _CALL_HEAD_PATTERN.finditer(line_text):
        if match.start() <= position.column <= match.end():
            known = _KNOWN_SIGNATURES.get(match.group(1))
            if known is not None:
                return known
    return None


def find_definition(source: SourceText, position: Position) -> Location | None:
    """Locate the declaration of the word under a position.

    Args:
        source: Document snapshot.
        position: Cursor position.

    Returns:
        Location of the declared name, or ``None``.
    """
    span = source.word_at(position)
    if span is None:
        return None
    symbol = SymbolTable.from_source(source).resolve(span.word)
    if symbol is None:
        return None
    return Location(offset=symbol.name_offset, position=source.position_at(symbol.name_offset))


def outline(source: SourceText) -> list[Symbol]:
    return list(SymbolTable.from_source(source))
