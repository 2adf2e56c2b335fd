# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Immutable source text with a line/column/offset index."""

import bisect
import re
from dataclasses import dataclass, field

_WORD_PATTERN = re.compile(r"\w+")


@dataclass(frozen=True, order=True)
class Position:
    """Represent a zero-based line/column position.

    Attributes:
        line: Line index (0-based).
        column: Column index within the line (0-based).
    """

    line: int
    column: int


@dataclass(frozen=True)
class WordSpan:
    """Represent the word found under a position."""

    start: int
    end: int
    word: str


@dataclass(frozen=True)
class SourceText:
    """Represent one immutable document snapshot.

    The line index is computed once on construction. Lines are split on
    ``\\n`` only; a trailing ``\\r`` stays part of its line.

    Attributes:
        text: Full document text.
    """

    text: str
    _line_starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        starts = [0]
        for index, char in enumerate(self.text):
            if char == "\n":
                starts.append(index + 1)
        object.__setattr__(self, "_line_starts", tuple(starts))

    @property
    def lines(self) -> list[str]:
        """Return document lines without their ``\\n`` separators."""
        return self.text.split("\n")

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    @property
    def end_offset(self) -> int:
        return len(self.text)

    @property
    def end_position(self) -> Position:
        return self.position_at(self.end_offset)

    def clamp(self, offset: int) -> int:
        return min(max(offset, 0), self.end_offset)

    def line_text(self, line: int) -> str:
        """Return the text of one line, or an empty string when out of range."""
        if line < 0 or line >= self.line_count:
            return ""
        start = self._line_starts[line]
        if line + 1 < self.line_count:
            return self.text[start : self._line_starts[line + 1] - 1]
        return self.text[start:]

    def position_at(self, offset: int) -> Position:
        """Convert an offset into a position.

        Args:
            offset: Character offset; clamped into the document.

        Returns:
            Matching zero-based position.
        """
        offset = self.clamp(offset)
        line = bisect.bisect_right(self._line_starts, offset) - 1
        return Position(line=line, column=offset - self._line_starts[line])

    def offset_at(self, position: Position) -> int:
        """Convert a position into an offset.

        Lines beyond the document map to its end, columns beyond a line map to
        the end of that line.

        Args:
            position: Zero-based position.

        Returns:
            Character offset within ``[0, end_offset]``.
        """
        if position.line < 0:
            return 0
        if position.line >= self.line_count:
            return self.end_offset
        column = min(max(position.column, 0), len(self.line_text(position.line)))
        return self._line_starts[position.line] + column

    def word_at(self, position: Position) -> WordSpan | None:
        """Return the identifier-like word touching a position.

        Args:
            position: Query position.

        Returns:
            Word span in document offsets, or ``None`` when no word touches
            the position.
        """
        if position.line < 0 or position.line >= self.line_count:
            return None
        line_text = self.line_text(position.line)
        line_start = self._line_starts[position.line]
        for match in _WORD_PATTERN.finditer(line_text):
            if match.start() <= position.column <= match.end():
                return WordSpan(
                    start=line_start + match.start(),
                    end=line_start + match.end(),
                    word=match.group(0),
                )
        return None
