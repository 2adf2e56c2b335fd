# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for the source text index."""

from spice_lang.text import Position, SourceText


def test_position_and_offset_round_trip_across_lines() -> None:
    source = SourceText("ab\ncde\n\nf")

    assert source.line_count == 4
    assert source.position_at(4) == Position(line=1, column=1)
    assert source.offset_at(Position(line=3, column=0)) == 8
    assert source.position_at(source.end_offset) == Position(line=3, column=1)


def test_offsets_and_positions_are_clamped() -> None:
    source = SourceText("ab\ncd")

    assert source.position_at(-5) == Position(line=0, column=0)
    assert source.position_at(99) == Position(line=1, column=2)
    assert source.offset_at(Position(line=0, column=40)) == 2
    assert source.offset_at(Position(line=7, column=0)) == source.end_offset


def test_line_text_excludes_newline() -> None:
    source = SourceText("first;\nsecond;\n")

    assert source.line_text(0) == "first;"
    assert source.line_text(1) == "second;"
    assert source.line_text(2) == ""
    assert source.line_text(3) == ""


def test_word_at_finds_identifier_touching_position() -> None:
    source = SourceText("x = Dog();")

    span = source.word_at(Position(line=0, column=5))
    assert span is not None
    assert span.word == "Dog"
    assert (span.start, span.end) == (4, 7)
    assert source.word_at(Position(line=0, column=7)).word == "Dog"
    assert source.word_at(Position(line=0, column=9)) is None
