# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Brace-depth block boundary resolution."""

from spice_lang.text import SourceText


def find_block_end(source: SourceText, start_offset: int) -> int:
    """Find the end of the first ``{ ... }`` block at or after an offset.

    Braces are counted without regard to strings or comments. A ``}`` seen
    before the block opens is ignored.

    Args:
        source: Document snapshot.
        start_offset: Offset to start scanning from; clamped into the text.

    Returns:
        Offset just after the matching ``}``, or ``source.end_offset`` when
        the block never opens or never closes.
    """
    text = source.text
    depth = 0
    opened = False
    for index in range(source.clamp(start_offset), len(text)):
        char = text[index]
        if char == "{":
            depth += 1
            opened = True
        elif char == "}" and opened:
            depth -= 1
            if depth == 0:
                return index + 1
    return source.end_offset
