# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for block resolution and declaration scanning."""

from spice_lang.blocks import find_block_end
from spice_lang.symbols import SymbolKind, SymbolTable, scan_symbols
from spice_lang.text import SourceText


def test_scanner_finds_class_and_method_as_flat_symbols() -> None:
    text = (
        "final class Dog extends Animal implements Walkable "
        "{ def bark() -> None { pass; } }"
    )
    source = SourceText(text)

    symbols = scan_symbols(source)

    assert [(s.name, s.kind) for s in symbols] == [
        ("Dog", SymbolKind.CLASS),
        ("bark", SymbolKind.FUNCTION),
    ]
    dog, bark = symbols
    assert dog.range == (0, len(text))
    assert bark.declaration_offset == text.index("def")
    assert bark.range == (text.index("def"), text.rindex("}") - 1)
    assert text[bark.range_end - 1] == "}"


def test_scanner_returns_one_symbol_per_balanced_declaration() -> None:
    text = "\n".join(
        [
            "interface Drawable {",
            "    def draw() -> None;",
            "}",
            "abstract class Shape {",
            "    abstract def area() -> float;",
            "}",
            "static def helper(a, b) -> int {",
            "    if a {",
            "        return b;",
            "    }",
            "    return a;",
            "}",
        ]
    )
    source = SourceText(text)

    symbols = scan_symbols(source)
    names = [s.name for s in symbols]

    assert names == ["Drawable", "draw", "Shape", "area", "helper"]
    helper = symbols[-1]
    assert helper.range_end == len(text)
    shape = symbols[2]
    assert text[shape.range_start : shape.range_end].endswith("-> float;\n}")


def test_symbol_ranges_contain_their_declaration_offset() -> None:
    source = SourceText("class A {\n}\ndef f() {\n}\ninterface I;\n")

    for symbol in scan_symbols(source):
        assert symbol.range_start <= symbol.declaration_offset <= symbol.range_end
        assert source.text[symbol.name_offset :].startswith(symbol.name)


def test_bodiless_declaration_extends_to_later_block_or_end() -> None:
    source = SourceText("interface Walkable;\n")

    (symbol,) = scan_symbols(source)

    assert symbol.kind is SymbolKind.INTERFACE
    assert symbol.range_end == source.end_offset


def test_keywords_inside_identifiers_are_not_declarations() -> None:
    source = SourceText("subclass Foo;\nredef bar();\nmyinterface Baz;\n")

    assert scan_symbols(source) == []


def test_redeclared_names_are_kept() -> None:
    source = SourceText("def f() { }\ndef f() { }\n")

    assert [s.name for s in scan_symbols(source)] == ["f", "f"]


def test_block_end_is_idempotent_and_skips_leading_close_brace() -> None:
    source = SourceText("} def f() {\n  { x; }\n}\ntrailing;")

    first = find_block_end(source, 0)
    second = find_block_end(source, 0)

    assert first == second
    assert source.text[:first].endswith("x; }\n}")


def test_block_end_degrades_to_document_end_when_unclosed() -> None:
    source = SourceText("class Broken {\n  def f() {\n")

    assert find_block_end(source, 0) == source.end_offset
    assert find_block_end(source, 10_000) == source.end_offset
    assert find_block_end(SourceText(""), 0) == 0


def test_block_end_starts_mid_line() -> None:
    source = SourceText("{ a; } def g() { b; }")

    assert find_block_end(source, source.text.index("def")) == len(source.text)


def test_symbol_table_resolves_class_before_interface_before_function() -> None:
    source = SourceText(
        "def Shape() { }\ninterface Shape { }\nclass Shape { }\ndef area() { }\n"
    )
    table = SymbolTable.from_source(source)

    assert len(table) == 4
    assert table.resolve("Shape").kind is SymbolKind.CLASS
    assert table.resolve("area").kind is SymbolKind.FUNCTION
    assert table.resolve("missing") is None
    assert [s.name for s in table.of_kind(SymbolKind.INTERFACE)] == ["Shape"]
