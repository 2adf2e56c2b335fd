# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Static language tables for Spice sources."""

KEYWORDS: tuple[str, ...] = (
    "interface",
    "abstract",
    "final",
    "static",
    "extends",
    "implements",
    "def",
    "class",
    "if",
    "elif",
    "else",
    "for",
    "while",
    "return",
    "import",
    "from",
    "as",
    "with",
    "try",
    "except",
    "finally",
    "raise",
    "pass",
    "break",
    "continue",
    "True",
    "False",
    "None",
    "and",
    "or",
    "not",
    "in",
    "is",
    "lambda",
    "switch",
    "case",
    "default",
)

# Python built-ins that user code should not redefine.
BUILTIN_NAMES: tuple[str, ...] = (
    "abs",
    "aiter",
    "all",
    "anext",
    "any",
    "ascii",
    "bin",
    "bool",
    "breakpoint",
    "bytearray",
    "bytes",
    "callable",
    "chr",
    "classmethod",
    "compile",
    "complex",
    "delattr",
    "dict",
    "dir",
    "divmod",
    "enumerate",
    "eval",
    "exec",
    "filter",
    "float",
    "format",
    "frozenset",
    "getattr",
    "globals",
    "hasattr",
    "hash",
    "help",
    "hex",
    "id",
    "input",
    "int",
    "isinstance",
    "issubclass",
    "iter",
    "len",
    "list",
    "locals",
    "map",
    "max",
    "memoryview",
    "min",
    "next",
    "object",
    "oct",
    "open",
    "ord",
    "pow",
    "print",
    "property",
    "range",
    "repr",
    "reversed",
    "round",
    "set",
    "setattr",
    "slice",
    "sorted",
    "staticmethod",
    "str",
    "sum",
    "super",
    "tuple",
    "type",
    "vars",
    "zip",
    "__import__",
)

RESERVED_NAMES: frozenset[str] = frozenset(BUILTIN_NAMES)

# Line endings that do not need a trailing ``;``.
STATEMENT_TERMINATORS: tuple[str, ...] = (";", ":", "{", "}")

SOURCE_SUFFIX = ".spc"
COMPILED_SUFFIX = ".py"

KEYWORD_DOCS: dict[str, tuple[str, ...]] = {
    "interface": (
        "**interface** keyword",
        "Declares an interface (Protocol in Python) that defines method signatures",
        "```spice\ninterface Drawable {\n    def draw() -> None;\n}\n```",
    ),
    "abstract": (
        "**abstract** modifier",
        "Marks a class or method as abstract (must be overridden)",
        "```spice\nabstract class Shape {\n    abstract def area() -> float;\n}\n```",
    ),
    "final": (
        "**final** modifier",
        "Prevents a class from being inherited or a method from being overridden",
        "```spice\nfinal class Dog extends Animal {\n    final def bark() -> None { ... }\n}\n```",
    ),
    "static": (
        "**static** modifier",
        "Declares a static method that belongs to the class rather than instances",
        "```spice\nstatic def utility_function() -> None {\n    pass;\n}\n```",
    ),
    "extends": (
        "**extends** keyword",
        "Specifies class inheritance",
        "```spice\nclass Dog extends Animal { ... }\n```",
    ),
    "implements": (
        "**implements** keyword",
        "Specifies that a class implements one or more interfaces",
        "```spice\nclass Circle extends Shape implements Drawable { ... }\n```",
    ),
}

# (label, detail, snippet body, documentation); bodies use LSP snippet syntax.
SNIPPETS: tuple[tuple[str, str, str, str | None], ...] = (
    (
        "interface",
        "Interface declaration",
        "interface ${1:Name} {\n\tdef ${2:method}(${3:params}) -> ${4:ReturnType};\n}",
        "Create a new interface",
    ),
    (
        "abstract class",
        "Abstract class declaration",
        "abstract class ${1:Name} {\n\tabstract def ${2:method}() -> ${3:ReturnType};\n"
        "\t\n\tdef ${4:concrete_method}() -> None {\n\t\t${5:pass};\n\t}\n}",
        None,
    ),
    (
        "final class",
        "Final class declaration",
        "final class ${1:Name} {\n\tdef __init__(self${2:, params}) -> None {\n"
        "\t\t${3:pass};\n\t}\n}",
        None,
    ),
    (
        "static def",
        "Static method declaration",
        "static def ${1:method_name}(${2:params}) -> ${3:ReturnType} {\n\t${4:pass};\n}",
        None,
    ),
)
