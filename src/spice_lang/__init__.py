# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Public import surface for the Spice source analyzer."""

from spice_lang.blocks import find_block_end
from spice_lang.diagnostics import Diagnostic, DiagnosticStore, Severity, generate_diagnostics
from spice_lang.shadowing import Override, OverrideKind, detect_overrides
from spice_lang.symbols import Symbol, SymbolKind, SymbolTable, scan_symbols
from spice_lang.text import Position, SourceText

__all__ = [
    "Diagnostic",
    "DiagnosticStore",
    "Override",
    "OverrideKind",
    "Position",
    "Severity",
    "SourceText",
    "Symbol",
    "SymbolKind",
    "SymbolTable",
    "detect_overrides",
    "find_block_end",
    "generate_diagnostics",
    "scan_symbols",
]
