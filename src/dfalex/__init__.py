"""
dfalex - DFA-Based Lexical Scanner
==================================

This package scans source text for a small C-like language using one
deterministic finite automaton per lexical category. A scan produces
three things:

- the ordered sequence of classified tokens,
- a symbol table of declared names and literals, with their scope,
- a line-tagged error log. Bad input is reported, never raised.

Main Components
---------------
- **automaton**: generic DFA, declarative builder, maximal-munch simulation
- **library**: the per-category automata and their scan priority
- **scanner**: the scan loop, declaration tracking, scope handling
- **symbols**: symbol table, declaration state, scope stack
- **errors**: exception hierarchy and the scan error log
- **render**: text dumps of tokens, symbols, errors and automata

Quick Start
-----------
    >>> from dfalex import scan
    >>> tokens, symbols, errors = scan("float y = 2.5 ** 2;")
    >>> [str(t) for t in tokens][:4]
    ['<KEYWORD, float>', '<IDENTIFIER, y>', '<OPERATOR, =>', '<DECIMAL, 2.5>']
    >>> symbols["2.5"].value
    '2.50000'

Or use the command-line tool:
    $ dfalex program.src
    $ dfalex --dump-automata identifier program.src
"""

__version__ = "1.0.0"

from dfalex.automaton import Automaton, AutomatonBuilder, keyword_automaton, simulate
from dfalex.errors import (
    DfaLexError,
    AutomatonDefinitionError,
    UnknownAutomatonError,
    ErrorKind,
    ErrorRecord,
    ErrorLog,
)
from dfalex.library import AutomatonLibrary, default_library
from dfalex.scanner import Scanner, ScannerOptions, ScanResult, scan
from dfalex.symbols import (
    DeclarationState,
    ScopeStack,
    SymbolCategory,
    SymbolEntry,
    SymbolTable,
)
from dfalex.tokens import Token, TokenKind

__all__ = [
    "__version__",
    # Automata
    "Automaton",
    "AutomatonBuilder",
    "keyword_automaton",
    "simulate",
    "AutomatonLibrary",
    "default_library",
    # Scanning
    "Scanner",
    "ScannerOptions",
    "ScanResult",
    "scan",
    "Token",
    "TokenKind",
    # Bookkeeping
    "DeclarationState",
    "ScopeStack",
    "SymbolCategory",
    "SymbolEntry",
    "SymbolTable",
    # Errors
    "DfaLexError",
    "AutomatonDefinitionError",
    "UnknownAutomatonError",
    "ErrorKind",
    "ErrorRecord",
    "ErrorLog",
]
