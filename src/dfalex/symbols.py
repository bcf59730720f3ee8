"""
Symbol Table, Declaration State and Scope Stack
===============================================

Bookkeeping that the scanner threads through a scan:

- **SymbolTable**: name → SymbolEntry. Entries are keyed by name alone,
  so a later declaration of the same name replaces the earlier one even
  when it happens in a different scope.
- **DeclarationState**: the pending type keyword and const flag that make
  ``const int x`` record ``x`` as a typed declaration.
- **ScopeStack**: block nesting. ``global`` is always at the bottom and is
  never popped.

Symbol Table Dump
-----------------
    Symbol Table:
    Name            Type      Scope         Category    Line  Value       Const
    x               int       global        variable    1     -           no
    10              int       global        literal     1     10          no
"""

import logging
import re
from dataclasses import dataclass, field, replace
from decimal import ROUND_HALF_UP, Context, Decimal
from enum import Enum
from typing import Iterator, Optional

from dfalex.library import DATA_TYPES, DELIMITERS, OPERATORS

logger = logging.getLogger(__name__)


GLOBAL_SCOPE = "global"

UNKNOWN_TYPE = "unknown"

DECIMAL_PLACES = Decimal("0.00001")

IDENTIFIER_SHAPE = re.compile(r"[a-z_][a-z0-9_]*")


# =============================================================================
# Classification Helpers
# =============================================================================

def is_data_type(word: str) -> bool:
    return word in DATA_TYPES


def is_operator(symbol: str) -> bool:
    return symbol in OPERATORS


def is_delimiter(symbol: str) -> bool:
    return symbol in DELIMITERS


def is_valid_identifier(name: str) -> bool:
    """Return True if ``name`` is lowercase letters, digits and underscores, not digit-led."""
    return IDENTIFIER_SHAPE.fullmatch(name) is not None


def decimal_value(lexeme: str) -> str:
    """
    Render a decimal lexeme with exactly five fractional digits.

    Rounding is half-up, so ``"2.5"`` becomes ``"2.50000"`` and
    ``"0.123456"`` becomes ``"0.12346"``. Precision grows with the lexeme,
    so integer parts of any length keep every digit.
    """
    context = Context(prec=len(lexeme) + 5)
    return str(Decimal(lexeme).quantize(DECIMAL_PLACES, rounding=ROUND_HALF_UP, context=context))


# =============================================================================
# Symbol Table
# =============================================================================

class SymbolCategory(Enum):
    """What kind of name a symbol table entry describes."""

    LITERAL = "literal"
    VARIABLE = "variable"
    CONSTANT = "constant"
    IDENTIFIER = "identifier"

    def __str__(self) -> str:
        return self.value


@dataclass
class SymbolEntry:
    """
    Description of one name or literal seen during a scan.

    Attributes:
        name: Identifier name, or the literal lexeme for literals
        declared_type: Type keyword, literal type, or "unknown"
        scope: Label of the innermost scope when the entry was recorded
        category: SymbolCategory of the entry
        line: Line where the entry was recorded
        value: Stored value (literals only)
        is_constant: True if declared with const
    """
    name: str
    declared_type: str
    scope: str
    category: SymbolCategory
    line: int
    value: Optional[str] = None
    is_constant: bool = False

    ROW_FORMAT = "{:<15} {:<9} {:<13} {:<11} {:<5} {:<11} {}"
    COLUMNS = ("Name", "Type", "Scope", "Category", "Line", "Value", "Const")

    def format_row(self) -> str:
        return self.ROW_FORMAT.format(
            self.name,
            self.declared_type,
            self.scope,
            str(self.category),
            self.line,
            self.value if self.value is not None else "-",
            "yes" if self.is_constant else "no",
        )


class SymbolTable:
    """
    Mapping from name to SymbolEntry, in first-insertion order.

    add() always writes, replacing any earlier entry with the same name.
    """

    HEADER = "Symbol Table:"

    def __init__(self):
        self._entries: dict[str, SymbolEntry] = {}

    def add(
        self,
        name: str,
        declared_type: str,
        scope: str,
        category: SymbolCategory,
        line: int,
        value: Optional[str] = None,
        is_constant: bool = False,
    ) -> SymbolEntry:
        """Insert or overwrite the entry for ``name`` and return it."""
        entry = SymbolEntry(name, declared_type, scope, category, line, value, is_constant)
        if name in self._entries:
            logger.debug(f"Overwriting symbol '{name}' (was {self._entries[name].category})")
        self._entries[name] = entry
        return entry

    def lookup(self, name: str) -> Optional[SymbolEntry]:
        return self._entries.get(name)

    def snapshot(self) -> dict[str, SymbolEntry]:
        """Return an independent copy of the current entries."""
        return {name: replace(entry) for name, entry in self._entries.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SymbolEntry]:
        return iter(list(self._entries.values()))

    def report(self) -> str:
        """Format the header, a column heading and one row per entry."""
        lines = [
            self.HEADER,
            SymbolEntry.ROW_FORMAT.format(*SymbolEntry.COLUMNS),
        ]
        lines.extend(entry.format_row() for entry in self._entries.values())
        return "\n".join(lines)


# =============================================================================
# Declaration State
# =============================================================================

@dataclass
class DeclarationState:
    """
    Pending declaration context for the current statement.

    A type keyword sets ``pending_type`` and ``const`` sets
    ``pending_const``. The next identifier consumes both; a ';' clears
    both whether or not anything was declared.
    """
    pending_type: Optional[str] = None
    pending_const: bool = False

    def declare_type(self, type_name: str) -> None:
        self.pending_type = type_name

    def declare_const(self) -> None:
        self.pending_const = True

    def clear(self) -> None:
        self.pending_type = None
        self.pending_const = False

    def is_pending(self) -> bool:
        return self.pending_type is not None or self.pending_const


# =============================================================================
# Scope Stack
# =============================================================================

@dataclass
class ScopeStack:
    """
    LIFO stack of scope labels with ``global`` permanently at the bottom.

    Each push gets the label ``scope_<depth>_<serial>`` where depth is the
    new stack depth and serial counts every push made so far, so labels are
    unique within a scan.
    """
    _labels: list[str] = field(default_factory=lambda: [GLOBAL_SCOPE])
    _pushes: int = 0

    def push(self) -> str:
        self._pushes += 1
        label = f"scope_{len(self._labels) + 1}_{self._pushes}"
        self._labels.append(label)
        return label

    def pop(self) -> Optional[str]:
        """
        Pop the innermost scope.

        Returns:
            The popped label, or None if only ``global`` remains (the stack
            is left unchanged)
        """
        if len(self._labels) <= 1:
            return None
        return self._labels.pop()

    @property
    def current(self) -> str:
        return self._labels[-1]

    @property
    def depth(self) -> int:
        return len(self._labels)

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(self._labels)
