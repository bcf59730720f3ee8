"""
dfalex Error Hierarchy and Error Log
====================================

This module defines two separate things:

1. An exception hierarchy for *programming* errors made while building or
   querying automata. These are raised eagerly because they indicate a
   broken automaton definition, not bad user input.

2. The scan-time error log. Malformed source text never raises: every
   diagnostic is appended to an ErrorLog and the scan carries on to the end
   of the input.

Exception Hierarchy
-------------------
DfaLexError (base)
├── AutomatonDefinitionError - nondeterministic or malformed automaton
└── UnknownAutomatonError - lookup of an automaton that does not exist

Diagnostic Format
-----------------
Each recorded diagnostic renders as:

    Error at line 3: Invalid identifier 'Count'
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================

class DfaLexError(Exception):
    """
    Base exception for all dfalex errors.

    Scanning itself never raises a DfaLexError; these exceptions only
    signal misuse of the automaton construction and lookup APIs.
    """
    pass


class AutomatonDefinitionError(DfaLexError):
    """
    Invalid automaton definition.

    Raised when a transition would make an automaton nondeterministic
    (a second, different target for the same state and character) or
    when a transition label is not a single character.
    """

    def __init__(self, automaton: str, message: str):
        self.automaton = automaton
        super().__init__(f"automaton '{automaton}': {message}")


class UnknownAutomatonError(DfaLexError, KeyError):
    """Lookup of an automaton name that the library does not define."""

    def __init__(self, name: str, known: Optional[list[str]] = None):
        self.name = name
        self.known = known or []
        message = f"unknown automaton '{name}'"
        if self.known:
            message += f" (known: {', '.join(self.known)})"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError.__str__ would quote the whole message
        return self.args[0]


# =============================================================================
# Scan-Time Diagnostics
# =============================================================================

class ErrorKind(Enum):
    """Categories of recoverable scan errors."""

    UNRECOGNIZED_CHARACTER = auto()   # no automaton accepts, not a letter
    INVALID_IDENTIFIER = auto()       # letter-led run with a bad shape
    INVALID_OPERATOR = auto()         # operator match outside OPERATORS
    UNMATCHED_CLOSING_BRACE = auto()  # '}' with only global on the stack


@dataclass(frozen=True)
class ErrorRecord:
    """
    A single line-tagged diagnostic.

    Attributes:
        line: Line number that was current when the error was recorded
        message: Human-readable description
        kind: The ErrorKind classification
        lexeme: The offending source text, when there is one
    """
    line: int
    message: str
    kind: ErrorKind
    lexeme: Optional[str] = None

    def __str__(self) -> str:
        return f"Error at line {self.line}: {self.message}"


class ErrorLog:
    """
    Append-only collection of scan diagnostics.

    The scanner pushes its current line number into ``line`` before each
    call to add_error(), so records are tagged without the log needing to
    know anything about the cursor.

    Example:
        log = ErrorLog()
        log.line = 4
        log.add_error("Unmatched closing brace '}'", ErrorKind.UNMATCHED_CLOSING_BRACE)
        print(log.report())
    """

    HEADER = "Errors:"

    def __init__(self, max_errors: Optional[int] = None):
        """
        Initialize the log.

        Args:
            max_errors: Stop storing records after this many. Further
                errors are still counted in ``dropped``. None means no cap.
        """
        self.line = 1
        self.max_errors = max_errors
        self.dropped = 0
        self._records: list[ErrorRecord] = []

    def add_error(
        self,
        message: str,
        kind: ErrorKind,
        lexeme: Optional[str] = None,
    ) -> Optional[ErrorRecord]:
        """
        Record a diagnostic at the current line.

        Returns:
            The stored ErrorRecord, or None if the cap was reached
        """
        if self.max_errors is not None and len(self._records) >= self.max_errors:
            self.dropped += 1
            logger.debug(f"Error cap reached, dropping: {message}")
            return None

        record = ErrorRecord(self.line, message, kind, lexeme)
        self._records.append(record)
        logger.debug(str(record))
        return record

    def has_errors(self) -> bool:
        """Return True if any errors have been recorded."""
        return len(self._records) > 0 or self.dropped > 0

    def error_count(self) -> int:
        """Return the number of recorded errors, including dropped ones."""
        return len(self._records) + self.dropped

    @property
    def records(self) -> tuple[ErrorRecord, ...]:
        return tuple(self._records)

    def __iter__(self) -> Iterator[ErrorRecord]:
        return iter(tuple(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def report(self) -> str:
        """Format the header followed by one line per record."""
        lines = [self.HEADER]
        lines.extend(str(record) for record in self._records)
        if self.dropped:
            lines.append(f"... {self.dropped} more error(s) not shown")
        return "\n".join(lines)
