"""
Scanner Engine
==============

Drives a cursor over the source text, asks the automaton library for the
first rule that matches at each position, turns the match into a Token and
applies the token's side effects to the per-scan context.

Scan Loop
---------
At each cursor position:

1. A newline bumps the line counter and is skipped.
2. Other whitespace is skipped.
3. Rules are tried in library priority order; the first match wins.
   Comment matches are skipped (embedded newlines still count as lines).
4. If nothing matches, a letter-led run of letters, digits and
   underscores is reported as one invalid identifier; any other character
   is reported on its own. Either way the span comes out as an INVALID
   token and scanning continues.

Nothing in the loop raises for bad input. Diagnostics go into the
ErrorLog and come back in ScanResult.errors.

Example Usage
-------------
>>> from dfalex.scanner import scan
>>> result = scan("int x = 10;")
>>> [str(token) for token in result.tokens]
['<KEYWORD, int>', '<IDENTIFIER, x>', '<OPERATOR, =>', '<NUMBER, 10>', '<DELIMITER, ;>']
>>> result.symbols["x"].declared_type
'int'
>>> tokens, symbols, errors = result
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from dfalex.errors import ErrorKind, ErrorLog, ErrorRecord
from dfalex.library import CONST_KEYWORD, AutomatonLibrary, default_library
from dfalex.symbols import (
    UNKNOWN_TYPE,
    DeclarationState,
    ScopeStack,
    SymbolCategory,
    SymbolEntry,
    SymbolTable,
    decimal_value,
    is_data_type,
    is_operator,
    is_valid_identifier,
)
from dfalex.tokens import LITERAL_TYPES, Token, TokenKind

logger = logging.getLogger(__name__)


# =============================================================================
# Configuration and Results
# =============================================================================

@dataclass
class ScannerOptions:
    """
    Scanner configuration options.

    Attributes:
        start_line: Line number of the first line of input
        max_errors: Stop storing error records after this many (None = no cap).
            The scan always runs to the end regardless.
        max_iterations: Stop the scan loop after this many cursor steps
            (None = no limit). The result is marked truncated.
        record_literals: Add literal tokens to the symbol table
    """
    start_line: int = 1
    max_errors: Optional[int] = None
    max_iterations: Optional[int] = None
    record_literals: bool = True


@dataclass(frozen=True)
class ScanResult:
    """
    Everything a scan produces.

    Unpacks as ``tokens, symbols, errors`` for callers that only want the
    three core outputs.

    Attributes:
        tokens: Tokens in input order
        symbols: Final symbol table snapshot, keyed by name
        errors: Error records in the order they were recorded
        lines: Line counter value at the end of the scan
        scope_depth: Scope stack depth at the end of the scan (1 = global)
        skipped: Characters consumed as whitespace or comments
        dropped_errors: Errors counted but not stored because of max_errors
        truncated: True if max_iterations stopped the scan early
    """
    tokens: tuple[Token, ...]
    symbols: dict[str, SymbolEntry]
    errors: tuple[ErrorRecord, ...]
    lines: int = 1
    scope_depth: int = 1
    skipped: int = 0
    dropped_errors: int = 0
    truncated: bool = False

    def __iter__(self):
        yield self.tokens
        yield self.symbols
        yield self.errors

    @property
    def has_errors(self) -> bool:
        return bool(self.errors) or self.dropped_errors > 0


class ScanContext:
    """
    Mutable state owned by exactly one in-flight scan.

    Attributes:
        text: The source being scanned
        pos: Cursor offset into text
        line: Current line number
        scopes: Scope stack
        declaration: Pending declaration state
        symbols: Symbol table being built
        errors: Error log being built
    """

    def __init__(self, text: str, options: ScannerOptions):
        self.text = text
        self.pos = 0
        self.line = options.start_line
        self.scopes = ScopeStack()
        self.declaration = DeclarationState()
        self.symbols = SymbolTable()
        self.errors = ErrorLog(options.max_errors)
        self.skipped = 0
        self.truncated = False

    def consume(self, lexeme: str) -> None:
        """Advance past ``lexeme``, counting any newlines inside it."""
        self.pos += len(lexeme)
        self.line += lexeme.count("\n")

    def error(self, message: str, kind: ErrorKind, lexeme: Optional[str] = None, line: Optional[int] = None) -> None:
        self.errors.line = self.line if line is None else line
        self.errors.add_error(message, kind, lexeme)

    def result(self, tokens: tuple[Token, ...]) -> ScanResult:
        return ScanResult(
            tokens=tokens,
            symbols=self.symbols.snapshot(),
            errors=self.errors.records,
            lines=self.line,
            scope_depth=self.scopes.depth,
            skipped=self.skipped,
            dropped_errors=self.errors.dropped,
            truncated=self.truncated,
        )


# =============================================================================
# Scanner
# =============================================================================

class Scanner:
    """
    DFA-driven scanner.

    A Scanner holds only read-only configuration (the automaton library and
    options), so one instance can run any number of scans. Each scan gets
    its own ScanContext.

    Usage:
        scanner = Scanner()
        result = scanner.scan(source)
        for token in result.tokens:
            print(token)
    """

    def __init__(
        self,
        library: Optional[AutomatonLibrary] = None,
        options: Optional[ScannerOptions] = None,
    ):
        """
        Initialize the scanner.

        Args:
            library: Automata to scan with (shared default if None)
            options: Scanner configuration (defaults if None)
        """
        self.library = library or default_library()
        self.options = options or ScannerOptions()
        self._rules = self.library.priority()
        self._handlers: dict[TokenKind, Callable[[ScanContext, Token], None]] = {
            TokenKind.KEYWORD: self._handle_keyword,
            TokenKind.IDENTIFIER: self._handle_identifier,
            TokenKind.NUMBER: self._handle_literal,
            TokenKind.DECIMAL: self._handle_literal,
            TokenKind.BOOL_LITERAL: self._handle_literal,
            TokenKind.STRING: self._handle_literal,
            TokenKind.CHAR_LITERAL: self._handle_literal,
            TokenKind.OPERATOR: self._handle_operator,
            TokenKind.DELIMITER: self._handle_delimiter,
        }

    def scan(self, text: str) -> ScanResult:
        """
        Scan a complete source string.

        Returns:
            ScanResult with tokens, the final symbol table and all errors
        """
        context = ScanContext(text, self.options)
        tokens = tuple(self._run(context))
        logger.debug(
            f"Scanned {len(text)} chars: {len(tokens)} tokens, "
            f"{len(context.symbols)} symbols, {context.errors.error_count()} errors"
        )
        return context.result(tokens)

    def iter_tokens(self, text: str) -> Iterator[Token]:
        """Yield tokens as they are produced, discarding the other outputs."""
        yield from self._run(ScanContext(text, self.options))

    # =========================================================================
    # Scan Loop
    # =========================================================================

    def _run(self, context: ScanContext) -> Iterator[Token]:
        text = context.text
        end = len(text)
        limit = self.options.max_iterations
        steps = 0

        while context.pos < end:
            if limit is not None and steps >= limit:
                logger.warning(
                    f"Iteration limit {limit} reached at offset {context.pos} "
                    f"(line {context.line}); scan truncated"
                )
                context.truncated = True
                break
            steps += 1

            char = text[context.pos]

            if char == "\n":
                context.line += 1
                context.pos += 1
                context.skipped += 1
                continue

            if char.isspace():
                context.pos += 1
                context.skipped += 1
                continue

            token = self._scan_token(context)
            if token is not None:
                handler = self._handlers.get(token.kind)
                if handler is not None:
                    handler(context, token)
                yield token

    def _scan_token(self, context: ScanContext) -> Optional[Token]:
        """
        Classify the text at the cursor and advance past it.

        Returns:
            The token (INVALID for unmatched text), or None for a comment
        """
        start_line = context.line

        for rule in self._rules:
            lexeme = rule.match(context.text, context.pos)
            if lexeme is None:
                continue

            if rule.kind is None:
                logger.debug(f"Line {start_line}: skipped {rule.name} ({len(lexeme)} chars)")
                context.consume(lexeme)
                context.skipped += len(lexeme)
                return None

            if rule.kind is TokenKind.IDENTIFIER and not is_valid_identifier(lexeme):
                return self._reject_identifier(context, lexeme)

            context.consume(lexeme)
            logger.debug(f"Line {start_line}: {rule.name} matched {lexeme!r}")
            return Token(rule.kind, lexeme, start_line)

        return self._recover(context)

    def _recover(self, context: ScanContext) -> Token:
        """Report the unmatched text at the cursor and step past it."""
        text = context.text
        char = text[context.pos]

        if char.isalpha():
            end = context.pos
            while end < len(text) and (text[end].isalnum() or text[end] == "_"):
                end += 1
            return self._reject_identifier(context, text[context.pos:end])

        token = Token(TokenKind.INVALID, char, context.line)
        context.error(
            f"Unrecognized character '{char}'",
            ErrorKind.UNRECOGNIZED_CHARACTER,
            char,
        )
        context.consume(char)
        return token

    def _reject_identifier(self, context: ScanContext, lexeme: str) -> Token:
        token = Token(TokenKind.INVALID, lexeme, context.line)
        context.error(
            f"Invalid identifier '{lexeme}'",
            ErrorKind.INVALID_IDENTIFIER,
            lexeme,
        )
        if context.declaration.is_pending():
            logger.debug(f"Line {token.line}: pending declaration dropped at '{lexeme}'")
            context.declaration.clear()
        context.consume(lexeme)
        return token

    # =========================================================================
    # Token Handlers
    # =========================================================================

    def _handle_keyword(self, context: ScanContext, token: Token) -> None:
        if is_data_type(token.lexeme):
            context.declaration.declare_type(token.lexeme)
        elif token.lexeme == CONST_KEYWORD:
            context.declaration.declare_const()

    def _handle_identifier(self, context: ScanContext, token: Token) -> None:
        declaration = context.declaration
        name = token.lexeme

        if declaration.pending_type is not None:
            category = SymbolCategory.CONSTANT if declaration.pending_const else SymbolCategory.VARIABLE
            context.symbols.add(
                name,
                declaration.pending_type,
                context.scopes.current,
                category,
                token.line,
                is_constant=declaration.pending_const,
            )
            declaration.clear()
        elif name not in context.symbols:
            context.symbols.add(
                name,
                UNKNOWN_TYPE,
                context.scopes.current,
                SymbolCategory.IDENTIFIER,
                token.line,
            )

    def _handle_literal(self, context: ScanContext, token: Token) -> None:
        if not self.options.record_literals:
            return
        if token.kind is TokenKind.DECIMAL:
            value = decimal_value(token.lexeme)
        else:
            value = token.lexeme
        context.symbols.add(
            token.lexeme,
            LITERAL_TYPES[token.kind],
            context.scopes.current,
            SymbolCategory.LITERAL,
            token.line,
            value=value,
        )

    def _handle_operator(self, context: ScanContext, token: Token) -> None:
        if not is_operator(token.lexeme):
            context.error(
                f"Invalid operator '{token.lexeme}'",
                ErrorKind.INVALID_OPERATOR,
                token.lexeme,
                line=token.line,
            )

    def _handle_delimiter(self, context: ScanContext, token: Token) -> None:
        if token.lexeme == ";":
            context.declaration.clear()
        elif token.lexeme == "{":
            label = context.scopes.push()
            logger.debug(f"Line {token.line}: entered {label}")
        elif token.lexeme == "}":
            if context.scopes.pop() is None:
                context.error(
                    "Unmatched closing brace '}'",
                    ErrorKind.UNMATCHED_CLOSING_BRACE,
                    token.lexeme,
                    line=token.line,
                )


def scan(text: str, options: Optional[ScannerOptions] = None) -> ScanResult:
    """Scan ``text`` with the default automaton library."""
    return Scanner(options=options).scan(text)
