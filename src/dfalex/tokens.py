"""
Token Types
===========

Closed set of token categories produced by the scanner, and the immutable
Token record.

Rendering
---------
``str(token)`` gives the classic ``<KIND, lexeme>`` form:

    <KEYWORD, int>
    <IDENTIFIER, x>
    <OPERATOR, =>
    <NUMBER, 10>
    <DELIMITER, ;>

``token.render(terminator_label=True)`` reproduces the older output style
in which the statement terminator was printed as ``<KEYWORD, TERMINATOR>``.
"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    """Lexical categories a classified lexeme can belong to."""

    KEYWORD = auto()        # reserved words, type names, const
    IDENTIFIER = auto()     # [a-z_][a-z0-9_]*
    NUMBER = auto()         # integer literal
    DECIMAL = auto()        # \d+\.\d+
    BOOL_LITERAL = auto()   # true / false
    STRING = auto()         # "..."
    CHAR_LITERAL = auto()   # 'c'
    OPERATOR = auto()       # + - * / % = **
    DELIMITER = auto()      # ; { } ( ) ,
    INVALID = auto()        # unmatched text, also reported in the error log


# Kinds whose lexemes are recorded in the symbol table as literals, with the
# type name they are stored under.
LITERAL_TYPES: dict[TokenKind, str] = {
    TokenKind.NUMBER: "int",
    TokenKind.DECIMAL: "float",
    TokenKind.STRING: "string",
    TokenKind.CHAR_LITERAL: "char",
    TokenKind.BOOL_LITERAL: "bool",
}


@dataclass(frozen=True)
class Token:
    """
    A single classified lexeme.

    Attributes:
        kind: The TokenKind classification
        lexeme: Raw source text of the token (never normalized)
        line: Line on which the token starts (1-indexed)
    """
    kind: TokenKind
    lexeme: str
    line: int = 1

    def __str__(self) -> str:
        return f"<{self.kind.name}, {self.lexeme}>"

    def render(self, terminator_label: bool = False) -> str:
        """Render the token, optionally using the TERMINATOR label for ';'."""
        if terminator_label and self.kind is TokenKind.DELIMITER and self.lexeme == ";":
            return "<KEYWORD, TERMINATOR>"
        return str(self)
