"""
Automaton Library
=================

One automaton per lexical category, built once and then only read.

Categories
----------
| Name                | Language                                  |
|---------------------|-------------------------------------------|
| identifier          | [a-z_][a-z0-9_]*  (no uppercase)          |
| <keyword>           | exactly the keyword spelling              |
| operator            | + - * / % =  and  **                      |
| integer             | [0-9]+                                    |
| decimal             | [0-9]+ . [0-9]+                           |
| string_literal      | " (any but ") "                           |
| character_literal   | ' (any but ') '                           |
| delimiter           | ; { } ( ) ,                               |
| single_line_comment | // (any but newline)*                     |
| multi_line_comment  | /* ... */                                 |

Scan Priority
-------------
The scanner tries the rules returned by ``AutomatonLibrary.priority()`` in
order and takes the first one that matches:

    character_literal → string_literal → multi_line_comment →
    single_line_comment → delimiter → operator → keywords →
    identifier → decimal → integer

Keyword automata are tried before the identifier automaton and each one is
matched independently, so ``integer`` scans as the keyword ``int`` followed
by the identifier ``eger``.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator, Optional

from dfalex.automaton import ALPHABET, Automaton, AutomatonBuilder, keyword_automaton
from dfalex.errors import UnknownAutomatonError
from dfalex.tokens import TokenKind

logger = logging.getLogger(__name__)


# =============================================================================
# Reference Sets
# =============================================================================

DATA_TYPES = ("int", "float", "char", "bool", "string")

CONST_KEYWORD = "const"

CONTROL_KEYWORDS = (
    "if", "else", "for", "while", "do",
    "switch", "case", "default",
    "break", "continue", "return",
)

BOOL_LITERALS = ("true", "false")

KEYWORDS = DATA_TYPES + (CONST_KEYWORD,) + CONTROL_KEYWORDS

SINGLE_CHAR_OPERATORS = "+-*/%="

OPERATORS = frozenset(SINGLE_CHAR_OPERATORS) | {"**"}

DELIMITERS = frozenset(";{}(),")

# Automaton names for the fixed categories
IDENTIFIER = "identifier"
OPERATOR = "operator"
INTEGER = "integer"
DECIMAL = "decimal"
STRING_LITERAL = "string_literal"
CHARACTER_LITERAL = "character_literal"
DELIMITER = "delimiter"
SINGLE_LINE_COMMENT = "single_line_comment"
MULTI_LINE_COMMENT = "multi_line_comment"


# =============================================================================
# Category Builders
# =============================================================================

def build_identifier() -> Automaton:
    builder = AutomatonBuilder(IDENTIFIER, "q0", {"q1"})
    builder.add_transition("q0", "_", "q1")
    builder.add_range("q0", "a", "z", "q1")
    builder.add_range("q1", "a", "z", "q1")
    builder.add_range("q1", "0", "9", "q1")
    builder.add_transition("q1", "_", "q1")
    return builder.build()


def build_operator() -> Automaton:
    """Single-character operators in q1; '**' continues to q2."""
    builder = AutomatonBuilder(OPERATOR, "q0", {"q1", "q2"})
    builder.add_transitions("q0", SINGLE_CHAR_OPERATORS, "q1")
    builder.add_transition("q1", "*", "q2")
    return builder.build()


def build_integer() -> Automaton:
    builder = AutomatonBuilder(INTEGER, "q0", {"q1"})
    builder.add_range("q0", "0", "9", "q1")
    builder.add_range("q1", "0", "9", "q1")
    return builder.build()


def build_decimal() -> Automaton:
    builder = AutomatonBuilder(DECIMAL, "q0", {"q3"})
    builder.add_range("q0", "0", "9", "q1")
    builder.add_range("q1", "0", "9", "q1")
    builder.add_transition("q1", ".", "q2")
    builder.add_range("q2", "0", "9", "q3")
    builder.add_range("q3", "0", "9", "q3")
    return builder.build()


def build_string_literal() -> Automaton:
    builder = AutomatonBuilder(STRING_LITERAL, "q0", {"q2"})
    builder.add_transition("q0", '"', "q1")
    builder.add_transitions("q1", (c for c in ALPHABET if c != '"'), "q1")
    builder.add_transition("q1", '"', "q2")
    return builder.build()


def build_character_literal() -> Automaton:
    builder = AutomatonBuilder(CHARACTER_LITERAL, "q0", {"q3"})
    builder.add_transition("q0", "'", "q1")
    builder.add_transitions("q1", (c for c in ALPHABET if c != "'"), "q2")
    builder.add_transition("q2", "'", "q3")
    return builder.build()


def build_delimiter() -> Automaton:
    builder = AutomatonBuilder(DELIMITER, "q0", {"q1"})
    builder.add_transitions("q0", sorted(DELIMITERS), "q1")
    return builder.build()


def build_single_line_comment() -> Automaton:
    builder = AutomatonBuilder(SINGLE_LINE_COMMENT, "q0", {"q2"})
    builder.add_transition("q0", "/", "q1")
    builder.add_transition("q1", "/", "q2")
    builder.add_transitions("q2", (c for c in ALPHABET if c != "\n"), "q2")
    return builder.build()


def build_multi_line_comment() -> Automaton:
    """
    '/*' then body then '*/'.

    q2 is inside the body and q3 means "just saw '*'". From q3 a '/' closes
    the comment, another '*' stays in q3 and anything else returns to q2.
    """
    builder = AutomatonBuilder(MULTI_LINE_COMMENT, "q0", {"q4"})
    builder.add_transition("q0", "/", "q1")
    builder.add_transition("q1", "*", "q2")
    for char in ALPHABET:
        builder.add_transition("q2", char, "q3" if char == "*" else "q2")
        if char == "/":
            builder.add_transition("q3", char, "q4")
        elif char == "*":
            builder.add_transition("q3", char, "q3")
        else:
            builder.add_transition("q3", char, "q2")
    return builder.build()


# =============================================================================
# Library
# =============================================================================

@dataclass(frozen=True)
class ScanRule:
    """
    One entry in the scan priority order.

    Attributes:
        name: Automaton name
        automaton: The automaton to simulate
        kind: TokenKind to emit, or None for spans consumed silently
        exact: Lexeme that a match must equal to count (keywords only)
    """
    name: str
    automaton: Automaton
    kind: Optional[TokenKind]
    exact: Optional[str] = None

    def match(self, text: str, offset: int) -> Optional[str]:
        lexeme = self.automaton.simulate(text, offset)
        if lexeme is None:
            return None
        if self.exact is not None and lexeme != self.exact:
            return None
        return lexeme


class AutomatonLibrary:
    """
    The complete set of automata used by the scanner.

    The library is immutable after construction. Use default_library() to
    share a single instance; construct one directly only to substitute a
    custom automaton for one of the fixed categories.

    Example:
        library = AutomatonLibrary()
        identifier = library.get("identifier")
        print(identifier.accepting_states)
    """

    def __init__(
        self,
        keywords: tuple[str, ...] = KEYWORDS,
        bool_literals: tuple[str, ...] = BOOL_LITERALS,
        overrides: Optional[dict[str, Automaton]] = None,
    ):
        """
        Build every automaton.

        Args:
            keywords: Reserved words, each getting its own automaton
            bool_literals: Words classified as BOOL_LITERAL
            overrides: Replacement automata keyed by fixed category name
        """
        overrides = overrides or {}
        builders = {
            CHARACTER_LITERAL: build_character_literal,
            STRING_LITERAL: build_string_literal,
            MULTI_LINE_COMMENT: build_multi_line_comment,
            SINGLE_LINE_COMMENT: build_single_line_comment,
            DELIMITER: build_delimiter,
            OPERATOR: build_operator,
            IDENTIFIER: build_identifier,
            DECIMAL: build_decimal,
            INTEGER: build_integer,
        }
        for name in overrides:
            if name not in builders:
                raise UnknownAutomatonError(name, list(builders))

        self._fixed: dict[str, Automaton] = {
            name: overrides.get(name) or build()
            for name, build in builders.items()
        }
        self._keywords: dict[str, Automaton] = {
            word: keyword_automaton(word) for word in keywords
        }
        self._bool_literals: dict[str, Automaton] = {
            word: keyword_automaton(word) for word in bool_literals
        }
        self._rules = self._build_rules()

        logger.debug(
            f"Automaton library ready: {len(self._fixed)} categories, "
            f"{len(self._keywords)} keywords, {len(self._bool_literals)} bool literals"
        )

    def _build_rules(self) -> tuple[ScanRule, ...]:
        fixed = self._fixed
        rules = [
            ScanRule(CHARACTER_LITERAL, fixed[CHARACTER_LITERAL], TokenKind.CHAR_LITERAL),
            ScanRule(STRING_LITERAL, fixed[STRING_LITERAL], TokenKind.STRING),
            ScanRule(MULTI_LINE_COMMENT, fixed[MULTI_LINE_COMMENT], None),
            ScanRule(SINGLE_LINE_COMMENT, fixed[SINGLE_LINE_COMMENT], None),
            ScanRule(DELIMITER, fixed[DELIMITER], TokenKind.DELIMITER),
            ScanRule(OPERATOR, fixed[OPERATOR], TokenKind.OPERATOR),
        ]
        rules.extend(
            ScanRule(word, automaton, TokenKind.KEYWORD, exact=word)
            for word, automaton in self._keywords.items()
        )
        rules.extend(
            ScanRule(word, automaton, TokenKind.BOOL_LITERAL, exact=word)
            for word, automaton in self._bool_literals.items()
        )
        rules.extend([
            ScanRule(IDENTIFIER, fixed[IDENTIFIER], TokenKind.IDENTIFIER),
            ScanRule(DECIMAL, fixed[DECIMAL], TokenKind.DECIMAL),
            ScanRule(INTEGER, fixed[INTEGER], TokenKind.NUMBER),
        ])
        return tuple(rules)

    # =========================================================================
    # Accessors
    # =========================================================================

    def priority(self) -> tuple[ScanRule, ...]:
        """Scan rules in the order the scanner must try them."""
        return self._rules

    @property
    def keywords(self) -> dict[str, Automaton]:
        return dict(self._keywords)

    @property
    def bool_literals(self) -> dict[str, Automaton]:
        return dict(self._bool_literals)

    def names(self) -> list[str]:
        """All automaton names, in scan priority order."""
        return [rule.name for rule in self._rules]

    def get(self, name: str) -> Automaton:
        """
        Look up an automaton by name.

        Raises:
            UnknownAutomatonError: If no automaton has that name
        """
        for table in (self._fixed, self._keywords, self._bool_literals):
            if name in table:
                return table[name]
        raise UnknownAutomatonError(name, self.names())

    def __getitem__(self, name: str) -> Automaton:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._fixed or name in self._keywords or name in self._bool_literals

    def __iter__(self) -> Iterator[tuple[str, Automaton]]:
        for rule in self._rules:
            yield rule.name, rule.automaton

    def __len__(self) -> int:
        return len(self._rules)


@lru_cache(maxsize=1)
def default_library() -> AutomatonLibrary:
    """Return the shared library built from the default keyword set."""
    return AutomatonLibrary()
