"""
Deterministic Finite Automata
=============================

This module provides the one generic automaton type used by every lexical
category, plus the maximal-munch simulation that the scanner runs against
each of them.

Construction is declarative and uses readable string labels ("q0", "q1",
...). ``AutomatonBuilder.build()`` compiles those labels into dense integer
indices so that simulation is a list index plus a dict lookup per
character.

Example Usage
-------------
>>> from dfalex.automaton import AutomatonBuilder
>>> builder = AutomatonBuilder("number", start="q0", accepting={"q1"})
>>> builder.add_range("q0", "0", "9", "q1")
>>> builder.add_range("q1", "0", "9", "q1")
>>> number = builder.build()
>>> number.simulate("123abc", 0)
'123'
>>> number.simulate("abc", 0) is None
True
"""

import logging
from typing import Iterable, Mapping, Optional

from dfalex.errors import AutomatonDefinitionError

logger = logging.getLogger(__name__)


# 7-bit characters used for "anything except ..." edges. DEL (127) is not
# part of the modeled alphabet.
ALPHABET = "".join(chr(code) for code in range(127))


# =============================================================================
# Automaton
# =============================================================================

class Automaton:
    """
    An immutable deterministic finite automaton.

    States are integer indices into a transition table; each row maps an
    input character to the index of the next state. The string
    labels are retained for the read-only accessors used by dump tools.

    Instances are created by AutomatonBuilder and are safe to share
    between scans and threads.
    """

    __slots__ = ("_name", "_labels", "_table", "_start", "_accepting")

    def __init__(
        self,
        name: str,
        labels: tuple[str, ...],
        table: tuple[Mapping[str, int], ...],
        start: int,
        accepting: frozenset[int],
    ):
        self._name = name
        self._labels = labels
        self._table = table
        self._start = start
        self._accepting = accepting

    def __repr__(self) -> str:
        return (
            f"Automaton({self._name!r}, states={len(self._labels)}, "
            f"accepting={sorted(self.accepting_states)})"
        )

    # =========================================================================
    # Read-only Accessors
    # =========================================================================

    @property
    def name(self) -> str:
        return self._name

    @property
    def start_state(self) -> str:
        """Label of the start state."""
        return self._labels[self._start]

    @property
    def accepting_states(self) -> frozenset[str]:
        """Labels of all accepting states."""
        return frozenset(self._labels[index] for index in self._accepting)

    @property
    def states(self) -> tuple[str, ...]:
        """All state labels, in the order they were first mentioned."""
        return self._labels

    @property
    def transitions(self) -> dict[tuple[str, str], str]:
        """
        The full transition mapping as ``(state, char) -> state`` labels.

        Returns a fresh dict; mutating it does not affect the automaton.
        """
        mapping = {}
        for index, row in enumerate(self._table):
            source = self._labels[index]
            for char, target in row.items():
                mapping[(source, char)] = self._labels[target]
        return mapping

    def next_state(self, state: str, char: str) -> Optional[str]:
        """Return the label reached from ``state`` on ``char``, or None."""
        try:
            index = self._labels.index(state)
        except ValueError:
            return None
        target = self._table[index].get(char)
        return None if target is None else self._labels[target]

    def is_accepting(self, state: str) -> bool:
        return state in self.accepting_states

    # =========================================================================
    # Simulation
    # =========================================================================

    def simulate(self, text: str, offset: int = 0) -> Optional[str]:
        """
        Find the longest prefix of ``text[offset:]`` this automaton accepts.

        The walk follows transitions until one is missing or the input ends.
        Every time an accepting state is entered the current prefix is
        remembered, so a later detour through non-accepting states does not
        discard an earlier accepted match. The empty prefix is never a match.

        Returns:
            The accepted lexeme, or None if no non-empty prefix is accepted
        """
        table = self._table
        accepting = self._accepting
        state = self._start
        last_accept = -1
        pos = offset
        end = len(text)

        while pos < end:
            target = table[state].get(text[pos])
            if target is None:
                break
            state = target
            pos += 1
            if state in accepting:
                last_accept = pos

        if last_accept < 0:
            return None
        return text[offset:last_accept]


def simulate(automaton: Automaton, text: str, offset: int = 0) -> Optional[str]:
    """Module-level alias for Automaton.simulate()."""
    return automaton.simulate(text, offset)


# =============================================================================
# Builder
# =============================================================================

class AutomatonBuilder:
    """
    Declarative construction of an Automaton from string-labelled states.

    States come into existence the first time they are mentioned, either as
    the start state, an accepting state, or an endpoint of a transition.
    Adding a second, different target for an existing (state, character)
    pair raises AutomatonDefinitionError.

    Usage:
        builder = AutomatonBuilder("operator", "q0", {"q1", "q2"})
        builder.add_transitions("q0", "+-*/%=", "q1")
        builder.add_transition("q1", "*", "q2")
        operator = builder.build()
    """

    def __init__(self, name: str, start: str, accepting: Iterable[str]):
        self.name = name
        self.start = start
        self.accepting = set(accepting)
        self._edges: dict[str, dict[str, str]] = {}
        self._order: dict[str, int] = {}
        self._mention(start)

    def _mention(self, state: str) -> None:
        if state not in self._order:
            self._order[state] = len(self._order)

    def add_transition(self, from_state: str, char: str, to_state: str) -> "AutomatonBuilder":
        """
        Add a single edge.

        Raises:
            AutomatonDefinitionError: If ``char`` is not exactly one
                character, or the edge conflicts with an existing one
        """
        if len(char) != 1:
            raise AutomatonDefinitionError(
                self.name, f"transition label must be one character, got {char!r}"
            )

        row = self._edges.setdefault(from_state, {})
        existing = row.get(char)
        if existing is not None and existing != to_state:
            raise AutomatonDefinitionError(
                self.name,
                f"nondeterministic transition from '{from_state}' on {char!r}: "
                f"'{existing}' and '{to_state}'",
            )

        self._mention(from_state)
        self._mention(to_state)
        row[char] = to_state
        return self

    def add_transitions(self, from_state: str, chars: Iterable[str], to_state: str) -> "AutomatonBuilder":
        """Add one edge per character in ``chars``, all to the same target."""
        for char in chars:
            self.add_transition(from_state, char, to_state)
        return self

    def add_range(self, from_state: str, first: str, last: str, to_state: str) -> "AutomatonBuilder":
        """Add edges for every character from ``first`` to ``last`` inclusive."""
        chars = (chr(code) for code in range(ord(first), ord(last) + 1))
        return self.add_transitions(from_state, chars, to_state)

    def build(self) -> Automaton:
        """Compile the labelled definition into an integer-indexed Automaton."""
        for state in sorted(self.accepting):
            self._mention(state)

        labels = tuple(self._order)
        table = tuple(
            {
                char: self._order[target]
                for char, target in self._edges.get(label, {}).items()
            }
            for label in labels
        )
        accepting = frozenset(self._order[state] for state in self.accepting)

        logger.debug(
            f"Built automaton '{self.name}': {len(labels)} states, "
            f"{sum(len(row) for row in table)} transitions"
        )
        return Automaton(self.name, labels, table, self._order[self.start], accepting)


def keyword_automaton(word: str, name: Optional[str] = None) -> Automaton:
    """
    Build a chain automaton that accepts exactly ``word``.

    States are q0..qN where N is the length of the word, and only qN
    accepts.
    """
    builder = AutomatonBuilder(name or word, "q0", {f"q{len(word)}"})
    for index, char in enumerate(word):
        builder.add_transition(f"q{index}", char, f"q{index + 1}")
    return builder.build()
