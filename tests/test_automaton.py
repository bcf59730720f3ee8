# =============================================================================
# test_automaton.py - Automaton and Simulation Unit Tests
# =============================================================================
# Tests for the generic DFA type, its declarative builder and the
# maximal-munch simulation.
#
# Test coverage includes:
#   - Builder: implicit states, determinism check, ranges
#   - Read-only accessors used by dump tools
#   - Simulation: longest accepted prefix, detours, offsets, no match
#   - Keyword chain automata
# =============================================================================

import pytest

from dfalex.automaton import ALPHABET, AutomatonBuilder, keyword_automaton, simulate
from dfalex.errors import AutomatonDefinitionError, DfaLexError


# =============================================================================
# Helper Function
# =============================================================================

def a_or_abc():
    """Automaton accepting exactly 'a' and 'abc'."""
    builder = AutomatonBuilder("a_or_abc", "q0", {"q1", "q3"})
    builder.add_transition("q0", "a", "q1")
    builder.add_transition("q1", "b", "q2")
    builder.add_transition("q2", "c", "q3")
    return builder.build()


# =============================================================================
# Builder Tests
# =============================================================================

class TestBuilder:
    """Test declarative automaton construction."""

    def test_states_created_on_first_mention(self):
        """States appear in the order they are first mentioned."""
        automaton = a_or_abc()
        assert automaton.states == ("q0", "q1", "q2", "q3")

    def test_unreachable_accepting_state_is_kept(self):
        """Accepting states need not be reachable."""
        builder = AutomatonBuilder("odd", "q0", {"q9"})
        builder.add_transition("q0", "x", "q1")
        automaton = builder.build()
        assert "q9" in automaton.states
        assert automaton.accepting_states == frozenset({"q9"})
        assert automaton.simulate("xxx", 0) is None

    def test_conflicting_transition_rejected(self):
        """A second target for the same state and character is an error."""
        builder = AutomatonBuilder("bad", "q0", {"q1"})
        builder.add_transition("q0", "a", "q1")
        with pytest.raises(AutomatonDefinitionError) as excinfo:
            builder.add_transition("q0", "a", "q2")
        assert "nondeterministic" in str(excinfo.value)
        assert isinstance(excinfo.value, DfaLexError)

    def test_duplicate_transition_is_noop(self):
        """Re-adding the identical edge is allowed."""
        builder = AutomatonBuilder("dup", "q0", {"q1"})
        builder.add_transition("q0", "a", "q1")
        builder.add_transition("q0", "a", "q1")
        assert builder.build().transitions == {("q0", "a"): "q1"}

    def test_label_must_be_single_character(self):
        builder = AutomatonBuilder("bad", "q0", {"q1"})
        with pytest.raises(AutomatonDefinitionError):
            builder.add_transition("q0", "ab", "q1")

    def test_add_range(self):
        """Ranges are inclusive on both ends."""
        builder = AutomatonBuilder("digit", "q0", {"q1"})
        builder.add_range("q0", "0", "9", "q1")
        automaton = builder.build()
        assert automaton.simulate("0", 0) == "0"
        assert automaton.simulate("9", 0) == "9"
        assert automaton.simulate("a", 0) is None

    def test_alphabet_is_seven_bit_without_del(self):
        assert len(ALPHABET) == 127
        assert "\x7f" not in ALPHABET
        assert "\n" in ALPHABET


# =============================================================================
# Accessor Tests
# =============================================================================

class TestAccessors:
    """Test the read-only views exposed for dump tools."""

    def test_start_and_accepting(self):
        automaton = a_or_abc()
        assert automaton.name == "a_or_abc"
        assert automaton.start_state == "q0"
        assert automaton.accepting_states == frozenset({"q1", "q3"})

    def test_transitions_mapping(self):
        automaton = a_or_abc()
        assert automaton.transitions == {
            ("q0", "a"): "q1",
            ("q1", "b"): "q2",
            ("q2", "c"): "q3",
        }

    def test_transitions_is_a_copy(self):
        """Mutating the returned mapping does not change the automaton."""
        automaton = a_or_abc()
        mapping = automaton.transitions
        mapping[("q0", "z")] = "q3"
        assert automaton.simulate("z", 0) is None

    def test_next_state_and_is_accepting(self):
        automaton = a_or_abc()
        assert automaton.next_state("q0", "a") == "q1"
        assert automaton.next_state("q0", "b") is None
        assert automaton.next_state("nowhere", "a") is None
        assert automaton.is_accepting("q3")
        assert not automaton.is_accepting("q2")


# =============================================================================
# Simulation Tests
# =============================================================================

class TestSimulation:
    """Test maximal-munch simulation."""

    def test_longest_prefix_wins(self):
        """When both 'a' and 'abc' are accepted, the longer one is returned."""
        assert a_or_abc().simulate("abcd", 0) == "abc"

    def test_detour_keeps_earlier_match(self):
        """A failed walk past an accepted prefix falls back to that prefix."""
        assert a_or_abc().simulate("abx", 0) == "a"
        assert a_or_abc().simulate("ab", 0) == "a"

    def test_no_match(self):
        assert a_or_abc().simulate("xyz", 0) is None

    def test_empty_input(self):
        assert a_or_abc().simulate("", 0) is None

    def test_offset(self):
        """Simulation starts at the given offset."""
        assert a_or_abc().simulate("xxabc", 2) == "abc"
        assert a_or_abc().simulate("xxabc", 5) is None

    def test_module_level_simulate(self):
        assert simulate(a_or_abc(), "abc") == "abc"


# =============================================================================
# Keyword Automaton Tests
# =============================================================================

class TestKeywordAutomaton:
    """Test chain automata for fixed words."""

    def test_exact_word(self):
        assert keyword_automaton("while").simulate("while", 0) == "while"

    def test_prefix_of_longer_word(self):
        """A keyword automaton matches the start of a longer identifier."""
        assert keyword_automaton("int").simulate("integer", 0) == "int"

    def test_partial_word_rejected(self):
        assert keyword_automaton("int").simulate("in", 0) is None

    def test_structure(self):
        automaton = keyword_automaton("if")
        assert automaton.name == "if"
        assert automaton.start_state == "q0"
        assert automaton.accepting_states == frozenset({"q2"})
        assert automaton.transitions == {("q0", "i"): "q1", ("q1", "f"): "q2"}
