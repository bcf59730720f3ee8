"""
Text Rendering
==============

Plain-text dumps of scan results and automata, used by the command-line
tool. Every function returns a string and has no side effects.

Automaton Dump
--------------
Transitions are grouped by source state and target, with consecutive
characters collapsed into ranges:

    Automaton: identifier
      start: q0
      accepting: q1
      q0 --[_a-z]--> q1
      q1 --[0-9_a-z]--> q1
"""

from typing import Iterable, Mapping

from dfalex.automaton import Automaton
from dfalex.errors import ErrorLog, ErrorRecord
from dfalex.symbols import SymbolEntry, SymbolTable
from dfalex.tokens import Token


def format_tokens(tokens: Iterable[Token], terminator_label: bool = False) -> str:
    return "\n".join(token.render(terminator_label) for token in tokens)


def format_symbol_table(symbols: Mapping[str, SymbolEntry]) -> str:
    lines = [SymbolTable.HEADER, SymbolEntry.ROW_FORMAT.format(*SymbolEntry.COLUMNS)]
    lines.extend(entry.format_row() for entry in symbols.values())
    return "\n".join(lines)


def format_errors(errors: Iterable[ErrorRecord]) -> str:
    lines = [ErrorLog.HEADER]
    lines.extend(str(record) for record in errors)
    return "\n".join(lines)


def _printable(char: str) -> str:
    if char == "\n":
        return "\\n"
    if char == "\t":
        return "\\t"
    if not char.isprintable():
        return f"\\x{ord(char):02x}"
    if char in "[]-\\":
        return "\\" + char
    return char


def _char_class(chars: Iterable[str]) -> str:
    """Collapse characters into a bracketed class such as ``[0-9a-z]``."""
    codes = sorted(ord(char) for char in chars)
    parts = []
    index = 0
    while index < len(codes):
        first = codes[index]
        last = first
        while index + 1 < len(codes) and codes[index + 1] == last + 1:
            index += 1
            last = codes[index]
        if last - first >= 2:
            parts.append(f"{_printable(chr(first))}-{_printable(chr(last))}")
        else:
            parts.extend(_printable(chr(code)) for code in range(first, last + 1))
        index += 1
    return "[" + "".join(parts) + "]"


def format_automaton(automaton: Automaton) -> str:
    """Render start state, accepting states and grouped transitions."""
    grouped: dict[tuple[str, str], list[str]] = {}
    for (source, char), target in automaton.transitions.items():
        grouped.setdefault((source, target), []).append(char)

    lines = [
        f"Automaton: {automaton.name}",
        f"  start: {automaton.start_state}",
        f"  accepting: {', '.join(sorted(automaton.accepting_states))}",
    ]
    order = {label: index for index, label in enumerate(automaton.states)}
    for (source, target) in sorted(grouped, key=lambda key: (order[key[0]], order[key[1]])):
        lines.append(f"  {source} --{_char_class(grouped[(source, target)])}--> {target}")
    return "\n".join(lines)
