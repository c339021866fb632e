"""
Text format for transition tables.

    a,b,c        alphabet, one symbol per column
    1,2,3        row for state 0
    0,2,3        row for state 1
    ...
    {2,3}        accept states

Every line is terminated by a newline, including the last one.
"""

from __future__ import annotations

import re

import numpy as np

from tablefsa.core.automaton import Automaton

DELIMITER = ","
ACCEPT_OPEN = "{"
ACCEPT_CLOSE = "}"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_STATE_ENTRY = re.compile(r"[+-]?[0-9]+")
_STATE_MIN = int(np.iinfo(np.int64).min)
_STATE_MAX = int(np.iinfo(np.int64).max)


class MalformedTableError(ValueError):
    """Table text that cannot describe a rectangular transition table."""


def split_lines(text: str) -> list[str]:
    """Lines of `text` broken only at \\r\\n, \\r or \\n; a final terminator is optional."""
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def _parse_state(entry: str, line_number: int) -> int:
    if not _STATE_ENTRY.fullmatch(entry):
        raise MalformedTableError(
            f"line {line_number}: expected an integer state, got {entry!r}"
        )
    state = int(entry)
    if not _STATE_MIN <= state <= _STATE_MAX:
        raise MalformedTableError(
            f"line {line_number}: state {entry} does not fit in a 64-bit table entry"
        )
    return state


def _parse_accept_states(line: str, line_number: int) -> tuple[int, ...]:
    if not (line.startswith(ACCEPT_OPEN) and line.endswith(ACCEPT_CLOSE)):
        raise MalformedTableError(
            f"line {line_number}: accept states must be wrapped in "
            f"{ACCEPT_OPEN}{ACCEPT_CLOSE}, got {line!r}"
        )
    body = line[1:-1]
    if not body:
        return ()
    return tuple(_parse_state(entry, line_number) for entry in body.split(DELIMITER))


def parse_table(text: str) -> Automaton:
    """
    Build an automaton from table text.

    Text with fewer than three lines describes no state and yields the
    degenerate automaton.

    Raises:
        MalformedTableError: entries that are not plain decimal integers or
            do not fit in 64 bits, rows whose length differs
            from the alphabet, or an accept line without braces.
    """
    lines = split_lines(text)
    num_states = len(lines) - 2
    if num_states <= 0:
        return Automaton.empty()

    alphabet = tuple(lines[0].split(DELIMITER))
    table = np.zeros((num_states, len(alphabet)), dtype=np.int64)
    for state in range(num_states):
        line_number = state + 2
        entries = lines[state + 1].split(DELIMITER)
        if len(entries) != len(alphabet):
            raise MalformedTableError(
                f"line {line_number}: expected {len(alphabet)} entries, got {len(entries)}"
            )
        table[state] = [_parse_state(entry, line_number) for entry in entries]

    accept_states = _parse_accept_states(lines[-1], len(lines))
    return Automaton(alphabet=alphabet, table=table, accept_states=accept_states)


def render_table(automaton: Automaton) -> str:
    """Table text for `automaton`; the degenerate automaton renders as ''."""
    if automaton.is_degenerate:
        return ""

    lines = [DELIMITER.join(str(symbol) for symbol in automaton.alphabet)]
    lines.extend(DELIMITER.join(str(int(entry)) for entry in row) for row in automaton.table)
    lines.append(
        ACCEPT_OPEN + DELIMITER.join(str(state) for state in automaton.accept_states) + ACCEPT_CLOSE
    )
    return "".join(line + "\n" for line in lines)
