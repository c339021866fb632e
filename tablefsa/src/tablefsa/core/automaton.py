"""
Table-driven deterministic finite-state automaton.

States are the consecutive non-negative integers indexing the rows of the
transition table; state 0 is the start state. Columns follow the order of
the alphabet. The automaton is an immutable value: the table is copied and
marked read-only at construction.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field

import numpy as np

logger = logging.getLogger(__name__)

INITIAL_STATE = 0

_NOT_FOUND = -1


@dataclass(frozen=True, eq=False)
class Automaton:
    """Alphabet, transition table and accept states of a DFA."""

    alphabet: tuple[Hashable, ...]
    table: np.ndarray
    accept_states: tuple[int, ...]
    _columns: dict = field(init=False, repr=False)

    def __post_init__(self) -> None:
        alphabet = tuple(self.alphabet)
        accept_states = tuple(int(state) for state in self.accept_states)

        table = np.array(self.table, dtype=np.int64)
        if table.size == 0:
            table = table.reshape(0, len(alphabet))
        if table.ndim != 2:
            raise ValueError(f"table must be 2-dimensional, got {table.ndim} dimensions")
        if table.shape[1] != len(alphabet):
            raise ValueError(
                f"table has {table.shape[1]} columns but alphabet has {len(alphabet)} symbols"
            )
        if table.shape[0] == 0 and (alphabet or accept_states):
            raise ValueError("an automaton without states must have no alphabet or accept states")

        table.flags.writeable = False

        # Last occurrence wins on duplicate symbols.
        columns = {symbol: column for column, symbol in enumerate(alphabet)}

        object.__setattr__(self, "alphabet", alphabet)
        object.__setattr__(self, "table", table)
        object.__setattr__(self, "accept_states", accept_states)
        object.__setattr__(self, "_columns", columns)

    @classmethod
    def empty(cls) -> Automaton:
        """Degenerate automaton: no alphabet, no states, rejects every input."""
        return cls(alphabet=(), table=np.zeros((0, 0), dtype=np.int64), accept_states=())

    @property
    def num_states(self) -> int:
        return int(self.table.shape[0])

    @property
    def is_degenerate(self) -> bool:
        return self.num_states == 0

    def is_accept_state(self, state: int) -> bool:
        return state in self.accept_states

    def _column_of(self, symbol: Hashable) -> int:
        try:
            return self._columns.get(symbol, _NOT_FOUND)
        except TypeError:
            # Unhashable tokens can never be alphabet members.
            return _NOT_FOUND

    def next_state(self, current_state: int, symbol: Hashable) -> int:
        """
        State reached from `current_state` on reading `symbol`.

        Invalid requests return `current_state` unchanged. A request is
        invalid when the symbol is not in the alphabet, when the state is
        negative, or when the state exceeds the number of table columns.
        The last check compares against columns, not rows, and is kept that
        way for compatibility with existing tables and tests. A state that
        passes it but has no row is also returned unchanged.
        """
        column = self._column_of(symbol)
        if column == _NOT_FOUND or self.table.shape[1] < current_state or current_state < 0:
            return current_state
        if current_state >= self.num_states:
            logger.debug(
                "state %d has no row in a %d-state table; staying put",
                current_state,
                self.num_states,
            )
            return current_state
        return int(self.table[current_state, column])

    def trace(self, symbols: Iterable[Hashable] | None) -> np.ndarray:
        """Visited states, starting with the initial state, one per consumed symbol."""
        states = [INITIAL_STATE]
        if symbols is not None:
            for symbol in symbols:
                states.append(self.next_state(states[-1], symbol))
        return np.array(states, dtype=np.int64)

    def process_string(self, symbols: Iterable[Hashable] | None) -> bool:
        """
        Run the automaton over `symbols` and report acceptance.

        A string is consumed one character at a time; any other iterable one
        item at a time. None is treated as the empty input.
        """
        current_state = INITIAL_STATE
        if symbols is not None:
            for symbol in symbols:
                current_state = self.next_state(current_state, symbol)
        return self.is_accept_state(current_state)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Automaton):
            return NotImplemented
        return (
            self.alphabet == other.alphabet
            and self.accept_states == other.accept_states
            and np.array_equal(self.table, other.table)
        )

    def __hash__(self) -> int:
        return hash((self.alphabet, self.accept_states, self.table.shape, self.table.tobytes()))

    def __str__(self) -> str:
        from tablefsa.core.codec import render_table

        return render_table(self)


def make_abc_automaton() -> Automaton:
    """Five-state sample over {a, b, c} accepting in states 2 and 3."""
    return Automaton(
        alphabet=("a", "b", "c"),
        table=np.array(
            [
                [1, 2, 3],
                [0, 2, 3],
                [4, 2, 3],
                [4, 2, 3],
                [4, 4, 4],
            ],
            dtype=np.int64,
        ),
        accept_states=(2, 3),
    )
