from __future__ import annotations

from collections.abc import Hashable, Iterable, Sequence

import numpy as np

from tablefsa.core.automaton import Automaton

ACCEPT_MARK = "A"
REJECT_MARK = "R"


def classify_strings(
    automaton: Automaton,
    strings: Sequence[Iterable[Hashable] | None],
) -> np.ndarray:
    return np.array([automaton.process_string(s) for s in strings], dtype=bool)


def acceptance_accuracy(
    automaton: Automaton,
    strings: Sequence[Iterable[Hashable] | None],
    expected: Sequence[bool],
) -> float:
    if len(strings) == 0:
        raise ValueError("strings must not be empty")
    if len(strings) != len(expected):
        raise ValueError("strings and expected must have same length")

    predicted = classify_strings(automaton, strings)
    correct = int(np.sum(predicted == np.asarray(expected, dtype=bool)))
    return correct / len(strings)


def acceptance_confusion_matrix(
    predicted: Sequence[bool],
    expected: Sequence[bool],
) -> np.ndarray:
    """Rows are the expected verdict (reject, accept), columns the predicted one."""
    if len(predicted) != len(expected):
        raise ValueError("predicted and expected must have same length")
    if len(predicted) == 0:
        raise ValueError("predicted must not be empty")

    matrix = np.zeros((2, 2), dtype=np.int64)
    for pred, true in zip(predicted, expected):
        matrix[int(bool(true)), int(bool(pred))] += 1

    return matrix


def format_verdicts(verdicts: Iterable[bool]) -> str:
    return "".join((ACCEPT_MARK if verdict else REJECT_MARK) + "\n" for verdict in verdicts)


def parse_verdicts(lines: Iterable[str]) -> list[bool]:
    verdicts = []
    for line_number, line in enumerate(lines, start=1):
        mark = line.strip()
        if mark == ACCEPT_MARK:
            verdicts.append(True)
        elif mark == REJECT_MARK:
            verdicts.append(False)
        else:
            raise ValueError(
                f"line {line_number}: expected {ACCEPT_MARK!r} or {REJECT_MARK!r}, got {mark!r}"
            )
    return verdicts
