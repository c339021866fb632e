"""Load and save transition tables on disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from tablefsa.core.automaton import Automaton
from tablefsa.core.codec import MalformedTableError, parse_table, render_table

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


@dataclass(frozen=True)
class LoadResult:
    """Outcome of reading a table file; a failed load carries a degenerate automaton."""

    automaton: Automaton
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def load_automaton(path: Union[str, Path]) -> LoadResult:
    """
    Read a table file into an automaton.

    Never raises for unreadable or malformed files: the failure is logged
    and returned in `LoadResult.error` next to a degenerate automaton.
    """
    try:
        with open(path, "r", encoding=ENCODING) as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Error during attempt to read table file %s: %s", path, exc)
        return LoadResult(automaton=Automaton.empty(), error=f"cannot read {path}: {exc}")

    try:
        automaton = parse_table(text)
    except MalformedTableError as exc:
        logger.warning("Malformed table file %s: %s", path, exc)
        return LoadResult(automaton=Automaton.empty(), error=f"malformed {path}: {exc}")

    if automaton.is_degenerate:
        logger.info("table file %s describes no states", path)
    else:
        logger.debug(
            "loaded %d-state automaton over %d symbols from %s",
            automaton.num_states,
            len(automaton.alphabet),
            path,
        )
    return LoadResult(automaton=automaton)


def save_automaton(automaton: Automaton, path: Union[str, Path]) -> None:
    """Write `automaton` in table format; newlines are written verbatim."""
    with open(path, "w", encoding=ENCODING, newline="") as f:
        f.write(render_table(automaton))
