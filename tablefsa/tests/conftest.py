"""
Pytest configuration and fixtures for tablefsa tests.

Provides the sample {a, b, c} automaton and its table file.
"""

import pytest


SAMPLE_TABLE = "a,b,c\n1,2,3\n0,2,3\n4,2,3\n4,2,3\n4,4,4\n{2,3}\n"


@pytest.fixture
def sample_table_text():
    """Canonical text of the five-state sample table."""
    return SAMPLE_TABLE


@pytest.fixture
def abc_automaton():
    """
    Five-state automaton over {a, b, c} accepting in states 2 and 3.

    Built in code, independent of the parser.
    """
    from tablefsa.core.automaton import make_abc_automaton
    return make_abc_automaton()


@pytest.fixture
def sample_table_file(tmp_path):
    """The sample table written to a temporary file."""
    path = tmp_path / "table1.txt"
    path.write_bytes(SAMPLE_TABLE.encode("utf-8"))
    return path
