"""
Shared graphs for the test suite.
"""

import pytest

from sptree import DirectedGraph

# A->B (1), A->C (4), B->C (1), B->D (5), C->D (1)
DIAMOND = [
    ("A", "B", 1),
    ("A", "C", 4),
    ("B", "C", 1),
    ("B", "D", 5),
    ("C", "D", 1),
]


@pytest.fixture
def diamond():
    """Four-vertex graph whose shortest path to D is A->B->C->D."""
    return DirectedGraph.from_edges(DIAMOND)


@pytest.fixture
def diamond_with_isolated():
    """The diamond plus an isolated vertex E."""
    return DirectedGraph.from_edges(DIAMOND, vertices=["A", "B", "C", "D", "E"])
