import pytest

from heapdijkstra import deprecation
from heapdijkstra.graph import WeightedDiGraph

CHAIN_EDGES = [
    ("A", "B", 1),
    ("A", "C", 4),
    ("B", "C", 1),
    ("C", "D", 1),
]


@pytest.fixture
def chain_graph():
    """Four vertices where the cheap route to D goes through B and C, plus isolated E."""
    return WeightedDiGraph.from_edges(CHAIN_EDGES, vertices=["E"])


@pytest.fixture
def fresh_deprecations(monkeypatch):
    """Forget which deprecation warnings were already issued."""
    monkeypatch.setattr(deprecation, "_warned", set())
