import pytest
from pathlib import Path
from typing import Generator

from linkrank.graph import LinkGraph


@pytest.fixture
def graph() -> LinkGraph:
    """Empty graph with the standard damping factor and threshold."""
    return LinkGraph(damping_factor=0.85, rank_threshold=0.0001, max_propagation_steps=100_000)


@pytest.fixture
def triangle_graph(graph: LinkGraph) -> LinkGraph:
    """A -> B, A -> C, B -> C."""
    graph.add_connection("A", "B")
    graph.add_connection("A", "C")
    graph.add_connection("B", "C")
    return graph


@pytest.fixture
def cycle_graph(graph: LinkGraph) -> LinkGraph:
    """A -> B -> A."""
    graph.add_connection("A", "B")
    graph.add_connection("B", "A")
    return graph


@pytest.fixture
def edge_file(tmp_path: Path) -> Generator[Path, None, None]:
    """Small edge list with comments, a bare link and a malformed line."""
    path = tmp_path / "edges.txt"
    path.write_text(
        "# sample web graph\n"
        "http://a.example http://b.example\n"
        "http://a.example http://c.example\n"
        "\n"
        "http://b.example http://c.example\n"
        "http://lonely.example\n"
        "http://a.example http://b.example\n"
        "this line has too many tokens\n",
        encoding="utf-8",
    )
    yield path
