import pytest

from linkrank.graph import LinkGraph, PropagationLimitError


D = 0.85


def test_isolated_node_gets_base_rank(graph: LinkGraph):
    graph.add_link("solo")
    result = graph.update_rank("solo")

    assert graph.get_rank("solo") == 1 - D
    assert result.steps == 1
    assert result.updated == ["solo"]
    # first computation starts from rank 0, so it never counts as converged
    assert result.converged == []


def test_triangle_aggregates_incoming_rank(triangle_graph: LinkGraph):
    result = triangle_graph.update_rank("A")

    rank_a = 1 - D
    rank_b = (1 - D) + D * (rank_a / 2)
    rank_c = (1 - D) + D * (rank_a / 2 + rank_b)

    assert triangle_graph.get_rank("A") == pytest.approx(rank_a)
    assert triangle_graph.get_rank("B") == pytest.approx(rank_b)
    assert triangle_graph.get_rank("C") == pytest.approx(rank_c)
    assert triangle_graph.get_rank("C") > triangle_graph.get_rank("B")

    # A, B, C (via A), C (via B)
    assert result.steps == 4
    assert result.updated == ["A", "B", "C"]
    assert result.converged == ["C"]


def test_repeat_propagation_converges_immediately(triangle_graph: LinkGraph):
    triangle_graph.update_rank("A")
    before = triangle_graph.get_all_ranks()

    result = triangle_graph.update_rank("A")

    assert result.steps == 1
    assert result.converged == ["A"]
    assert triangle_graph.get_all_ranks() == before


def test_chain_propagates_in_fifo_order(graph: LinkGraph):
    graph.add_connection("A", "B")
    graph.add_connection("B", "C")

    result = graph.update_rank("A")

    assert result.updated == ["A", "B", "C"]
    assert graph.get_rank("B") == pytest.approx((1 - D) + D * (1 - D))
    assert graph.get_rank("C") == pytest.approx((1 - D) + D * graph.get_rank("B"))


def test_node_reached_twice_is_recomputed(graph: LinkGraph):
    graph.add_connection("A", "B")
    graph.add_connection("A", "C")
    graph.add_connection("B", "D")
    graph.add_connection("C", "D")

    result = graph.update_rank("A")

    # D is queued once by B and once by C
    assert result.steps == 5
    assert result.updated == ["A", "B", "C", "D"]
    expected_d = (1 - D) + D * (graph.get_rank("B") + graph.get_rank("C"))
    assert graph.get_rank("D") == pytest.approx(expected_d)


def test_propagation_only_starts_from_the_trigger(graph: LinkGraph):
    graph.add_connection("A", "B")
    graph.update_rank("B")

    # A was never processed, so B only sees the base value
    assert graph.get_rank("A") == 0.0
    assert graph.get_rank("B") == pytest.approx(1 - D)


def test_converged_node_does_not_enqueue_children(triangle_graph: LinkGraph):
    triangle_graph.update_rank("A")
    triangle_graph.add_connection("C", "E")

    result = triangle_graph.update_rank("C")

    assert result.steps == 1
    assert result.converged == ["C"]
    assert triangle_graph.get_rank("E") == 0.0

    triangle_graph.update_rank("E")
    assert triangle_graph.get_rank("E") == pytest.approx((1 - D) + D * triangle_graph.get_rank("C"))


def test_cycle_converges(cycle_graph: LinkGraph):
    result = cycle_graph.update_rank("A")

    assert result.steps > 2
    assert result.converged
    # fixed point of x = (1 - d) + d * x
    assert cycle_graph.get_rank("A") == pytest.approx(1.0, abs=1e-2)
    assert cycle_graph.get_rank("B") == pytest.approx(1.0, abs=1e-2)


def test_self_loop_converges(graph: LinkGraph):
    graph.add_connection("A", "A")
    result = graph.update_rank("A")

    assert result.converged == ["A"]
    assert graph.get_rank("A") == pytest.approx(1.0, abs=1e-2)


def test_step_limit_raises_and_keeps_ranks(cycle_graph: LinkGraph):
    cycle_graph.max_propagation_steps = 5

    with pytest.raises(PropagationLimitError) as exc_info:
        cycle_graph.update_rank("A")

    error = exc_info.value
    assert error.start == "A"
    assert error.steps == 5
    assert error.pending == 1
    assert error.result.start == "A"
    assert error.result.steps == 5
    assert error.result.updated == ["A", "B"]
    assert error.result.converged == []
    assert cycle_graph.get_rank("A") > 0.0
    assert cycle_graph.get_rank("B") > 0.0


def test_step_limit_not_hit_when_queue_drains():
    graph = LinkGraph(damping_factor=D, rank_threshold=0.0001, max_propagation_steps=1)
    graph.add_link("solo")

    result = graph.update_rank("solo")
    assert result.steps == 1


def test_zero_step_limit_means_unbounded(cycle_graph: LinkGraph):
    cycle_graph.max_propagation_steps = 0
    result = cycle_graph.update_rank("A")
    assert result.steps > 5


def test_parent_without_children_contributes_nothing(graph: LinkGraph):
    graph.add_connection("A", "B")
    graph.update_rank("A")
    # break the parent/child invariant on purpose
    graph._nodes["A"].children.clear()

    graph.update_rank("B")
    assert graph.get_rank("B") == pytest.approx(1 - D)


def test_result_to_dict(triangle_graph: LinkGraph):
    result = triangle_graph.update_rank("A")
    data = result.to_dict()

    assert data == {
        "start": "A",
        "steps": 4,
        "updated": ["A", "B", "C"],
        "converged": ["C"],
    }


def test_nan_threshold_is_rejected():
    # a NaN threshold would never let a node converge
    with pytest.raises(ValueError):
        LinkGraph(damping_factor=D, rank_threshold=float("nan"), max_propagation_steps=50)
