#!/usr/bin/env python3

"""
Unit tests for graph search utilities.
"""

import pytest

from pyshrdlite.utils.search_graph import Edge, GraphSearchPlanner, SearchResult


####################
# Helper functions #
####################


class DictGraph:
    """A graph described by a dictionary of outgoing edges."""

    def __init__(self, edges):
        self.edges = edges
        self.expanded = []

    def outgoing_edges(self, node):
        self.expanded.append(node)
        return [Edge(node, target, cost) for target, cost in self.edges.get(node, [])]


class IntegerLineGraph:
    """An infinite graph where each integer leads to the next one."""

    def outgoing_edges(self, node):
        return [Edge(node, node + 1)]


def create_test_graph():
    """
    Creates a graph where the direct route to the goal is more expensive
    than the detour through the other nodes.
    """
    return DictGraph(
        {
            "start": [("goal", 10.0), ("a", 1.0), ("b", 4.0)],
            "a": [("b", 1.0)],
            "b": [("goal", 1.0)],
        }
    )


##############
# Unit tests #
##############


def test_search_finds_cheapest_path():
    graph = create_test_graph()
    planner = GraphSearchPlanner(
        graph, is_goal=lambda n: n == "goal", heuristic=lambda n: 0.0
    )
    result = planner.search("start")

    assert isinstance(result, SearchResult)
    assert result.path == ["a", "b", "goal"]
    assert result.cost == pytest.approx(3.0)
    assert not planner.timed_out


def test_search_cost_is_sum_of_edge_costs():
    graph = create_test_graph()
    planner = GraphSearchPlanner(
        graph, is_goal=lambda n: n == "goal", heuristic=lambda n: 0.0
    )
    result = planner.search("start")

    nodes = ["start"] + result.path
    total = sum(planner.edge_cost(u, v) for u, v in zip(nodes[:-1], nodes[1:]))
    assert result.cost == pytest.approx(total)


def test_search_start_is_goal():
    graph = create_test_graph()
    planner = GraphSearchPlanner(
        graph, is_goal=lambda n: n == "start", heuristic=lambda n: 0.0
    )
    result = planner.search("start")

    assert result.path == []
    assert result.cost == 0.0


def test_search_no_path():
    graph = create_test_graph()
    planner = GraphSearchPlanner(
        graph, is_goal=lambda n: n == "nowhere", heuristic=lambda n: 0.0
    )
    assert planner.search("start") is None
    assert not planner.timed_out
    assert set(graph.expanded) == {"start", "a", "b", "goal"}


def test_search_heuristic_guides_expansion():
    """A perfect heuristic never expands nodes off the cheapest path."""
    graph = create_test_graph()
    remaining = {"start": 3.0, "a": 2.0, "b": 1.0, "goal": 0.0}
    planner = GraphSearchPlanner(
        graph, is_goal=lambda n: n == "goal", heuristic=lambda n: remaining[n]
    )
    result = planner.search("start")

    assert result.path == ["a", "b", "goal"]
    assert set(graph.expanded) == {"start", "a", "b"}


def test_search_parallel_edges_use_cheapest():
    graph = DictGraph({"start": [("goal", 5.0), ("goal", 2.0)]})
    planner = GraphSearchPlanner(
        graph, is_goal=lambda n: n == "goal", heuristic=lambda n: 0.0
    )
    result = planner.search("start")

    assert result.path == ["goal"]
    assert result.cost == pytest.approx(2.0)
    assert planner.edge_cost("start", "goal") == pytest.approx(2.0)


def test_edge_cost_missing_edge():
    planner = GraphSearchPlanner(
        create_test_graph(), is_goal=lambda n: False, heuristic=lambda n: 0.0
    )
    with pytest.raises(ValueError):
        planner.edge_cost("goal", "start")


def test_search_time_limit(caplog):
    planner = GraphSearchPlanner(
        IntegerLineGraph(),
        is_goal=lambda n: False,
        heuristic=lambda n: 0.0,
        time_limit=0.05,
    )
    assert planner.search(0) is None
    assert planner.timed_out
    assert "Search timed out" in caplog.text
