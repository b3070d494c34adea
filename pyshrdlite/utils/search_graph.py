"""Graph search utilities."""

from dataclasses import dataclass, field
import time
from typing import Callable, Generic, Hashable, Iterable, Protocol, TypeVar

from astar import AStar

from ..utils.logging import get_global_logger


NodeT = TypeVar("NodeT", bound=Hashable)


@dataclass(frozen=True)
class Edge(Generic[NodeT]):
    """A weighted, directed edge in a graph."""

    source: NodeT
    target: NodeT
    cost: float = 1.0


class Graph(Protocol[NodeT]):
    """A directed graph that can be searched by :class:`GraphSearchPlanner`."""

    def outgoing_edges(self, node: NodeT) -> list[Edge[NodeT]]:
        """Computes the edges that leave from a node."""
        ...


@dataclass
class SearchResult(Generic[NodeT]):
    """Reports the result of a successful search."""

    path: list[NodeT] = field(default_factory=list)
    """ Nodes from the start (exclusive) to the goal (inclusive). """
    cost: float = 0.0
    """ Total cost of the path. """


class GraphSearchPlanner(AStar, Generic[NodeT]):  # type: ignore[misc]
    """
    Best-first (A*) search over any graph exposing outgoing edges.

    Nodes must be hashable by value, since the search bookkeeping is keyed
    on node equality.
    """

    def __init__(
        self,
        graph: Graph[NodeT],
        is_goal: Callable[[NodeT], bool],
        heuristic: Callable[[NodeT], float],
        time_limit: float | None = None,
    ) -> None:
        """
        Creates an instance of a graph search planner.

        :param graph: The graph to search.
        :param is_goal: Returns True when given a node that satisfies the goal.
        :param heuristic: Estimates the remaining cost from a node to the goal.
        :param time_limit: Maximum time to spend searching, in seconds.
            If None, the search only stops when the graph is exhausted.
        """
        super().__init__()
        self.graph = graph
        self.is_goal = is_goal
        self.heuristic = heuristic
        self.time_limit = time_limit

        self.timed_out = False
        self.num_expanded = 0
        self._start_time = 0.0
        self._expanded_costs: dict[NodeT, float] = {}

    def heuristic_cost_estimate(self, current: NodeT, goal: None) -> float:
        """
        Compute heuristic cost estimate using the user-supplied heuristic.

        :param current: The node to evaluate.
        :param goal: Unused, since the goal is given as a predicate.
        :return: Heuristic cost estimate
        """
        return self.heuristic(current)

    def distance_between(self, n0: NodeT, n1: NodeT) -> float:
        """
        Get the cost of the edge between a node being expanded and its neighbor.

        :param n0: Node being expanded
        :param n1: Neighbor node
        :return: Edge cost
        """
        return self._expanded_costs[n1]

    def neighbors(self, node: NodeT) -> Iterable[NodeT]:
        """
        Get neighbors of a graph node, unless the time budget is exhausted.

        :param node: Node
        :return: List of node neighbors
        """
        if self._time_exceeded():
            return []

        self.num_expanded += 1
        self._expanded_costs = {}
        for edge in self.graph.outgoing_edges(node):
            known_cost = self._expanded_costs.get(edge.target)
            if known_cost is None or edge.cost < known_cost:
                self._expanded_costs[edge.target] = edge.cost
        return list(self._expanded_costs.keys())

    def is_goal_reached(self, current: NodeT, goal: None) -> bool:
        """
        Checks whether a node satisfies the goal predicate.

        :param current: The node to check.
        :param goal: Unused, since the goal is given as a predicate.
        :return: True if the goal is satisfied, else False.
        """
        return self.is_goal(current)

    def edge_cost(self, source: NodeT, target: NodeT) -> float:
        """
        Get the cheapest cost of going directly from one node to another.

        :param source: The source node.
        :param target: The target node.
        :return: The edge cost.
        :raises ValueError: If there is no edge between the nodes.
        """
        costs = [
            edge.cost
            for edge in self.graph.outgoing_edges(source)
            if edge.target == target
        ]
        if not costs:
            raise ValueError(f"No edge from {source} to {target}.")
        return min(costs)

    def search(self, start: NodeT) -> SearchResult[NodeT] | None:
        """
        Search from a start node to any node satisfying the goal.

        :param start: The start node.
        :return: The search result, or None if no path was found within the time budget.
        """
        self.timed_out = False
        self.num_expanded = 0
        self._start_time = time.time()

        astar_result = self.astar(start, None)
        elapsed = time.time() - self._start_time
        if astar_result is None:
            if self.timed_out:
                get_global_logger().warning(
                    f"Search timed out after {elapsed:.3f} seconds "
                    f"({self.num_expanded} nodes expanded)."
                )
            else:
                get_global_logger().debug(
                    f"Search exhausted the graph after expanding {self.num_expanded} nodes."
                )
            return None

        nodes = list(astar_result)
        result: SearchResult[NodeT] = SearchResult(path=nodes[1:])
        for source, target in zip(nodes[:-1], nodes[1:]):
            result.cost += self.edge_cost(source, target)
        get_global_logger().debug(
            f"Found path of cost {result.cost} in {elapsed:.3f} seconds "
            f"({self.num_expanded} nodes expanded)."
        )
        return result

    def _time_exceeded(self) -> bool:
        if self.time_limit is None:
            return False
        if time.time() - self._start_time > self.time_limit:
            self.timed_out = True
        return self.timed_out
