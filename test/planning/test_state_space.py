#!/usr/bin/env python3

"""
Unit tests for the arm state space.
"""

import pytest

from pyshrdlite.core import World
from pyshrdlite.planning.actions import ArmAction
from pyshrdlite.planning.state_space import (
    PlanningNode,
    StateSpaceGraph,
    action_between,
)


####################
# Helper functions #
####################


def edges_by_action(graph, node):
    return {edge.target.action: edge for edge in graph.outgoing_edges(node)}


def check_state_invariant(node):
    """The held object is never also in a column, and no object appears twice."""
    placed = [obj_id for column in node.stacks for obj_id in column]
    assert len(placed) == len(set(placed))
    if node.holding is not None:
        assert node.holding not in placed
    assert 0 <= node.arm < len(node.stacks)


##############
# Unit tests #
##############


def test_node_from_world(small_world):
    node = PlanningNode.from_world(small_world)
    assert node.stacks == (("e",), ("g", "l"), (), ("k", "m", "f"), ())
    assert node.holding == "a"
    assert node.arm == 0
    assert node.action is None


def test_node_equality_ignores_action():
    stacks = (("a",), ())
    left = PlanningNode(stacks, None, 0, action=ArmAction.LEFT)
    pick = PlanningNode(stacks, None, 0, action=ArmAction.PICK)
    assert left == pick
    assert hash(left) == hash(pick)
    assert PlanningNode(stacks, None, 1) != left


def test_boundary_moves(two_column_world):
    graph = StateSpaceGraph.from_world(two_column_world)
    node = PlanningNode.from_world(two_column_world)

    edges = edges_by_action(graph, node)
    assert ArmAction.LEFT not in edges
    assert edges[ArmAction.RIGHT].target.arm == 1

    rightmost = edges[ArmAction.RIGHT].target
    edges = edges_by_action(graph, rightmost)
    assert ArmAction.RIGHT not in edges
    assert edges[ArmAction.LEFT].target.arm == 0


def test_pick_and_drop(two_column_world):
    graph = StateSpaceGraph.from_world(two_column_world)
    node = PlanningNode(stacks=(("a",), ("b",)), holding=None, arm=1)

    pick = edges_by_action(graph, node)[ArmAction.PICK]
    assert pick.cost == 1
    assert pick.target.holding == "b"
    assert pick.target.stacks == (("a",), ())
    assert ArmAction.DROP not in edges_by_action(graph, node)

    # The ball can be dropped into the box, but nothing can be picked while holding it.
    over_box = edges_by_action(graph, pick.target)[ArmAction.LEFT].target
    edges = edges_by_action(graph, over_box)
    assert ArmAction.PICK not in edges
    assert edges[ArmAction.DROP].target.stacks == (("a", "b"), ())
    assert edges[ArmAction.DROP].target.holding is None


def test_edges_do_not_modify_node(medium_world):
    graph = StateSpaceGraph.from_world(medium_world)
    node = PlanningNode.from_world(medium_world)
    stacks_before = node.stacks
    for edge in graph.outgoing_edges(node):
        assert edge.source is node
        check_state_invariant(edge.target)
    assert node.stacks == stacks_before
    assert node == PlanningNode.from_world(medium_world)


def test_edges_share_unchanged_columns(medium_world):
    graph = StateSpaceGraph.from_world(medium_world)
    node = PlanningNode.from_world(medium_world)
    pick = edges_by_action(graph, node)[ArmAction.PICK].target
    for index in range(1, len(node.stacks)):
        assert pick.stacks[index] is node.stacks[index]


def test_drop_checks_physics():
    world = World(
        objects={
            "ball": {"form": "ball", "size": "small", "color": "black"},
            "table": {"form": "table", "size": "small", "color": "red"},
            "brick": {"form": "brick", "size": "large", "color": "green"},
        },
        stacks=[["table"], ["ball"]],
        holding="brick",
    )
    graph = StateSpaceGraph.from_world(world)
    for arm in (0, 1):
        node = PlanningNode(stacks=(("table",), ("ball",)), holding="brick", arm=arm)
        assert ArmAction.DROP not in edges_by_action(graph, node)


def test_drop_respects_column_height():
    world = World(
        objects={
            "a": {"form": "brick", "size": "large", "color": "green"},
            "b": {"form": "brick", "size": "small", "color": "white"},
        },
        stacks=[["a"], []],
        holding="b",
        max_stack_height=1,
    )
    graph = StateSpaceGraph.from_world(world)
    node = PlanningNode.from_world(world)
    assert ArmAction.DROP not in edges_by_action(graph, node)

    node = PlanningNode(stacks=node.stacks, holding="b", arm=1)
    assert ArmAction.DROP in edges_by_action(graph, node)


def test_reachable_states_keep_invariant(small_world):
    """Explores a few layers of the state space, checking every generated state."""
    graph = StateSpaceGraph.from_world(small_world)
    layer = {PlanningNode.from_world(small_world)}
    for _ in range(4):
        next_layer = set()
        for node in layer:
            for edge in graph.outgoing_edges(node):
                check_state_invariant(edge.target)
                assert action_between(node, edge.target) == edge.target.action
                next_layer.add(edge.target)
        layer = next_layer
    assert len(layer) > 0


def test_action_between_invalid():
    node = PlanningNode(stacks=((), ()), holding=None, arm=0)
    with pytest.raises(ValueError):
        action_between(node, node)
