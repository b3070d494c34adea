"""
State space of the arm: planning states and the actions connecting them.
"""

from dataclasses import dataclass, field
from typing import Mapping

from .actions import ArmAction
from ..core.physics import can_drop_on
from ..core.types import Coordinate, ObjectDescriptor
from ..core.world import World, find_coordinate
from ..utils.search_graph import Edge


Stacks = tuple[tuple[str, ...], ...]


@dataclass(frozen=True)
class PlanningNode:
    """
    An immutable world state explored during planning.

    Nodes compare and hash by state only, so the same state reached through
    different actions is a single node for the search.
    """

    stacks: Stacks
    holding: str | None
    arm: int
    action: ArmAction | None = field(default=None, compare=False)
    """ The action that produced this node from its predecessor. """

    @classmethod
    def from_world(cls, world: World) -> "PlanningNode":
        """
        Creates the planning node corresponding to the current state of a world.

        :param world: The world.
        :return: The planning node.
        """
        return cls(
            stacks=tuple(tuple(column) for column in world.stacks),
            holding=world.holding,
            arm=world.arm,
        )

    def find_coordinate(self, obj_id: str) -> Coordinate | None:
        return find_coordinate(obj_id, self.stacks)

    def with_column(
        self, column: tuple[str, ...], holding: str | None, action: ArmAction
    ) -> "PlanningNode":
        """
        Derives a node in which the column under the arm is replaced.

        All other columns are shared with this node.

        :param column: The new contents of the column under the arm.
        :param holding: The object held in the new node.
        :param action: The action producing the new node.
        :return: The derived node.
        """
        stacks = self.stacks[: self.arm] + (column,) + self.stacks[self.arm + 1 :]
        return PlanningNode(stacks=stacks, holding=holding, arm=self.arm, action=action)


class StateSpaceGraph:
    """The graph of arm actions between planning nodes."""

    def __init__(
        self, objects: Mapping[str, ObjectDescriptor], max_stack_height: int
    ) -> None:
        """
        Creates the state space for a world's objects.

        :param objects: Object descriptors by identifier.
        :param max_stack_height: The number of objects a column can hold.
        """
        self.objects = objects
        self.max_stack_height = max_stack_height

    @classmethod
    def from_world(cls, world: World) -> "StateSpaceGraph":
        return cls(world.objects, world.max_stack_height)

    def outgoing_edges(self, node: PlanningNode) -> list[Edge[PlanningNode]]:
        """
        Computes the actions that can be performed in a planning node.

        The node itself is never modified.

        :param node: The planning node.
        :return: Unit cost edges to the resulting nodes.
        """
        edges = []
        column = node.stacks[node.arm]

        if node.arm > 0:
            left = PlanningNode(
                node.stacks, node.holding, node.arm - 1, action=ArmAction.LEFT
            )
            edges.append(Edge(node, left))

        if node.arm < len(node.stacks) - 1:
            right = PlanningNode(
                node.stacks, node.holding, node.arm + 1, action=ArmAction.RIGHT
            )
            edges.append(Edge(node, right))

        if node.holding is None and len(column) > 0:
            pick = node.with_column(column[:-1], column[-1], ArmAction.PICK)
            edges.append(Edge(node, pick))

        if (
            node.holding is not None
            and len(column) < self.max_stack_height
            and can_drop_on(self.objects, node.holding, column)
        ):
            drop = node.with_column(column + (node.holding,), None, ArmAction.DROP)
            edges.append(Edge(node, drop))

        return edges


def action_between(source: PlanningNode, target: PlanningNode) -> ArmAction:
    """
    Recovers the action leading from one node to an adjacent one.

    Equal nodes may carry the action of another predecessor, so the action is
    derived from the change of state rather than from the node label.

    :param source: The source node.
    :param target: The target node, one action away from the source.
    :return: The action.
    :raises ValueError: If the nodes are not one action apart.
    """
    if target.arm == source.arm - 1:
        return ArmAction.LEFT
    if target.arm == source.arm + 1:
        return ArmAction.RIGHT
    if source.holding is None and target.holding is not None:
        return ArmAction.PICK
    if source.holding is not None and target.holding is None:
        return ArmAction.DROP
    raise ValueError(f"No single action leads from {source} to {target}.")
