"""
Goal formulas, and how to test and estimate them in planning states.
"""

from dataclasses import dataclass
import math

from .state_space import PlanningNode
from ..core.relations import Relation, get_semantics
from ..core.types import FLOOR


@dataclass(frozen=True)
class Literal:
    """A relation that should (or should not) hold among some objects."""

    relation: Relation
    args: tuple[str, ...]
    polarity: bool = True

    def __str__(self) -> str:
        return literal_to_str(self)


Conjunction = list[Literal]
DNFFormula = list[Conjunction]


def literal_to_str(literal: Literal) -> str:
    """
    Renders a literal, for example ``ontop(a,b)``, or ``-ontop(a,b)`` if negative.

    :param literal: The literal.
    :return: The rendered literal.
    """
    sign = "" if literal.polarity else "-"
    return f"{sign}{literal.relation.value}({','.join(literal.args)})"


def formula_to_str(formula: DNFFormula) -> str:
    """
    Renders a formula, for example ``ontop(a,b) & holding(c) | holding(d)``.

    :param formula: The formula.
    :return: The rendered formula.
    """
    return " | ".join(
        " & ".join(literal_to_str(literal) for literal in conjunction)
        for conjunction in formula
    )


def _relation_holds(relation: Relation, args: tuple[str, ...], node: PlanningNode) -> bool:
    if relation == Relation.HOLDING:
        return node.holding == args[0]

    subject, reference = args
    # Held objects have no position.
    if node.holding in (subject, reference):
        return False
    subject_coord = node.find_coordinate(subject)
    if subject_coord is None:
        return False

    semantics = get_semantics(relation)
    if reference == FLOOR:
        return semantics.floor_test is not None and semantics.floor_test(subject_coord)

    reference_coord = node.find_coordinate(reference)
    if reference_coord is None or semantics.test is None:
        return False
    return semantics.test(subject_coord, reference_coord)


def literal_holds(literal: Literal, node: PlanningNode) -> bool:
    """
    Checks whether a literal holds in a planning state.

    :param literal: The literal.
    :param node: The planning state.
    :return: True if the literal holds, else False.
    """
    return _relation_holds(literal.relation, literal.args, node) == literal.polarity


def goal_reached(formula: DNFFormula, node: PlanningNode) -> bool:
    """
    Checks whether a planning state satisfies a formula.

    :param formula: The goal formula.
    :param node: The planning state.
    :return: True if every literal of some conjunction holds, else False.
    """
    return any(
        all(literal_holds(literal, node) for literal in conjunction)
        for conjunction in formula
    )


def literal_cost_estimate(literal: Literal, node: PlanningNode) -> int:
    """
    Estimates the number of actions needed to make a literal hold.

    :param literal: The literal.
    :param node: The planning state.
    :return: The estimated number of actions.
    """
    if not literal.polarity:
        return 0 if literal_holds(literal, node) else 1

    subject = literal.args[0]
    if literal.relation == Relation.HOLDING:
        if node.holding == subject:
            return 0
        cost = 0 if node.holding is None else 1  # Drop the held object.
        subject_coord = node.find_coordinate(subject)
        if subject_coord is not None:
            cost += abs(node.arm - subject_coord.column)
        return cost + 1  # Pick.

    if literal_holds(literal, node):
        return 0

    reference = literal.args[1]
    placement_cost = get_semantics(literal.relation).placement_cost
    if node.holding == subject:
        if reference == FLOOR:
            return 1  # Drop.
        reference_coord = node.find_coordinate(reference)
        distance = abs(reference_coord.column - node.arm) if reference_coord else 0
        return distance + placement_cost + 1

    subject_coord = node.find_coordinate(subject)
    subject_column = subject_coord.column if subject_coord else node.arm
    if node.holding == reference:
        # Drop the reference here, fetch the subject and bring it back.
        return 1 + 2 * abs(node.arm - subject_column) + 2

    cost = 0 if node.holding is None else 1  # Drop the held object.
    cost += abs(node.arm - subject_column) + 1  # Move to the subject and pick.
    if reference == FLOOR:
        return cost + 2  # Move to another column and drop.
    reference_coord = node.find_coordinate(reference)
    distance = abs(reference_coord.column - subject_column) if reference_coord else 0
    return cost + distance + placement_cost + 1


def heuristic(formula: DNFFormula, node: PlanningNode) -> float:
    """
    Estimates the remaining cost to satisfy a formula.

    Each conjunction is estimated by summing its literal estimates, and the
    cheapest conjunction is returned.

    :param formula: The goal formula.
    :param node: The planning state.
    :return: The estimated remaining cost.
    """
    best = math.inf
    for conjunction in formula:
        best = min(best, sum(literal_cost_estimate(lit, node) for lit in conjunction))
    return best
