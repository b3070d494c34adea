"""
Spatial relations between objects and the single table describing what they mean.

The goal test, the heuristic, the physics validator and the resolution of
location restrictions all look relations up in :data:`RELATIONS`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .types import Coordinate


class Relation(Enum):
    """Enumeration of relations that can appear in literals and commands."""

    HOLDING = "holding"
    ONTOP = "ontop"
    INSIDE = "inside"
    ABOVE = "above"
    UNDER = "under"
    LEFTOF = "leftof"
    RIGHTOF = "rightof"
    BESIDE = "beside"


@dataclass(frozen=True)
class RelationSemantics:
    """Describes how a relation is evaluated and estimated."""

    test: Callable[[Coordinate, Coordinate], bool] | None
    """ Test between the subject and reference coordinates, if the relation is positional. """
    floor_test: Callable[[Coordinate], bool] | None = None
    """ Test of the subject coordinate against the floor, if the floor is a valid reference. """
    supports: bool = False
    """ Whether the reference directly supports the subject, leaving room for one subject only. """
    placement_cost: int = 0
    """ Extra arm moves the heuristic expects when placing relative to the reference. """


RELATIONS: dict[Relation, RelationSemantics] = {
    Relation.HOLDING: RelationSemantics(test=None),
    Relation.LEFTOF: RelationSemantics(
        test=lambda subj, ref: subj.column < ref.column,
    ),
    Relation.RIGHTOF: RelationSemantics(
        test=lambda subj, ref: subj.column > ref.column,
    ),
    Relation.ABOVE: RelationSemantics(
        test=lambda subj, ref: subj.column == ref.column and subj.height > ref.height,
        floor_test=lambda subj: True,
    ),
    Relation.UNDER: RelationSemantics(
        test=lambda subj, ref: subj.column == ref.column and subj.height < ref.height,
    ),
    Relation.BESIDE: RelationSemantics(
        test=lambda subj, ref: abs(subj.column - ref.column) == 1,
        placement_cost=1,  # Worst case, the far side of the reference.
    ),
    Relation.ONTOP: RelationSemantics(
        test=lambda subj, ref: subj.column == ref.column
        and subj.height - ref.height == 1,
        floor_test=lambda subj: subj.height == 0,
        supports=True,
    ),
    Relation.INSIDE: RelationSemantics(
        test=lambda subj, ref: subj.column == ref.column
        and subj.height - ref.height == 1,
        supports=True,
    ),
}


def get_semantics(relation: Relation) -> RelationSemantics:
    """
    Get the semantics of a relation.

    :param relation: The relation.
    :return: The semantics of the relation.
    """
    return RELATIONS[relation]


def parse_relation(name: str | Relation) -> Relation:
    """
    Parses a relation name into a :class:`Relation`.

    :param name: Relation name, such as ``"ontop"``.
    :return: The relation.
    :raises ValueError: If the relation is unknown.
    """
    if isinstance(name, Relation):
        return name
    try:
        return Relation(name)
    except ValueError:
        raise ValueError(f"Unknown relation: {name}")
