"""
Physical laws of the block world.

The same predicate is used when building goal formulas and when deciding
which drops the arm may perform, so that goals are never stated that the
arm could not bring about.
"""

from typing import Callable, Mapping, Sequence

from .relations import Relation, get_semantics
from .types import FLOOR, Form, ObjectDescriptor


def _legal_inside(src: ObjectDescriptor, dst: ObjectDescriptor) -> bool:
    if dst.form != Form.BOX:
        return False
    if src.is_large and dst.is_small:
        return False
    # Boxes, planks and pyramids only fit in a strictly larger box.
    if src.form in (Form.BOX, Form.PLANK, Form.PYRAMID) and src.size == dst.size:
        return False
    return True


def _legal_ontop(src: ObjectDescriptor, dst: ObjectDescriptor) -> bool:
    if dst.form in (Form.BOX, Form.BALL):
        return False
    if src.is_large and dst.is_small:
        return False
    if src.form == Form.BALL:
        return False
    if src.form == Form.BOX:
        if src.is_small and dst.is_small and dst.form in (Form.PYRAMID, Form.PLANK):
            return False
        if src.is_large and dst.is_large and dst.form == Form.PYRAMID:
            return False
    return True


def _legal_under(src: ObjectDescriptor, dst: ObjectDescriptor) -> bool:
    if src.is_small and dst.is_large:
        return False
    if src.form == Form.BALL:
        return False
    return True


PHYSICS_CHECKS: dict[Relation, Callable[[ObjectDescriptor, ObjectDescriptor], bool]] = {
    Relation.INSIDE: _legal_inside,
    Relation.ONTOP: _legal_ontop,
    Relation.UNDER: _legal_under,
}
""" Relation-specific constraints. Relations not listed here are always legal. """


def is_floor(obj_id: str, descriptor: ObjectDescriptor | None) -> bool:
    """
    Checks whether an object identifier and descriptor denote the floor.

    :param obj_id: Object identifier.
    :param descriptor: Object descriptor, or None if the object has none.
    :return: True if this is the floor, else False.
    """
    return obj_id == FLOOR or descriptor is None or descriptor.form == Form.FLOOR


def physically_legal(
    src_id: str,
    src: ObjectDescriptor | None,
    relation: Relation,
    dst_id: str,
    dst: ObjectDescriptor | None,
) -> bool:
    """
    Decides whether the source object can stand in a relation to the destination.

    :param src_id: Identifier of the source object.
    :param src: Descriptor of the source object.
    :param relation: The relation between source and destination.
    :param dst_id: Identifier of the destination object, or the floor.
    :param dst: Descriptor of the destination object, or None for the floor.
    :return: True if the relation is physically legal, else False.
    """
    if src_id == dst_id:
        return False
    if is_floor(src_id, src):
        return False
    if is_floor(dst_id, dst):
        return get_semantics(relation).floor_test is not None

    assert src is not None and dst is not None
    check = PHYSICS_CHECKS.get(relation)
    return check is None or check(src, dst)


def drop_relation(top: ObjectDescriptor) -> Relation:
    """
    Get the relation an object dropped on a column top will have to that top.

    :param top: Descriptor of the object on top of the column.
    :return: INSIDE for boxes, ONTOP otherwise.
    """
    return Relation.INSIDE if top.form == Form.BOX else Relation.ONTOP


def can_drop_on(
    objects: Mapping[str, ObjectDescriptor], held: str, column: Sequence[str]
) -> bool:
    """
    Checks whether the held object may be dropped on top of a column.

    This ignores the column capacity, which depends on the world.

    :param objects: Object descriptors by identifier.
    :param held: Identifier of the held object.
    :param column: The column contents, bottom to top.
    :return: True if the drop is physically legal, else False.
    """
    if len(column) == 0:
        return True
    top_id = column[-1]
    top = objects[top_id]
    return physically_legal(held, objects[held], drop_relation(top), top_id, top)
