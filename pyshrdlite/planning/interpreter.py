"""
Interpretation of parsed commands as goal formulas.

The interpreter figures out which objects of the world the referring
expressions of a command denote, and turns the command into a formula in
disjunctive normal form over relational literals. Formulas only contain
literals that are physically possible.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Sequence

from .goals import DNFFormula, Conjunction, Literal, formula_to_str
from ..core.commands import (
    ANYFORM,
    Command,
    CommandType,
    Entity,
    Location,
    ObjectDescription,
    Quantifier,
)
from ..core.exceptions import (
    PlanningError,
    ReferenceAmbiguousError,
    ReferenceUnsupportedError,
    RelationUnsupportedError,
    SemanticallyInvalidError,
    UnsatisfiableError,
)
from ..core.physics import physically_legal
from ..core.relations import Relation, get_semantics
from ..core.types import FLOOR, Coordinate, Form
from ..core.world import World
from ..utils.logging import get_global_logger


@dataclass(frozen=True)
class Candidate:
    """An object a referring expression may denote."""

    obj_id: str
    coordinate: Coordinate | None = None
    """ Position of the object, or None for the floor and held objects. """


@dataclass
class Interpretation:
    """A command together with the goal formula it was interpreted as."""

    command: Command
    formula: DNFFormula

    def __str__(self) -> str:
        return formula_to_str(self.formula)


def interpret(commands: Sequence[Command], world: World) -> list[Interpretation]:
    """
    Interprets each of several candidate parses of a command.

    :param commands: The candidate parses.
    :param world: The current world.
    :return: The successful interpretations, in input order.
    :raises PlanningError: The first error encountered, if no command could be interpreted.
    """
    if len(commands) == 0:
        raise ValueError("No commands to interpret.")

    errors: list[PlanningError] = []
    interpretations = []
    for command in commands:
        try:
            formula = interpret_command(command, world)
        except PlanningError as exception:
            get_global_logger().debug(f"Could not interpret {command}: {exception}")
            errors.append(exception)
            continue
        interpretations.append(Interpretation(command=command, formula=formula))

    if len(interpretations) == 0:
        raise errors[0]
    return interpretations


def interpret_command(command: Command, world: World) -> DNFFormula:
    """
    Interprets a single command as a goal formula.

    :param command: The parsed command.
    :param world: The current world.
    :return: The goal formula.
    :raises PlanningError: If the command cannot be interpreted.
    """
    if command.command == CommandType.TAKE:
        entity = _require_entity(command)
        if entity.object.is_floor:
            raise SemanticallyInvalidError("The floor cannot be taken.")
        if parse_quantifier(entity.quantifier) == Quantifier.ALL:
            raise SemanticallyInvalidError(
                "The arm cannot pick up more than one object."
            )
        subject_groups = find_entities(entity, world)
        _require_subjects(subject_groups)
        return [
            [Literal(Relation.HOLDING, (subject.obj_id,))]
            for group in subject_groups
            for subject in group
        ]

    location = command.location
    if location is None:
        raise SemanticallyInvalidError(
            f'A "{command.command.value}" command needs a location.'
        )

    if command.command == CommandType.PUT:
        if world.holding is None:
            raise UnsatisfiableError("The arm is not holding anything.")
        check_location(location, Quantifier.THE)
        subject_groups = [[Candidate(world.holding)]]
    else:
        entity = _require_entity(command)
        if entity.object.is_floor:
            raise SemanticallyInvalidError("The floor cannot be moved.")
        check_location(location, parse_quantifier(entity.quantifier))
        subject_groups = find_entities(entity, world)
    _require_subjects(subject_groups)

    destinations = [
        candidate
        for group in find_entities(location.entity, world)
        for candidate in group
    ]
    if len(destinations) == 0:
        raise UnsatisfiableError("No object matches the destination.")

    formula = combine(
        location.relation,
        subject_groups,
        destinations,
        parse_quantifier(location.entity.quantifier),
        world,
    )
    if len(formula) == 0:
        raise UnsatisfiableError("The command is physically impossible.")
    return formula


def parse_quantifier(quantifier: str | Quantifier) -> Quantifier:
    """
    Parses a quantifier.

    :param quantifier: The quantifier, such as ``"the"``.
    :return: The parsed quantifier.
    :raises ReferenceUnsupportedError: If the quantifier is unknown.
    """
    try:
        return Quantifier(quantifier)
    except ValueError:
        raise ReferenceUnsupportedError(f'Unknown quantifier "{quantifier}".')


def check_location(location: Location, subject_quantifier: Quantifier | None) -> None:
    """
    Statically checks that a location makes sense, before looking at the world.

    :param location: The location.
    :param subject_quantifier: Quantifier of the objects related to the location, if known.
    :raises SemanticallyInvalidError: If the location makes no sense.
    """
    relation = location.relation
    description = location.entity.object
    form = description.form
    quantifier = parse_quantifier(location.entity.quantifier)

    if relation == Relation.HOLDING:
        raise SemanticallyInvalidError('"holding" is not a location.')
    if relation == Relation.INSIDE and form not in (None, ANYFORM, Form.BOX.value):
        raise SemanticallyInvalidError(f'"inside {form}" does not make sense.')
    if relation == Relation.ONTOP and form == Form.BALL.value:
        raise SemanticallyInvalidError("Nothing can be on top of a ball.")

    if get_semantics(relation).supports:
        if quantifier == Quantifier.ALL:
            raise SemanticallyInvalidError(
                f'"{relation.value} all" does not make sense, '
                "an object rests on a single object."
            )
        if (
            subject_quantifier == Quantifier.ALL
            and quantifier == Quantifier.THE
            and not description.is_floor
        ):
            raise SemanticallyInvalidError(
                f'"all ... {relation.value} the" does not make sense, '
                "a single object supports one object only."
            )


def find_entities(entity: Entity, world: World) -> list[list[Candidate]]:
    """
    Resolves a quantified entity to groups of candidate objects.

    :param entity: The entity.
    :param world: The current world.
    :return: A single group of at most one object for "the", one group per
        object for "any", and a single group of every object for "all".
    :raises PlanningError: If the entity cannot be resolved.
    """
    quantifier = parse_quantifier(entity.quantifier)
    candidates = find_objects(entity.object, world)
    if entity.object.location is not None:
        matches_location = location_filter(entity.object.location, world)
        candidates = [c for c in candidates if matches_location(c)]

    if quantifier == Quantifier.THE:
        if len(candidates) > 1:
            obj_ids = ", ".join(c.obj_id for c in candidates)
            raise ReferenceAmbiguousError(f'"the" is ambiguous, it matches {obj_ids}.')
        return [candidates]
    elif quantifier == Quantifier.ANY:
        return [[candidate] for candidate in candidates]
    return [candidates]


def find_objects(description: ObjectDescription, world: World) -> list[Candidate]:
    """
    Finds the objects matching a description, ignoring its location.

    Objects are listed column by column, bottom to top, followed by the held object.

    :param description: The object description.
    :param world: The current world.
    :return: The matching candidates.
    :raises ReferenceUnsupportedError: If the floor is given a size or color.
    """
    if description.is_floor:
        if description.size is not None or description.color is not None:
            raise ReferenceUnsupportedError("The floor has neither size nor color.")
        return [Candidate(FLOOR)]

    candidates = [
        Candidate(obj_id, Coordinate(column_index, height))
        for column_index, column in enumerate(world.stacks)
        for height, obj_id in enumerate(column)
    ]
    if world.holding is not None:
        candidates.append(Candidate(world.holding))
    return [c for c in candidates if _matches(description, world, c.obj_id)]


def _matches(description: ObjectDescription, world: World, obj_id: str) -> bool:
    descriptor = world.objects[obj_id]
    if description.form not in (None, ANYFORM, descriptor.form.value):
        return False
    if description.size is not None and (
        descriptor.size is None or description.size != descriptor.size.value
    ):
        return False
    if description.color is not None and description.color != descriptor.color:
        return False
    return True


def location_filter(location: Location, world: World) -> Callable[[Candidate], bool]:
    """
    Builds a test checking whether a candidate satisfies a location restriction.

    With "all", the candidate must stand in the relation to every object of
    the restricting entity, otherwise to at least one of them.

    :param location: The location restriction.
    :param world: The current world.
    :return: A predicate over candidates.
    :raises PlanningError: If the restriction cannot be evaluated.
    """
    check_location(location, None)
    semantics = get_semantics(location.relation)
    quantifier = parse_quantifier(location.entity.quantifier)
    references = [
        candidate
        for group in find_entities(location.entity, world)
        for candidate in group
    ]

    tests: list[tuple[str, Callable[[Coordinate], bool]]] = []
    held: list[str] = []
    for reference in references:
        if reference.obj_id == FLOOR:
            floor_test = semantics.floor_test
            if floor_test is None:
                raise RelationUnsupportedError(
                    f'"{location.relation.value} the floor" does not make sense.'
                )
            tests.append((FLOOR, floor_test))
        elif reference.coordinate is None:
            held.append(reference.obj_id)
        else:
            assert semantics.test is not None
            test = _bind_reference(semantics.test, reference.coordinate)
            tests.append((reference.obj_id, test))

    # A held reference can only be ignored if some other reference remains.
    if held and (quantifier == Quantifier.ALL or len(tests) == 0):
        raise RelationUnsupportedError(
            f'"{location.relation.value} {held[0]}" does not make sense, '
            f"{held[0]} is being held."
        )

    def matches(candidate: Candidate) -> bool:
        if candidate.coordinate is None:
            return False
        results = [
            test(candidate.coordinate)
            for ref_id, test in tests
            if ref_id != candidate.obj_id
        ]
        if len(results) == 0:
            return False
        return all(results) if quantifier == Quantifier.ALL else any(results)

    return matches


def _bind_reference(
    test: Callable[[Coordinate, Coordinate], bool], reference: Coordinate
) -> Callable[[Coordinate], bool]:
    return lambda coordinate: test(coordinate, reference)


def combine(
    relation: Relation,
    subject_groups: list[list[Candidate]],
    destinations: list[Candidate],
    destination_quantifier: Quantifier,
    world: World,
) -> DNFFormula:
    """
    Combines subjects and destinations into a formula of physically legal literals.

    - With "all" destinations, each subject group relates to every destination.
    - Otherwise, each subject group relates to a single destination. When the
      relation means direct support, several subjects need distinct destinations,
      and only the legal destinations of each subject are considered.

    :param relation: The relation between subjects and destinations.
    :param subject_groups: Groups of subjects, each of which must be satisfied together.
    :param destinations: The candidate destinations.
    :param destination_quantifier: Quantifier of the destinations.
    :param world: The current world.
    :return: The formula, which is empty if every combination is illegal.
    """
    supports = get_semantics(relation).supports
    formula: DNFFormula = []
    for subjects in subject_groups:
        if len(subjects) == 0:
            continue
        if destination_quantifier == Quantifier.ALL:
            pairings: Iterable[list[tuple[Candidate, Candidate]]] = [
                [(s, d) for s in subjects for d in destinations if s.obj_id != d.obj_id]
            ]
        elif len(subjects) == 1 or not supports or destinations[0].obj_id == FLOOR:
            pairings = ([(s, d) for s in subjects] for d in destinations)
        else:
            options = [
                [d for d in destinations if _legal_pair(relation, s, d, world)]
                for s in subjects
            ]
            pairings = (
                list(zip(subjects, assignment))
                for assignment in distinct_assignments(options)
            )

        for pairs in pairings:
            conjunction = _legal_conjunction(relation, pairs, world)
            if conjunction is not None:
                formula.append(conjunction)
    return formula


def distinct_assignments(
    options: list[list[Candidate]],
) -> Iterator[list[Candidate]]:
    """
    Enumerates the ways of choosing one option per entry, all of them distinct.

    Choices are made by backtracking, in the order the options are listed.
    A partial choice is only extended if the remaining entries can still be
    completed, so no time is spent on dead ends.

    :param options: For each entry, the candidates it may be assigned.
    :return: An iterator over the complete assignments, one candidate per entry.
    """
    chosen: list[Candidate] = []
    used: set[str] = set()

    def extend(index: int) -> Iterator[list[Candidate]]:
        if index == len(options):
            yield list(chosen)
            return
        for option in options[index]:
            if option.obj_id in used:
                continue
            used.add(option.obj_id)
            chosen.append(option)
            if _can_complete(options[index + 1 :], used):
                yield from extend(index + 1)
            chosen.pop()
            used.discard(option.obj_id)

    if _can_complete(options, used):
        yield from extend(0)


def _can_complete(options: list[list[Candidate]], used: set[str]) -> bool:
    """Checks for a matching of every entry to a distinct unused option."""
    owners: dict[str, int] = {}

    def augment(index: int, visited: set[str]) -> bool:
        for option in options[index]:
            obj_id = option.obj_id
            if obj_id in used or obj_id in visited:
                continue
            visited.add(obj_id)
            if obj_id not in owners or augment(owners[obj_id], visited):
                owners[obj_id] = index
                return True
        return False

    return all(augment(index, set()) for index in range(len(options)))


def _legal_pair(
    relation: Relation, subject: Candidate, destination: Candidate, world: World
) -> bool:
    return physically_legal(
        subject.obj_id,
        world.get_object(subject.obj_id),
        relation,
        destination.obj_id,
        world.get_object(destination.obj_id),
    )


def _legal_conjunction(
    relation: Relation, pairs: list[tuple[Candidate, Candidate]], world: World
) -> Conjunction | None:
    literals = []
    for subject, destination in pairs:
        if not _legal_pair(relation, subject, destination, world):
            return None
        literals.append(Literal(relation, (subject.obj_id, destination.obj_id)))
    return literals or None


def _require_entity(command: Command) -> Entity:
    if command.entity is None:
        raise SemanticallyInvalidError(
            f'A "{command.command.value}" command needs an object.'
        )
    return command.entity


def _require_subjects(subject_groups: list[list[Candidate]]) -> None:
    if not any(subject_groups):
        raise UnsatisfiableError("No object matches the description.")
