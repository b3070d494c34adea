"""Main file containing the core world modeling tools."""

import pathlib
from typing import Any, Iterable, Sequence

from .physics import can_drop_on
from .types import FLOOR, FLOOR_DESCRIPTOR, Coordinate, ObjectDescriptor
from ..planning.actions import ArmAction, ExecutionResult, ExecutionStatus
from ..utils.logging import create_logger


class World:
    """
    Core world modeling class.

    A world is a row of columns holding stacks of objects, and a robot arm
    hovering over one of the columns that can hold at most one object.
    """

    def __init__(
        self,
        *,
        objects: dict[str, ObjectDescriptor | dict[str, Any]],
        stacks: Sequence[Sequence[str]],
        holding: str | None = None,
        arm: int = 0,
        max_stack_height: int | None = None,
        name: str = "world",
    ) -> None:
        """
        Creates a new world.

        :param objects: Object descriptors, or dictionaries describing them, by identifier.
        :param stacks: The columns of the world, each listing object identifiers bottom to top.
        :param holding: Identifier of the object held by the arm, if any.
        :param arm: The column the arm is above.
        :param max_stack_height: The number of objects a column can hold.
            If None, a column can hold as many objects as there are columns.
        :param name: Name of the world.
        :raises ValueError: If the world configuration is inconsistent.
        """
        self.name = name
        self.logger = create_logger(self.name)
        self.source_yaml_file: str | pathlib.Path | None = None

        self.objects: dict[str, ObjectDescriptor] = {}
        for obj_id, descriptor in objects.items():
            if obj_id == FLOOR:
                raise ValueError(f"Object identifier '{FLOOR}' is reserved.")
            if not isinstance(descriptor, ObjectDescriptor):
                descriptor = ObjectDescriptor.from_dict(descriptor)
            self.objects[obj_id] = descriptor

        self.stacks: list[list[str]] = [list(column) for column in stacks]
        self.holding = holding
        self.arm = arm
        self.max_stack_height = (
            max_stack_height if max_stack_height is not None else len(self.stacks)
        )
        self._validate()

        self.logger.info("Created world.")

    def _validate(self) -> None:
        """Checks the world invariants."""
        if len(self.stacks) == 0:
            raise ValueError("A world needs at least one column.")
        if not 0 <= self.arm < len(self.stacks):
            raise ValueError(
                f"Arm position {self.arm} outside of columns 0 to {len(self.stacks) - 1}."
            )

        placed = [obj_id for column in self.stacks for obj_id in column]
        if self.holding is not None:
            placed.append(self.holding)
        for obj_id in placed:
            if obj_id not in self.objects:
                raise ValueError(f"Unknown object in world: {obj_id}")
        duplicates = sorted({obj_id for obj_id in placed if placed.count(obj_id) > 1})
        if duplicates:
            raise ValueError(f"Objects placed more than once: {duplicates}")

    @property
    def num_columns(self) -> int:
        return len(self.stacks)

    def get_object(self, obj_id: str) -> ObjectDescriptor | None:
        """
        Gets the descriptor of an object by identifier.

        :param obj_id: The object identifier, or the floor.
        :return: The object descriptor, or None if no such object exists.
        """
        if obj_id == FLOOR:
            return FLOOR_DESCRIPTOR
        return self.objects.get(obj_id)

    def find_coordinate(self, obj_id: str) -> Coordinate | None:
        """
        Finds the position of an object in the world.

        :param obj_id: The object identifier.
        :return: The coordinate of the object, or None if it is held or absent.
        """
        return find_coordinate(obj_id, self.stacks)

    def column_has_room(self, column: int) -> bool:
        return len(self.stacks[column]) < self.max_stack_height

    def execute_action(self, action: ArmAction | str) -> ExecutionResult:
        """
        Executes a single arm action, modifying the world.

        :param action: The action, or its plan label (e.g. ``"p"``).
        :return: An object describing the execution result.
        """
        try:
            action = ArmAction(action)
        except ValueError:
            message = f"Invalid action: {action}"
            self.logger.warning(message)
            return ExecutionResult(
                status=ExecutionStatus.INVALID_ACTION, message=message
            )

        self.logger.debug(f"{action.description} at column {self.arm}.")
        message = None
        if action == ArmAction.LEFT:
            if self.arm == 0:
                message = "Arm is at the leftmost column. Cannot move left."
            else:
                self.arm -= 1
        elif action == ArmAction.RIGHT:
            if self.arm == self.num_columns - 1:
                message = "Arm is at the rightmost column. Cannot move right."
            else:
                self.arm += 1
        elif action == ArmAction.PICK:
            column = self.stacks[self.arm]
            if self.holding is not None:
                message = f"Arm is already holding {self.holding}."
            elif len(column) == 0:
                message = f"Column {self.arm} is empty. Cannot pick."
            else:
                self.holding = column.pop()
        elif action == ArmAction.DROP:
            column = self.stacks[self.arm]
            if self.holding is None:
                message = "Arm is not holding anything. Cannot drop."
            elif not self.column_has_room(self.arm):
                message = f"Column {self.arm} is full. Cannot drop."
            elif not can_drop_on(self.objects, self.holding, column):
                message = f"Cannot drop {self.holding} on {column[-1]}."
            else:
                column.append(self.holding)
                self.holding = None

        if message is not None:
            self.logger.warning(message)
            return ExecutionResult(
                status=ExecutionStatus.PRECONDITION_FAILURE, message=message
            )
        return ExecutionResult(status=ExecutionStatus.SUCCESS)

    def execute_plan(self, actions: Iterable[ArmAction | str]) -> ExecutionResult:
        """
        Executes a sequence of arm actions, stopping at the first failure.

        :param actions: The actions, or their plan labels.
        :return: An object describing the execution result.
        """
        result = ExecutionResult(status=ExecutionStatus.SUCCESS)
        for action in actions:
            result = self.execute_action(action)
            if not result.is_success():
                break
        return result

    def to_dict(self) -> dict[str, Any]:
        """
        Serializes the world to a dictionary.

        :return: A dictionary containing the world information.
        """
        return {
            "name": self.name,
            "params": {
                "arm": self.arm,
                "holding": self.holding,
                "max_stack_height": self.max_stack_height,
            },
            "objects": {
                obj_id: descriptor.to_dict()
                for obj_id, descriptor in self.objects.items()
            },
            "stacks": [list(column) for column in self.stacks],
        }

    def __repr__(self) -> str:
        """Returns printable string."""
        return f"World: {self.name}"

    def print_details(self) -> None:
        """Prints string with details."""
        world_str = f"World: {self.name}\n\tArm at column {self.arm}"
        if self.holding is not None:
            world_str += f", holding {self.holding}"
        for index, column in enumerate(self.stacks):
            world_str += f"\n\t{index}: {' '.join(column)}"
        print(world_str)


def find_coordinate(obj_id: str, stacks: Sequence[Sequence[str]]) -> Coordinate | None:
    """
    Finds the position of an object in a sequence of columns.

    :param obj_id: The object identifier.
    :param stacks: The columns, each listing object identifiers bottom to top.
    :return: The coordinate of the object, or None if it is not in any column.
    """
    for column_index, column in enumerate(stacks):
        for height, other_id in enumerate(column):
            if other_id == obj_id:
                return Coordinate(column_index, height)
    return None
