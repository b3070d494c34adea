"""Defines the atomic arm actions and the results of executing them."""

from enum import Enum, IntEnum


class ArmAction(Enum):
    """The atomic actions the arm can perform, encoded by their plan labels."""

    LEFT = "l"
    RIGHT = "r"
    PICK = "p"
    DROP = "d"

    @property
    def description(self) -> str:
        """Human-readable description of the action."""
        return ACTION_DESCRIPTIONS[self]


ACTION_DESCRIPTIONS = {
    ArmAction.LEFT: "Moving left",
    ArmAction.RIGHT: "Moving right",
    ArmAction.PICK: "Picking up",
    ArmAction.DROP: "Dropping",
}


class ExecutionStatus(IntEnum):
    """Outcome of applying an arm action, or a plan of them, to a world."""

    SUCCESS = 0

    # The arm cannot perform the action in the current world.
    # For example, picking from an empty column or dropping a ball on a pyramid.
    PRECONDITION_FAILURE = 1

    # The label is not one of the arm actions.
    INVALID_ACTION = 2


class ExecutionResult:
    """Contains the result of executing actions or plans."""

    def __init__(self, status: ExecutionStatus, message: str | None = None) -> None:
        """
        Creates a new execution result instance.

        :param status: The resulting status code.
        :param message: Why the action failed, if it did.
        """
        self.status = status
        self.message = message

    def is_success(self) -> bool:
        """
        Helper function to determine if an execution result is successful.

        :return: True if successful, otherwise False.
        """
        return self.status == ExecutionStatus.SUCCESS

    def __repr__(self) -> str:
        """Returns printable string."""
        return f"Execution result with status: {self.status.name}"
