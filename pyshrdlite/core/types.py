"""
Core types for PyShrdlite.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple


FLOOR = "floor"
""" Identifier of the floor, which can be referred to but never moved. """


class Form(Enum):
    """Enumeration of object forms."""

    BRICK = "brick"
    PLANK = "plank"
    BALL = "ball"
    BOX = "box"
    TABLE = "table"
    PYRAMID = "pyramid"
    FLOOR = "floor"


class Size(Enum):
    """Enumeration of object sizes."""

    SMALL = "small"
    LARGE = "large"


@dataclass(frozen=True)
class ObjectDescriptor:
    """Immutable description of an object in the world."""

    form: Form
    size: Size | None = None
    color: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ObjectDescriptor":
        """
        Creates an object descriptor from a dictionary.

        :param data: Dictionary with ``form``, ``size`` and ``color`` keys.
        :return: The object descriptor.
        :raises ValueError: If the form or size is not recognized.
        """
        try:
            form = Form(data["form"])
            size = Size(data["size"]) if data.get("size") is not None else None
        except KeyError as exception:
            raise ValueError(f"Object description missing key: {exception}")
        return cls(form=form, size=size, color=data.get("color"))

    @property
    def is_large(self) -> bool:
        return self.size == Size.LARGE

    @property
    def is_small(self) -> bool:
        return self.size == Size.SMALL

    def to_dict(self) -> dict[str, Any]:
        """
        Serializes the descriptor to a dictionary.

        :return: A dictionary containing the descriptor information.
        """
        return {
            "form": self.form.value,
            "size": self.size.value if self.size is not None else None,
            "color": self.color,
        }

    def __str__(self) -> str:
        words = [self.size.value if self.size else None, self.color, self.form.value]
        return " ".join(w for w in words if w)


FLOOR_DESCRIPTOR = ObjectDescriptor(form=Form.FLOOR)
""" Descriptor used for the floor, which has neither size nor color. """


class Coordinate(NamedTuple):
    """Position of an object in the world: its column and height in that column."""

    column: int
    height: int
