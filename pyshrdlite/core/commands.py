"""
Representation of parsed commands.

Commands are produced by a natural language parser. They describe what the
user asked for in terms of quantified object descriptions, which the
interpreter resolves against a world.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .relations import Relation, parse_relation
from .types import Form


class Quantifier(Enum):
    """Quantifiers of referring expressions."""

    THE = "the"
    ANY = "any"
    ALL = "all"


class CommandType(Enum):
    """The kinds of commands the arm understands."""

    TAKE = "take"
    PUT = "put"
    MOVE = "move"


ANYFORM = "anyform"
""" Form keyword matching objects of any form. """


@dataclass(frozen=True)
class ObjectDescription:
    """
    Description of the objects a referring expression denotes.

    Any field left as None matches every object. The optional location
    restricts the matches to objects standing in a relation to another entity.
    """

    form: str | None = None
    size: str | None = None
    color: str | None = None
    location: "Location | None" = None

    @property
    def is_floor(self) -> bool:
        return self.form == Form.FLOOR.value

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ObjectDescription":
        """
        Creates an object description from the parser's dictionary format.

        Restricted descriptions are given as ``{"object": {...}, "location": {...}}``.

        :param data: The parsed object.
        :return: The object description.
        """
        if "object" in data:
            inner = cls.from_dict(data["object"])
            if inner.location is not None:
                raise ValueError(
                    "Objects with more than one location restriction are not supported."
                )
            location = Location.from_dict(data["location"])
            return cls(
                form=inner.form,
                size=inner.size,
                color=inner.color,
                location=location,
            )
        return cls(form=data.get("form"), size=data.get("size"), color=data.get("color"))


@dataclass(frozen=True)
class Entity:
    """A quantified object description, such as "all red balls"."""

    quantifier: str
    object: ObjectDescription

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entity":
        return cls(
            quantifier=data["quantifier"],
            object=ObjectDescription.from_dict(data["object"]),
        )


@dataclass(frozen=True)
class Location:
    """A relation to an entity, such as "inside the box"."""

    relation: Relation
    entity: Entity

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Location":
        return cls(
            relation=parse_relation(data["relation"]),
            entity=Entity.from_dict(data["entity"]),
        )


@dataclass(frozen=True)
class Command:
    """A parsed command."""

    command: CommandType
    entity: Entity | None = None
    location: Location | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Command":
        """
        Creates a command from the parser's dictionary format.

        :param data: The parsed command.
        :return: The command.
        :raises ValueError: If the command type or a relation is unknown.
        """
        try:
            command = CommandType(data["command"])
        except ValueError:
            raise ValueError(f"Unknown command: {data['command']}")
        entity = Entity.from_dict(data["entity"]) if data.get("entity") else None
        location = Location.from_dict(data["location"]) if data.get("location") else None
        return cls(command=command, entity=entity, location=location)
