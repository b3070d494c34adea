"""Utilities to create worlds from YAML files."""

import os
import pathlib
from typing import Any

import yaml

from .world import World
from ..utils.general import replace_special_yaml_tokens


class WorldYamlLoader:
    """Creates world models from YAML files."""

    def from_yaml(self, world_dict: dict[str, Any]) -> World:
        """
        Load a world from a YAML description.

        The description has the following sections:

        - ``name`` : The world name (optional).
        - ``params`` : ``arm``, ``holding`` and ``max_stack_height`` (all optional).
        - ``objects`` : Mapping of object identifiers to ``form``, ``size`` and ``color``.
        - ``stacks`` : List of columns, each listing object identifiers bottom to top.

        :param world_dict: Dictionary containing all the world information.
        :return: World model instance.
        """
        self.data = world_dict
        params = self.data.get("params", {})
        if "stacks" not in self.data:
            raise ValueError("World description must contain stacks.")

        return World(
            name=self.data.get("name", "world"),
            objects=self.data.get("objects", {}),
            stacks=[column or [] for column in self.data["stacks"]],
            **params,
        )

    def from_file(self, filename: str | pathlib.Path) -> World:
        """
        Load a world from a YAML file.

        :param filename: Path to YAML file describing the world.
            The ``$DATA`` token refers to the bundled example worlds.
        :return: World model instance.
        """
        filename = replace_special_yaml_tokens(filename)
        with open(filename) as file:
            world_dict = yaml.load(file, Loader=yaml.FullLoader)
        if "name" not in world_dict:
            world_dict["name"] = os.path.splitext(os.path.basename(filename))[0]
        world = self.from_yaml(world_dict)
        world.source_yaml_file = filename
        return world


def load_yaml_section(filename: str | pathlib.Path, section: str) -> dict[str, Any]:
    """
    Reads a single top-level section from a YAML file.

    :param filename: Path to the YAML file.
    :param section: Name of the section.
    :return: The section contents, or an empty dictionary if the section is absent.
    """
    filename = replace_special_yaml_tokens(filename)
    with open(filename) as file:
        data = yaml.load(file, Loader=yaml.FullLoader)
    section_data = data.get(section) or {}
    assert isinstance(section_data, dict)
    return section_data
