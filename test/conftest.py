import pathlib

import pytest

from pyshrdlite.core import World, WorldYamlLoader
from pyshrdlite.utils.general import get_data_folder


def load_world(world_config_file: str) -> World:
    """Loads a world from a YAML file in the data folder."""
    return WorldYamlLoader().from_file(
        pathlib.Path(get_data_folder()) / world_config_file
    )


@pytest.fixture
def small_world() -> World:
    """Small world with five columns, where the arm holds a large green brick."""
    return load_world("small.yaml")


@pytest.fixture
def medium_world() -> World:
    """Medium world with ten columns and an empty arm."""
    return load_world("medium.yaml")


@pytest.fixture
def two_column_world() -> World:
    """A box in the first column and a ball in the second one."""
    return World(
        objects={
            "a": {"form": "box", "size": "large", "color": "red"},
            "b": {"form": "ball", "size": "small", "color": "white"},
        },
        stacks=[["a"], ["b"]],
    )
