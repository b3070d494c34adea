"""
Planner driver: turns interpretations of a command into plans for the arm.
"""

from dataclasses import dataclass, field
import pathlib
from typing import Any, Sequence

from .goals import DNFFormula, formula_to_str, goal_reached, heuristic
from .interpreter import Interpretation
from .state_space import PlanningNode, StateSpaceGraph, action_between
from ..core.exceptions import GoalUnreachableError, PlanningError
from ..core.world import World
from ..core.yaml_utils import load_yaml_section
from ..utils.logging import get_global_logger
from ..utils.search_graph import GraphSearchPlanner


PLANNER_OPTION_NAMES = ("time_limit", "already_true_message")
""" Keys accepted in the ``planner`` section of a world file. """


class PlannerOptions:
    """Options for planning."""

    def __init__(
        self,
        time_limit: float | None = 5.0,
        already_true_message: str = "That is already true!",
    ) -> None:
        """
        Creates a new set of planner options.

        :param time_limit: Maximum time to search for each interpretation, in seconds.
            If None, the search runs until the state space is exhausted.
        :param already_true_message: The plan reported when the goal already holds.
        """
        self.time_limit = time_limit
        self.already_true_message = already_true_message

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlannerOptions":
        """
        Creates planner options from a dictionary, such as a YAML ``planner`` section.

        :param data: The options dictionary.
        :return: The planner options.
        :raises ValueError: If the dictionary contains unknown options.
        """
        unknown = sorted(set(data) - set(PLANNER_OPTION_NAMES))
        if unknown:
            raise ValueError(f"Unknown planner options: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_file(cls, filename: str | pathlib.Path) -> "PlannerOptions":
        """
        Reads planner options from the ``planner`` section of a YAML file.

        :param filename: Path to the YAML file.
        :return: The planner options, with defaults if the section is absent.
        """
        return cls.from_dict(load_yaml_section(filename, "planner"))

    def to_dict(self) -> dict[str, Any]:
        """
        Serializes the planner options to a dictionary.

        :return: A dictionary containing the planner options.
        """
        return {name: getattr(self, name) for name in PLANNER_OPTION_NAMES}


@dataclass
class PlannerResult(Interpretation):
    """An interpretation together with the plan achieving it."""

    plan: list[str] = field(default_factory=list)

    @property
    def plan_str(self) -> str:
        return ", ".join(self.plan)


def plan(
    interpretations: Sequence[Interpretation],
    world: World,
    options: PlannerOptions | None = None,
) -> list[PlannerResult]:
    """
    Plans for each interpretation of a command.

    A failure for one interpretation does not prevent planning for the others.

    :param interpretations: The interpretations, in order of preference.
    :param world: The current world.
    :param options: The planner options. Uses the defaults if not specified.
    :return: The successful results, in input order.
    :raises PlanningError: The first error encountered, if planning failed for every interpretation.
    """
    if len(interpretations) == 0:
        raise ValueError("No interpretations to plan for.")
    options = options or PlannerOptions()

    errors: list[PlanningError] = []
    results = []
    for interpretation in interpretations:
        get_global_logger().info(f"Planning for {interpretation}")
        try:
            actions = plan_interpretation(
                interpretation.formula, world, time_limit=options.time_limit
            )
        except PlanningError as exception:
            get_global_logger().warning(f"Planning failed: {exception}")
            errors.append(exception)
            continue

        if len(actions) == 0:
            actions = [options.already_true_message]
        results.append(
            PlannerResult(
                command=interpretation.command,
                formula=interpretation.formula,
                plan=actions,
            )
        )

    if len(results) == 0:
        raise errors[0]
    return results


def plan_interpretation(
    formula: DNFFormula, world: World, time_limit: float | None = None
) -> list[str]:
    """
    Plans a sequence of arm actions that puts the world into a state satisfying a formula.

    :param formula: The goal formula.
    :param world: The current world, which is not modified.
    :param time_limit: Maximum time to search, in seconds.
    :return: The action labels, empty if the formula already holds.
    :raises GoalUnreachableError: If no plan was found.
    """
    graph = StateSpaceGraph.from_world(world)
    start = PlanningNode.from_world(world)
    planner = GraphSearchPlanner(
        graph,
        is_goal=lambda node: goal_reached(formula, node),
        heuristic=lambda node: heuristic(formula, node),
        time_limit=time_limit,
    )

    result = planner.search(start)
    if result is None:
        if planner.timed_out:
            raise GoalUnreachableError(
                f"No plan found for {formula_to_str(formula)} within {time_limit} seconds."
            )
        raise GoalUnreachableError(f"{formula_to_str(formula)} is impossible to reach.")

    nodes = [start] + result.path
    return [
        action_between(source, target).value
        for source, target in zip(nodes[:-1], nodes[1:])
    ]
