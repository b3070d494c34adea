"""
Errors raised while interpreting commands and planning.

Every error has a stable ``code`` so that callers can react to the kind of
failure without parsing messages.
"""


class PlanningError(Exception):
    """Base class for recoverable interpretation and planning failures."""

    code = "planning_error"


class ReferenceAmbiguousError(PlanningError):
    """Raised when a "the"-quantified entity matches more than one object."""

    code = "reference_ambiguous"


class ReferenceUnsupportedError(PlanningError):
    """Raised for referring expressions that cannot denote anything, such as a red floor."""

    code = "reference_unsupported"


class RelationUnsupportedError(PlanningError):
    """Raised when a positional relation is requested with respect to an object without a position."""

    code = "relation_unsupported"


class SemanticallyInvalidError(PlanningError):
    """Raised when a command statically combines relations, forms and quantifiers that make no sense."""

    code = "semantically_invalid"


class UnsatisfiableError(PlanningError):
    """Raised when no physically legal goal can be built for a command."""

    code = "unsatisfiable"


class GoalUnreachableError(PlanningError):
    """Raised when the search finds no state satisfying the goal."""

    code = "goal_unreachable"
