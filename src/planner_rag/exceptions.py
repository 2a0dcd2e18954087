"""Exception types for the planner approach.

Every failure of ``PlannerApproach.run`` surfaces as one of these. None of them
is retried or converted into a partial response by this package.
"""

from typing import Any, Dict, Optional


class PlannerRagError(Exception):
    """Base class for all planner_rag errors."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})


class ConfigurationError(PlannerRagError):
    """A template resource or the model deployment id is missing or invalid."""


class PlanningError(PlannerRagError):
    """The planner returned no usable plan."""


class ExecutionError(PlannerRagError):
    """A plan step failed or returned nothing usable."""


class RetrievalError(PlannerRagError):
    """The search collaborator failed."""


class UnsupportedOperationError(PlannerRagError):
    """The requested operation is not offered by this approach."""
