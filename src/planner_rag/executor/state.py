# src/planner_rag/executor/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, Iterator, List, Optional

from typing_extensions import TypedDict


# Reducers: step updates are merged into / appended to what earlier steps produced
def merge_variables(existing: Optional[Dict[str, str]], new: Optional[Dict[str, str]]) -> Dict[str, str]:
    if not existing:
        existing = {}
    if not new:
        return existing
    return {**existing, **new}


def add_steps(existing: Optional[List[str]], new: Optional[List[str]]) -> List[str]:
    if not existing:
        existing = []
    if not new:
        return existing
    return existing + new


class PlanState(TypedDict, total=False):
    # Input
    input: str

    # Running result of the last executed step
    result: str

    # Named variables ($input, $sources, step output variables)
    variables: Annotated[Dict[str, str], merge_variables]

    # Capability names in execution order
    steps: Annotated[List[str], add_steps]


@dataclass
class ExecutionContext:
    """Key/value store produced by one plan execution; discarded after the request."""

    variables: Dict[str, Any] = field(default_factory=dict)
    result: Optional[str] = None
    steps: List[str] = field(default_factory=list)

    def get(self, key: str, default: Any = None) -> Any:
        return self.variables.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.variables[key] = value

    def __getitem__(self, key: str) -> Any:
        return self.variables[key]

    def __contains__(self, key: object) -> bool:
        return key in self.variables

    def __iter__(self) -> Iterator[str]:
        return iter(self.variables)
