# src/planner_rag/capabilities/state.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class CapabilityParameter:
    name: str
    description: str
    # "$name" refers to a context variable; anything else is a literal value
    default: Optional[str] = None


@dataclass
class CapabilityOutput:
    result: str
    variables: Dict[str, str] = field(default_factory=dict)


class Capability(ABC):
    """A named unit the planner can invoke.

    The description, parameters and return description are what the planner sees
    when deciding whether to use it. `output_variable`, when set, is the context
    variable the capability populates in addition to the running result.
    """

    group: str
    name: str
    description: str
    returns: str
    output_variable: Optional[str] = None

    @property
    def parameters(self) -> List[CapabilityParameter]:
        return []

    @property
    def full_name(self) -> str:
        return f"{self.group}.{self.name}"

    @property
    def parameter_names(self) -> List[str]:
        return [p.name for p in self.parameters]

    def describe(self) -> str:
        lines = [f"{self.full_name}:", f"  description: {self.description}", "  inputs:"]
        for p in self.parameters:
            lines.append(f"    - {p.name}: {p.description}")
        lines.append(f"  returns: {self.returns}")
        return "\n".join(lines)

    @abstractmethod
    def invoke(self, **inputs: str) -> Optional[CapabilityOutput]:
        raise NotImplementedError
