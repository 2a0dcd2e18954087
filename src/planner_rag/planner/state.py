# src/planner_rag/planner/state.py
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

VARIABLE_PREFIX = "$"
INPUT_VARIABLE = "input"


def is_variable_ref(binding: str) -> bool:
    return binding.startswith(VARIABLE_PREFIX) and len(binding) > 1


class PlanStep(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    capability: str = Field(
        ...,
        pattern=r"^[A-Za-z_][A-Za-z0-9_]*\.[A-Za-z_][A-Za-z0-9_]*$",
        description="Fully qualified capability name, e.g. InformationFinder.Search",
    )
    inputs: Dict[str, str] = Field(
        default_factory=dict,
        description="Parameter name -> '$variable' reference or literal value",
    )
    output_variable: Optional[str] = Field(
        default=None,
        pattern=r"^[A-Za-z_][A-Za-z0-9_]*$",
        description="Context variable that also receives this step's result",
    )

    def render(self) -> str:
        parts = [self.capability]
        parts.extend(f"{k}='{v}'" for k, v in self.inputs.items())
        line = " ".join(parts)
        if self.output_variable:
            line += f" => {self.output_variable}"
        return line


class PlannerOutput(BaseModel):
    """Structured output requested from the planning call."""

    model_config = ConfigDict(extra="forbid")

    steps: List[PlanStep] = Field(default_factory=list)


class Plan(BaseModel):
    """Ordered capability invocations for one request. Never cached across requests."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    goal: str = Field(..., min_length=1)
    steps: Tuple[PlanStep, ...] = Field(..., min_length=1)

    def to_plan_string(self) -> str:
        lines = [f"goal: {self.goal.strip()}", "steps:"]
        lines.extend(f"  - {step.render()}" for step in self.steps)
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.steps)
