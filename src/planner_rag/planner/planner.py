# src/planner_rag/planner/planner.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Set

from langchain_core.prompts import ChatPromptTemplate
from pydantic import ValidationError

from planner_rag.capabilities.registry import CapabilityRegistry
from planner_rag.config import PlannerSettings
from planner_rag.exceptions import PlanningError
from planner_rag.planner.prompts.planner import GOAL_MESSAGE, PLANNER_PROMPT
from planner_rag.planner.state import INPUT_VARIABLE, VARIABLE_PREFIX, Plan, PlannerOutput, is_variable_ref
from planner_rag.utils import observe

logger = logging.getLogger(__name__)


class SequentialPlanner:
    """Asks the chat model for an ordered plan over the registry's capabilities.

    The plan is computed against the abstract goal only; the user question is bound
    later, at execution time. Output is only as repeatable as the model is.
    """

    def __init__(self, llm, registry: CapabilityRegistry, settings: Optional[PlannerSettings] = None):
        self.registry = registry
        self.settings = settings or PlannerSettings()

        prompt = ChatPromptTemplate.from_messages(
            [
                ("system", PLANNER_PROMPT),
                ("human", GOAL_MESSAGE),
            ]
        )
        model = llm.with_structured_output(PlannerOutput, method="function_calling")
        self._chain = prompt | model

    @observe(name="planner.create_plan")
    def create_plan(self, goal: str) -> Plan:
        available = self.registry.available(self.settings)
        if not available:
            raise PlanningError("No capabilities available for planning", details={"goal": goal})

        payload = {
            "goal": goal.strip(),
            "available_functions": "\n\n".join(cap.describe() for cap in available),
        }

        try:
            raw = self._chain.invoke(
                payload,
                config={
                    "configurable": {
                        "temperature": self.settings.temperature,
                        "max_tokens": self.settings.max_tokens,
                    },
                    "run_name": "SequentialPlanner",
                },
            )
        except Exception as e:
            raise PlanningError(
                f"Planner call failed: {e}",
                details={"exception_type": type(e).__name__},
            ) from e

        if raw is None:
            raise PlanningError("Planner returned no plan", details={"goal": goal})

        try:
            output = PlannerOutput.model_validate(raw)
        except ValidationError as e:
            raise PlanningError(
                "Planner structured output failed validation.",
                details={"validation_errors": e.errors()},
            ) from e

        if not output.steps:
            raise PlanningError("Planner returned an empty plan", details={"goal": goal})

        self._validate(output, allowed={cap.full_name for cap in available})

        plan = Plan(goal=goal, steps=tuple(output.steps))
        logger.info(f"Plan created with {len(plan)} steps")
        logger.debug(f"Plan calculated is [{plan.to_plan_string()}]")
        return plan

    def _validate(self, output: PlannerOutput, *, allowed: Set[str]) -> None:
        defined = {INPUT_VARIABLE}

        for index, step in enumerate(output.steps):
            details: Dict[str, Any] = {"step": index, "capability": step.capability}

            if step.capability not in allowed:
                raise PlanningError(f"Plan references unknown capability {step.capability}", details=details)

            capability = self.registry.get(step.capability)
            unknown = set(step.inputs) - set(capability.parameter_names)
            if unknown:
                raise PlanningError(
                    f"Plan passes unknown parameters {sorted(unknown)} to {step.capability}",
                    details=details,
                )

            for binding in step.inputs.values():
                if is_variable_ref(binding) and binding[len(VARIABLE_PREFIX):] not in defined:
                    raise PlanningError(
                        f"Plan step {index} reads {binding} before it is set",
                        details=details,
                    )

            # Unbound parameters resolve the way the executor does: default, then same-named variable
            for param in capability.parameters:
                if param.name in step.inputs:
                    continue
                default = param.default
                if default is not None and (not is_variable_ref(default) or default[len(VARIABLE_PREFIX):] in defined):
                    continue
                if param.name in defined:
                    continue
                raise PlanningError(
                    f"Plan step {index} leaves parameter {param.name} of {step.capability} unbound",
                    details={**details, "parameter": param.name},
                )

            if capability.output_variable:
                defined.add(capability.output_variable)
            if step.output_variable:
                defined.add(step.output_variable)


def create_plan(goal: str, registry: CapabilityRegistry, llm, settings: Optional[PlannerSettings] = None) -> Plan:
    return SequentialPlanner(llm, registry, settings).create_plan(goal)
