# src/planner_rag/executor/executor.py

from __future__ import annotations

import logging

from planner_rag.capabilities.registry import CapabilityRegistry
from planner_rag.executor.graph import make_plan_graph
from planner_rag.executor.state import ExecutionContext
from planner_rag.planner.state import INPUT_VARIABLE, Plan

logger = logging.getLogger(__name__)

# Headroom above the step count for the graph's superstep limit
RECURSION_HEADROOM = 5


class PlanExecutor:
    """Runs each plan step in declared order, one at a time.

    Every step's collaborator call completes before the next step starts, so the
    order of calls seen by the search backend and the chat model matches the plan.
    """

    def __init__(self, registry: CapabilityRegistry):
        self.registry = registry

    def execute_plan(self, plan: Plan, question: str) -> ExecutionContext:
        graph = make_plan_graph(plan, self.registry)

        state_in = {
            "input": question,
            "variables": {INPUT_VARIABLE: question},
            "steps": [],
        }
        out = graph.invoke(state_in, config={"recursion_limit": len(plan) + RECURSION_HEADROOM})

        context = ExecutionContext(
            variables=dict(out.get("variables") or {}),
            result=out.get("result"),
            steps=list(out.get("steps") or []),
        )
        logger.debug(f"Plan executed: {len(context.steps)} steps, variables={sorted(context.variables)}")
        return context


def execute_plan(plan: Plan, question: str, registry: CapabilityRegistry) -> ExecutionContext:
    return PlanExecutor(registry).execute_plan(plan, question)
