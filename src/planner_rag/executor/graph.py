# src/planner_rag/executor/graph.py

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

from langgraph.graph import END, START, StateGraph

from planner_rag.capabilities.registry import CapabilityRegistry
from planner_rag.capabilities.state import Capability
from planner_rag.exceptions import ExecutionError, PlannerRagError
from planner_rag.executor.state import PlanState
from planner_rag.planner.state import VARIABLE_PREFIX, Plan, PlanStep, is_variable_ref

logger = logging.getLogger(__name__)


def _lookup(binding: str, variables: Dict[str, str]):
    if is_variable_ref(binding):
        name = binding[len(VARIABLE_PREFIX):]
        if name not in variables:
            raise KeyError(name)
        return variables[name]
    return binding


def resolve_inputs(step: PlanStep, capability: Capability, variables: Dict[str, str], *, index: int) -> Dict[str, str]:
    """Bind every capability parameter.

    Order: explicit step binding, then the parameter default, then a context
    variable with the parameter's name.
    """
    inputs: Dict[str, str] = {}
    for param in capability.parameters:
        details = {"step": index, "capability": step.capability, "parameter": param.name}

        if param.name in step.inputs:
            try:
                inputs[param.name] = _lookup(step.inputs[param.name], variables)
            except KeyError as e:
                raise ExecutionError(f"Variable ${e.args[0]} is not set", details=details) from e
            continue

        if param.default is not None:
            try:
                inputs[param.name] = _lookup(param.default, variables)
                continue
            except KeyError:
                pass

        if param.name in variables:
            inputs[param.name] = variables[param.name]
            continue

        raise ExecutionError(f"Cannot bind parameter {param.name} of {step.capability}", details=details)
    return inputs


def make_step_node(index: int, step: PlanStep, capability: Capability) -> Callable[[PlanState], Dict[str, Any]]:
    def run_step(state: PlanState) -> Dict[str, Any]:
        variables = state.get("variables") or {}
        inputs = resolve_inputs(step, capability, variables, index=index)
        details = {"step": index, "capability": step.capability}

        logger.debug(f"Executing step {index}: {step.render()}")
        try:
            out = capability.invoke(**inputs)
        except PlannerRagError:
            raise
        except Exception as e:
            raise ExecutionError(
                f"Step {index} ({step.capability}) failed: {e}",
                details={**details, "exception_type": type(e).__name__},
            ) from e

        if out is None or out.result is None:
            raise ExecutionError(f"Step {index} ({step.capability}) returned no result", details=details)

        updates = dict(out.variables)
        if step.output_variable:
            updates[step.output_variable] = out.result

        return {"result": out.result, "variables": updates, "steps": [step.capability]}

    return run_step


def node_name(index: int, step: PlanStep) -> str:
    return f"step_{index}_{step.capability.replace('.', '_')}"


def make_plan_graph(plan: Plan, registry: CapabilityRegistry):
    """Compile the plan into a linear graph: one node per step, edges in declared order.

    No retry policy is attached; a failing step ends the run.
    """
    g = StateGraph(PlanState)

    names: List[str] = []
    for index, step in enumerate(plan.steps):
        capability = registry.get(step.capability)
        if capability is None:
            raise ExecutionError(
                f"Capability {step.capability} is not registered",
                details={"step": index, "capability": step.capability},
            )
        name = node_name(index, step)
        g.add_node(name, make_step_node(index, step, capability))
        names.append(name)

    g.add_edge(START, names[0])
    for prev, nxt in zip(names, names[1:]):
        g.add_edge(prev, nxt)
    g.add_edge(names[-1], END)

    return g.compile()
