"""Executor module: runs a plan step by step against the user's question."""

from planner_rag.executor.executor import PlanExecutor, execute_plan
from planner_rag.executor.state import ExecutionContext

__all__ = ["ExecutionContext", "PlanExecutor", "execute_plan"]
