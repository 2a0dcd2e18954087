"""Planner module: turns a fixed goal and the capability registry into an ordered plan.

The planner:
- Sees only the goal and the capability manual, never the user question
- Issues one structured-output call to the chat model
- Validates every step against the registry before anything is executed
"""

from planner_rag.planner.planner import SequentialPlanner, create_plan
from planner_rag.planner.state import Plan, PlanStep

__all__ = ["Plan", "PlanStep", "SequentialPlanner", "create_plan"]
