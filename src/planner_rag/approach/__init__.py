"""Public entry point: answer a question with a planner-orchestrated RAG flow."""

from planner_rag.approach.approach import ApproachStage, PlannerApproach

__all__ = ["ApproachStage", "PlannerApproach"]
