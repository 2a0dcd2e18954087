# src/planner_rag/approach/approach.py
"""Planner approach: the chat model plans which capabilities to call, then the plan runs.

Stages of run():
- BUILDING_REGISTRY: InformationFinder + RAG.AnswerQuestion, bound to this request's options
- PLANNING: one planning call against the fixed goal
- EXECUTING: the plan runs against the actual question
- DONE, or FAILED when any stage raises

Nothing is cached between calls; concurrent run() calls share only the injected
collaborators and settings.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional, Type

from langchain_core.embeddings import Embeddings

from planner_rag.capabilities.adapters import SearchAdapter
from planner_rag.capabilities.information_finder import SOURCES_VARIABLE, InformationFinder
from planner_rag.capabilities.registry import CapabilityRegistry, build_registry
from planner_rag.config import ApproachSettings
from planner_rag.exceptions import (
    ConfigurationError,
    ExecutionError,
    PlannerRagError,
    PlanningError,
    UnsupportedOperationError,
)
from planner_rag.executor.executor import PlanExecutor
from planner_rag.planner.planner import SequentialPlanner
from planner_rag.state import SOURCES_PLACEHOLDER, RAGOptions, RAGResponse
from planner_rag.utils import observe

logger = logging.getLogger(__name__)


class ApproachStage(str, Enum):
    BUILDING_REGISTRY = "building_registry"
    PLANNING = "planning"
    EXECUTING = "executing"
    DONE = "done"
    FAILED = "failed"


# Error type used when a stage fails with something that is not a PlannerRagError
STAGE_ERRORS = {
    ApproachStage.BUILDING_REGISTRY: ConfigurationError,
    ApproachStage.PLANNING: PlanningError,
    ApproachStage.EXECUTING: ExecutionError,
}


class PlannerApproach:
    def __init__(
        self,
        search: SearchAdapter,
        llm,
        settings: ApproachSettings,
        *,
        embeddings: Optional[Embeddings] = None,
    ):
        self.search = search
        self.llm = llm
        self.settings = settings
        self.embeddings = embeddings

    def build_registry(self, options: RAGOptions) -> CapabilityRegistry:
        return build_registry(
            options,
            search=self.search,
            llm=self.llm,
            embeddings=self.embeddings,
            template_root=self.settings.template_root,
        )

    @observe(name="PlannerApproach.run")
    def run(self, question: str, options: Optional[RAGOptions] = None) -> RAGResponse:
        options = options or RAGOptions()
        stage = ApproachStage.BUILDING_REGISTRY

        try:
            logger.debug(f"[{stage.value}] question={question!r}")
            registry = self.build_registry(options)

            stage = ApproachStage.PLANNING
            logger.debug(f"[{stage.value}] goal={self.settings.goal!r}")
            plan = SequentialPlanner(self.llm, registry, self.settings.planner).create_plan(self.settings.goal)

            stage = ApproachStage.EXECUTING
            logger.debug(f"[{stage.value}] {len(plan)} steps")
            context = PlanExecutor(registry).execute_plan(plan, question)

            if not context.result or not context.result.strip():
                raise ExecutionError("Plan finished without an answer", details={"steps": context.steps})
        except PlannerRagError as e:
            self._log_failure(stage, e)
            raise
        except Exception as e:
            self._log_failure(stage, e)
            error_cls: Type[PlannerRagError] = STAGE_ERRORS[stage]
            raise error_cls(f"{stage.value} failed: {e}", details={"stage": stage.value}) from e

        sources = []
        finder = registry.get(f"{InformationFinder.group}.{InformationFinder.name}")
        if isinstance(finder, InformationFinder):
            sources = list(finder.last_sources)

        logger.debug(f"[{ApproachStage.DONE.value}] answer length={len(context.result)}")
        return RAGResponse(
            question=question,
            prompt=plan.to_plan_string(),
            answer=context.result,
            sources_as_text=context.get(SOURCES_VARIABLE, SOURCES_PLACEHOLDER),
            sources=sources,
        )

    def run_streaming(
        self,
        question: Optional[str] = None,
        options: Optional[RAGOptions] = None,
        sink: Any = None,
    ) -> None:
        """Always fails: this approach has no incremental output and does not emulate it."""
        raise UnsupportedOperationError(
            "Streaming not supported for this approach",
            details={"stage": ApproachStage.FAILED.value},
        )

    def _log_failure(self, stage: ApproachStage, error: Exception) -> None:
        logger.error(f"[{ApproachStage.FAILED.value}] {stage.value}: {type(error).__name__}: {error}")
