# src/planner_rag/capabilities/registry.py
from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Set

from langchain_core.embeddings import Embeddings

from planner_rag.capabilities.adapters import SearchAdapter
from planner_rag.capabilities.answer_question import AnswerQuestion, load_prompt_template
from planner_rag.capabilities.information_finder import InformationFinder
from planner_rag.capabilities.state import Capability
from planner_rag.config import PlannerSettings
from planner_rag.exceptions import ConfigurationError
from planner_rag.state import RAGOptions

logger = logging.getLogger(__name__)

INFORMATION_FINDER_GROUP = "InformationFinder"
RAG_GROUP = "RAG"
ANSWER_QUESTION_TEMPLATE = "AnswerQuestion"


class CapabilityRegistry:
    """Capabilities keyed by group, then by name. Built fresh for every request."""

    def __init__(self) -> None:
        self._groups: Dict[str, Dict[str, Capability]] = {}

    def register(self, capability: Capability) -> None:
        group = self._groups.setdefault(capability.group, {})
        if capability.name in group:
            raise ConfigurationError(
                f"Capability {capability.full_name} is already registered",
                details={"capability": capability.full_name},
            )
        group[capability.name] = capability

    def get(self, full_name: str) -> Optional[Capability]:
        group, _, name = full_name.partition(".")
        return self._groups.get(group, {}).get(name)

    def groups(self) -> List[str]:
        return list(self._groups)

    def capability_names(self) -> Set[str]:
        return {c.full_name for c in self}

    def __iter__(self) -> Iterator[Capability]:
        for group in self._groups.values():
            yield from group.values()

    def __contains__(self, full_name: object) -> bool:
        return isinstance(full_name, str) and self.get(full_name) is not None

    def __len__(self) -> int:
        return sum(len(g) for g in self._groups.values())

    def available(self, settings: Optional[PlannerSettings] = None) -> List[Capability]:
        """Capabilities the planner may use, honoring include/exclude sets and the relevance cap."""
        settings = settings or PlannerSettings()
        out: List[Capability] = []
        for cap in self:
            if cap.group in settings.excluded_groups:
                continue
            if cap.full_name in settings.excluded_capabilities or cap.name in settings.excluded_capabilities:
                continue
            if settings.included_capabilities and not (
                cap.full_name in settings.included_capabilities or cap.name in settings.included_capabilities
            ):
                continue
            out.append(cap)
        return out[: settings.max_relevant_capabilities]

    def describe(self, settings: Optional[PlannerSettings] = None) -> str:
        return "\n\n".join(cap.describe() for cap in self.available(settings))


def build_registry(
    options: RAGOptions,
    *,
    search: SearchAdapter,
    llm,
    embeddings: Optional[Embeddings] = None,
    template_root=None,
) -> CapabilityRegistry:
    """Register InformationFinder (bound to `options`) and the RAG template group.

    No collaborator is called here. A missing AnswerQuestion template raises
    ConfigurationError.
    """
    template = load_prompt_template(RAG_GROUP, ANSWER_QUESTION_TEMPLATE, root=template_root)

    registry = CapabilityRegistry()
    registry.register(InformationFinder(search, options, embeddings=embeddings))
    registry.register(AnswerQuestion(llm, template))

    logger.debug(f"Capability registry built: {sorted(registry.capability_names())}")
    return registry
