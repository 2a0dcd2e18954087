"""Capabilities the planner can choose from.

- InformationFinder.Search: retrieval over the search collaborator
- RAG.AnswerQuestion: templated answer synthesis over the chat model
"""

from planner_rag.capabilities.registry import CapabilityRegistry, build_registry

__all__ = ["CapabilityRegistry", "build_registry"]
