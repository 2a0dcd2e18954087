# src/planner_rag/capabilities/information_finder.py
"""InformationFinder.Search: retrieval capability over the search adapter."""

from __future__ import annotations

import logging
from typing import List, Optional

from langchain_core.embeddings import Embeddings

from planner_rag.capabilities.adapters import SearchAdapter
from planner_rag.capabilities.state import Capability, CapabilityOutput, CapabilityParameter
from planner_rag.exceptions import RetrievalError
from planner_rag.state import RAGOptions, SourceSnippet
from planner_rag.utils import observe

logger = logging.getLogger(__name__)

SOURCES_VARIABLE = "sources"

# Retrieval modes that need a query vector when an embeddings collaborator is bound
VECTOR_MODES = ("vectors", "hybrid")


def format_sources(snippets: List[SourceSnippet], *, use_captions: bool = False) -> str:
    lines = []
    for s in snippets:
        if use_captions and s.captions:
            text = " . ".join(s.captions)
        else:
            text = s.content.replace("\n", " ")
        lines.append(f"{s.source_id}: {text}")
    return "\n".join(lines)


class InformationFinder(Capability):
    group = "InformationFinder"
    name = "Search"
    description = "Search information relevant to answering a given query"
    returns = "Sources relevant to the query, one per line as '<source>: <content>'"
    output_variable = SOURCES_VARIABLE

    def __init__(
        self,
        search: SearchAdapter,
        options: RAGOptions,
        embeddings: Optional[Embeddings] = None,
    ):
        self._search = search
        self._options = options
        self._embeddings = embeddings
        # Snippets returned by the most recent search, kept for response provenance
        self.last_sources: List[SourceSnippet] = []

    @property
    def parameters(self) -> List[CapabilityParameter]:
        return [CapabilityParameter("query", "the query to answer", default="$input")]

    def _query_vector(self, query: str) -> Optional[List[float]]:
        if self._embeddings is None or self._options.retrieval_mode not in VECTOR_MODES:
            return None
        try:
            return self._embeddings.embed_query(query)
        except Exception as e:
            raise RetrievalError(
                f"Query embedding failed: {e}",
                details={"capability": self.full_name, "stage": "embed_query"},
            ) from e

    def search(self, query: str) -> List[SourceSnippet]:
        vector = self._query_vector(query)
        try:
            hits = self._search.search(query=query, vector=vector, options=self._options)
        except Exception as e:
            raise RetrievalError(
                f"Search failed: {e}",
                details={"capability": self.full_name, "exception_type": type(e).__name__},
            ) from e

        snippets = list(hits or [])
        logger.info(f"Retrieved {len(snippets)} sources (mode={self._options.retrieval_mode}, top={self._options.top})")
        return snippets

    @observe(name="InformationFinder.Search")
    def invoke(self, **inputs: str) -> CapabilityOutput:
        snippets = self.search(inputs["query"])
        self.last_sources = snippets

        text = format_sources(snippets, use_captions=self._options.semantic_captions)
        return CapabilityOutput(result=text, variables={SOURCES_VARIABLE: text})
