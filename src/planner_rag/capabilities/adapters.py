# src/planner_rag/capabilities/adapters.py

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from planner_rag.state import RAGOptions, SourceSnippet


class SearchAdapter(Protocol):
    """Adapter for the search backend (Azure AI Search, Weaviate, pgvector, etc.).

    Ranking, filtering and semantic captions are owned by the backend. The adapter
    receives the request options untouched and must not mutate them.

    Example implementation for Azure AI Search:

        from azure.search.documents import SearchClient
        from azure.search.documents.models import VectorizedQuery

        class AzureSearchAdapter:
            def __init__(self, search_client: SearchClient):
                self.client = search_client

            def search(self, *, query, vector, options):
                kwargs = {"top": options.top}
                if options.exclude_category:
                    kwargs["filter"] = f"category ne '{options.exclude_category}'"
                if vector is not None:
                    kwargs["vector_queries"] = [
                        VectorizedQuery(vector=vector, k_nearest_neighbors=options.top, fields="embedding")
                    ]
                if options.semantic_ranker:
                    kwargs["query_type"] = "semantic"
                search_text = None if options.retrieval_mode == "vectors" else query

                return [
                    SourceSnippet(
                        source_id=hit["sourcepage"],
                        content=hit["content"],
                        captions=[c.text for c in (hit.get("@search.captions") or [])],
                    )
                    for hit in self.client.search(search_text, **kwargs)
                ]
    """

    def search(
        self,
        *,
        query: str,
        vector: Optional[List[float]],
        options: RAGOptions,
    ) -> List[SourceSnippet]:
        """Return snippets in ranked order, best first."""
        raise NotImplementedError


# -------------------------
# Simple defaults (placeholders)
# -------------------------


class NotImplementedSearch:
    def search(self, *, query: str, vector: Optional[List[float]], options: RAGOptions) -> List[SourceSnippet]:
        raise NotImplementedError("Provide a SearchAdapter implementation")


class StaticSearch:
    """Deterministic in-memory search over a fixed list of snippets. Useful for local runs."""

    def __init__(self, snippets: Sequence[SourceSnippet]):
        self.snippets = list(snippets)

    def search(self, *, query: str, vector: Optional[List[float]], options: RAGOptions) -> List[SourceSnippet]:
        return self.snippets[: options.top]
