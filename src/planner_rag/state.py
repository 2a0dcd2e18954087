# src/planner_rag/state.py
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, conint

RetrievalMode = Literal["hybrid", "text", "vectors"]

# Used for RAGResponse.sources_as_text when no step populated the `sources` variable
SOURCES_PLACEHOLDER = "sources placeholders"


class RAGOptions(BaseModel):
    """Per-request options. Owned by the caller and read-only here.

    Everything except the retrieval mode is forwarded untouched to the search adapter.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    retrieval_mode: RetrievalMode = "hybrid"
    semantic_ranker: bool = True
    semantic_captions: bool = False
    top: conint(ge=1, le=50) = 3
    exclude_category: Optional[str] = None
    prompt_template: Optional[str] = None
    suggest_followup_questions: bool = False


class SourceSnippet(BaseModel):
    """One ranked document chunk returned by the search collaborator."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    source_id: str = Field(..., min_length=1)
    content: str
    captions: List[str] = Field(default_factory=list)


class RAGResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    question: str
    prompt: str  # textual rendering of the executed plan
    answer: str = Field(..., min_length=1)
    sources_as_text: str = SOURCES_PLACEHOLDER
    sources: List[SourceSnippet] = Field(default_factory=list)
