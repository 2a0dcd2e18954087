# tests/unit/conftest.py
"""Shared fixtures for planner_rag unit tests."""

import os

# Disable Langfuse for unit tests (must happen before planner_rag imports)
os.environ["LANGFUSE_ENABLED"] = "0"

from typing import Any, List, Optional  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from langchain_core.language_models.fake_chat_models import FakeListChatModel  # noqa: E402
from langchain_core.runnables import RunnableLambda  # noqa: E402

from planner_rag.capabilities.registry import build_registry  # noqa: E402
from planner_rag.config import ApproachSettings  # noqa: E402
from planner_rag.planner.state import PlannerOutput, PlanStep  # noqa: E402
from planner_rag.state import RAGOptions, SourceSnippet  # noqa: E402


class FakeChatModel(FakeListChatModel):
    """Chat model double.

    Plain completions come from `responses`; structured output (the planning call)
    returns `plan_output` or raises `plan_error`. Both paths count their calls.
    """

    plan_output: Any = None
    plan_error: Optional[Exception] = None
    completion_error: Optional[Exception] = None

    planning_calls: int = 0
    planning_inputs: List[Any] = []
    completion_calls: int = 0
    completion_inputs: List[Any] = []

    def with_structured_output(self, schema, **kwargs):
        def plan(prompt_value):
            self.planning_calls += 1
            self.planning_inputs.append(prompt_value)
            if self.plan_error is not None:
                raise self.plan_error
            return self.plan_output

        return RunnableLambda(plan)

    def _call(self, messages, stop=None, run_manager=None, **kwargs):
        self.completion_calls += 1
        self.completion_inputs.append(messages)
        if self.completion_error is not None:
            raise self.completion_error
        return super()._call(messages, stop=stop, run_manager=run_manager, **kwargs)


@pytest.fixture
def sample_question():
    return "What is the capacity of stadium X?"


@pytest.fixture
def sample_options():
    return RAGOptions(retrieval_mode="text", top=3)


@pytest.fixture
def sample_snippets():
    return [
        SourceSnippet(
            source_id="stadium-x-facts.pdf#page=2",
            content="Stadium X seats 42,000 spectators.",
            captions=["Stadium X seats 42,000"],
        )
    ]


@pytest.fixture
def mock_search(sample_snippets):
    """Mock SearchAdapter returning one snippet."""
    search = MagicMock()
    search.search = MagicMock(return_value=sample_snippets)
    return search


@pytest.fixture
def two_step_plan_output():
    """Planner output: InformationFinder.Search -> RAG.AnswerQuestion."""
    return PlannerOutput(
        steps=[
            PlanStep(capability="InformationFinder.Search", inputs={"query": "$input"}),
            PlanStep(
                capability="RAG.AnswerQuestion",
                inputs={"question": "$input", "context": "$sources"},
            ),
        ]
    )


@pytest.fixture
def fake_llm(two_step_plan_output):
    return FakeChatModel(responses=["42,000 seats"], plan_output=two_step_plan_output)


@pytest.fixture
def registry(sample_options, mock_search, fake_llm):
    return build_registry(sample_options, search=mock_search, llm=fake_llm)


@pytest.fixture
def settings():
    return ApproachSettings(chat_deployment="gpt-4o-test")


@pytest.fixture
def missing_template_root(tmp_path):
    """A template root with no RAG/AnswerQuestion resource in it."""
    return tmp_path


@pytest.fixture
def make_llm():
    """Factory for FakeChatModel instances."""

    def _make(responses=("ok",), **kwargs):
        return FakeChatModel(responses=list(responses), **kwargs)

    return _make
