# tests/unit/capabilities/test_registry.py
"""Unit tests for CapabilityRegistry and build_registry."""

import pytest

from planner_rag.capabilities.information_finder import InformationFinder
from planner_rag.capabilities.registry import CapabilityRegistry, build_registry
from planner_rag.config import PlannerSettings
from planner_rag.exceptions import ConfigurationError

EXPECTED_NAMES = {"InformationFinder.Search", "RAG.AnswerQuestion"}


class TestBuildRegistry:
    """Tests for per-request registry construction."""

    def test_registers_exactly_two_groups(self, registry):
        assert sorted(registry.groups()) == ["InformationFinder", "RAG"]
        assert registry.capability_names() == EXPECTED_NAMES
        assert len(registry) == 2

    def test_no_collaborator_calls(self, registry, mock_search, fake_llm):
        assert "InformationFinder.Search" in registry

        mock_search.search.assert_not_called()
        assert fake_llm.completion_calls == 0
        assert fake_llm.planning_calls == 0

    def test_retrieval_bound_to_options(self, sample_options, mock_search, fake_llm):
        registry = build_registry(sample_options, search=mock_search, llm=fake_llm)

        registry.get("InformationFinder.Search").search("q")

        assert mock_search.search.call_args.kwargs["options"] is sample_options

    def test_independent_registries(self, sample_options, mock_search, fake_llm):
        first = build_registry(sample_options, search=mock_search, llm=fake_llm)
        second = build_registry(sample_options, search=mock_search, llm=fake_llm)

        assert first is not second
        assert first.capability_names() == second.capability_names()
        for name in EXPECTED_NAMES:
            assert first.get(name) is not second.get(name)

    def test_missing_template(self, sample_options, mock_search, fake_llm, missing_template_root):
        with pytest.raises(ConfigurationError):
            build_registry(sample_options, search=mock_search, llm=fake_llm, template_root=missing_template_root)

        mock_search.search.assert_not_called()
        assert fake_llm.completion_calls == 0


class TestCapabilityRegistry:
    """Tests for lookup and planner-facing filtering."""

    def test_get_unknown(self, registry):
        assert registry.get("RAG.Summarize") is None
        assert registry.get("NoSuchGroup.Search") is None
        assert "RAG" not in registry
        assert 42 not in registry

    def test_duplicate_registration(self, mock_search, sample_options):
        registry = CapabilityRegistry()
        registry.register(InformationFinder(mock_search, sample_options))

        with pytest.raises(ConfigurationError):
            registry.register(InformationFinder(mock_search, sample_options))

    def test_available_defaults_to_all(self, registry):
        assert {c.full_name for c in registry.available()} == EXPECTED_NAMES

    def test_excluded_groups(self, registry):
        settings = PlannerSettings(excluded_groups=frozenset({"RAG"}))
        assert [c.full_name for c in registry.available(settings)] == ["InformationFinder.Search"]

    def test_excluded_capabilities(self, registry):
        settings = PlannerSettings(excluded_capabilities=frozenset({"InformationFinder.Search"}))
        assert [c.full_name for c in registry.available(settings)] == ["RAG.AnswerQuestion"]

    def test_included_capabilities(self, registry):
        settings = PlannerSettings(included_capabilities=frozenset({"AnswerQuestion"}))
        assert [c.full_name for c in registry.available(settings)] == ["RAG.AnswerQuestion"]

    def test_max_relevant_capabilities(self, registry):
        settings = PlannerSettings(max_relevant_capabilities=1)
        assert len(registry.available(settings)) == 1

    def test_describe(self, registry):
        manual = registry.describe()

        assert "InformationFinder.Search:" in manual
        assert "RAG.AnswerQuestion:" in manual
        assert "- query:" in manual
        assert "- context:" in manual
