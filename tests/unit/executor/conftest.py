# tests/unit/executor/conftest.py
"""Shared fixtures for executor unit tests."""

from typing import Any, List, Optional, Sequence

import pytest

from planner_rag.capabilities.registry import CapabilityRegistry
from planner_rag.capabilities.state import Capability, CapabilityOutput, CapabilityParameter


class RecordingCapability(Capability):
    """Capability double that records (full_name, inputs) into a shared call log."""

    returns = "text"

    def __init__(
        self,
        group: str,
        name: str,
        log: List[Any],
        *,
        result: Optional[str] = "ok",
        error: Optional[Exception] = None,
        params: Sequence[CapabilityParameter] = (CapabilityParameter("text", "text", default="$input"),),
        output_variable: Optional[str] = None,
    ):
        self.group = group
        self.name = name
        self.description = f"{name} test capability"
        self.output_variable = output_variable
        self._log = log
        self._result = result
        self._error = error
        self._params = list(params)

    @property
    def parameters(self):
        return self._params

    def invoke(self, **inputs):
        self._log.append((self.full_name, inputs))
        if self._error is not None:
            raise self._error
        if self._result is None:
            return None
        variables = {self.output_variable: self._result} if self.output_variable else {}
        return CapabilityOutput(result=self._result, variables=variables)


@pytest.fixture
def call_log():
    return []


@pytest.fixture
def make_capability(call_log):
    def _make(group, name, **kwargs):
        return RecordingCapability(group, name, call_log, **kwargs)

    return _make


@pytest.fixture
def make_registry():
    def _make(*capabilities):
        registry = CapabilityRegistry()
        for cap in capabilities:
            registry.register(cap)
        return registry

    return _make
