# src/planner_rag/config.py
from __future__ import annotations

import os
from pathlib import Path
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, confloat, conint

from planner_rag.exceptions import ConfigurationError

GOAL_PROMPT = "Take the input as a question and answer it finding any information needed"

DEPLOYMENT_ENV = "OPENAI_CHATGPT_DEPLOYMENT"
GOAL_ENV = "PLANNER_GOAL"


class PlannerSettings(BaseModel):
    """Tunables for the planning call. Sets are empty by default."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    temperature: confloat(ge=0.0, le=2.0) = 0.7
    max_relevant_capabilities: conint(ge=1) = 100
    excluded_groups: FrozenSet[str] = frozenset()
    excluded_capabilities: FrozenSet[str] = frozenset()
    included_capabilities: FrozenSet[str] = frozenset()
    max_tokens: conint(ge=1) = 1024


class ApproachSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    chat_deployment: str = Field(..., min_length=1)
    goal: str = Field(default=GOAL_PROMPT, min_length=1)
    planner: PlannerSettings = Field(default_factory=PlannerSettings)

    # Root directory holding <group>/<name>/skprompt.txt; None means the packaged plugins
    template_root: Optional[Path] = None

    @classmethod
    def from_env(cls, **overrides) -> "ApproachSettings":
        deployment = (os.getenv(DEPLOYMENT_ENV) or "").strip()
        if not deployment and "chat_deployment" not in overrides:
            raise ConfigurationError(
                f"Missing chat model deployment id (set {DEPLOYMENT_ENV}).",
                details={"env": DEPLOYMENT_ENV},
            )

        values = {"chat_deployment": deployment}
        goal = (os.getenv(GOAL_ENV) or "").strip()
        if goal:
            values["goal"] = goal
        values.update(overrides)
        return cls(**values)
