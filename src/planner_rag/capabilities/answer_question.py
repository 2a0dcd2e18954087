# src/planner_rag/capabilities/answer_question.py
"""RAG.AnswerQuestion: answer synthesis driven by a versioned prompt template.

The template lives outside the code as <root>/<group>/<name>/skprompt.txt plus a
config.json describing its inputs and completion settings. This module only
supplies the named inputs and forwards the model output unchanged.
"""

from __future__ import annotations

import json
import logging
from importlib.resources import files
from typing import Any, Dict, List, Optional

from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from planner_rag.capabilities.state import Capability, CapabilityOutput, CapabilityParameter
from planner_rag.exceptions import ConfigurationError, ExecutionError
from planner_rag.utils import observe

logger = logging.getLogger(__name__)

PROMPT_FILE = "skprompt.txt"
CONFIG_FILE = "config.json"
SUPPORTED_SCHEMA = 1


class TemplateParameter(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    description: str = ""
    default: Optional[str] = None


class TemplateInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    parameters: List[TemplateParameter] = Field(default_factory=list)


class CompletionSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    max_tokens: int = Field(default=1024, ge=1)
    temperature: float = Field(default=0.0, ge=0.0, le=2.0)


class PromptTemplateConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    schema_version: int = Field(default=SUPPORTED_SCHEMA, alias="schema")
    description: str = Field(..., min_length=1)
    completion: CompletionSettings = Field(default_factory=CompletionSettings)
    input: TemplateInput = Field(default_factory=TemplateInput)

    # Filled by the loader, not part of config.json
    group: str = ""
    name: str = ""
    template: str = ""


def default_template_root():
    return files("planner_rag").joinpath("plugins")


def load_prompt_template(group: str, name: str, root=None) -> PromptTemplateConfig:
    """Load <root>/<group>/<name>/{skprompt.txt,config.json}.

    `root` may be a pathlib.Path or an importlib.resources Traversable; it defaults
    to the templates packaged with planner_rag. Raises ConfigurationError when the
    resource is missing or malformed.
    """
    base = (root if root is not None else default_template_root()).joinpath(group).joinpath(name)
    prompt_res = base.joinpath(PROMPT_FILE)
    config_res = base.joinpath(CONFIG_FILE)
    details = {"group": group, "name": name, "location": str(base)}

    if not prompt_res.is_file():
        raise ConfigurationError(f"Prompt template {group}.{name} not found", details=details)

    template = prompt_res.read_text(encoding="utf-8")
    if not template.strip():
        raise ConfigurationError(f"Prompt template {group}.{name} is empty", details=details)

    raw: Dict[str, Any] = {}
    if config_res.is_file():
        try:
            raw = json.loads(config_res.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid {CONFIG_FILE} for {group}.{name}: {e}", details=details) from e
    raw.setdefault("description", f"{group}.{name}")

    try:
        cfg = PromptTemplateConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid {CONFIG_FILE} for {group}.{name}",
            details={**details, "validation_errors": e.errors()},
        ) from e

    if cfg.schema_version != SUPPORTED_SCHEMA:
        raise ConfigurationError(
            f"Unsupported template schema {cfg.schema_version} for {group}.{name}", details=details
        )

    return cfg.model_copy(update={"group": group, "name": name, "template": template})


class AnswerQuestion(Capability):
    """Semantic capability backed by a prompt template and the chat model."""

    returns = "The answer to the question"

    def __init__(self, llm, template: PromptTemplateConfig):
        self.group = template.group
        self.name = template.name
        self.description = template.description
        self._template = template

        prompt = ChatPromptTemplate.from_messages([("human", template.template)])
        missing = set(prompt.input_variables) - {p.name for p in template.input.parameters}
        if missing:
            raise ConfigurationError(
                f"Template {self.full_name} uses undeclared inputs: {sorted(missing)}",
                details={"capability": self.full_name},
            )
        self._input_variables = list(prompt.input_variables)
        self._chain = prompt | llm | StrOutputParser()

    @property
    def parameters(self) -> List[CapabilityParameter]:
        return [CapabilityParameter(p.name, p.description, p.default) for p in self._template.input.parameters]

    @observe(name="RAG.AnswerQuestion")
    def invoke(self, **inputs: str) -> Optional[CapabilityOutput]:
        missing = [v for v in self._input_variables if v not in inputs]
        if missing:
            raise ExecutionError(
                f"Missing inputs {missing} for {self.full_name}",
                details={"capability": self.full_name},
            )

        completion = self._template.completion
        answer = self._chain.invoke(
            {k: inputs[k] for k in self._input_variables},
            config={
                "configurable": {
                    "temperature": completion.temperature,
                    "max_tokens": completion.max_tokens,
                },
                "run_name": self.full_name,
            },
        )
        if answer is None:
            return None
        return CapabilityOutput(result=answer)
