# src/planner_rag/model.py

import logging

from langchain.chat_models import init_chat_model

from planner_rag.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Per-call settings (planner temperature, template completion settings) are passed
# through RunnableConfig["configurable"] instead of building one model per call.
CONFIGURABLE_FIELDS = ("temperature", "max_tokens")


def get_default_model(model_id: str, *, temperature: float = 0.0, max_tokens: int = 1024):
    if not model_id or not model_id.strip():
        raise ConfigurationError("Chat model deployment id must be a non-empty string.")

    logger.debug(f"Initializing chat model {model_id}")
    model = init_chat_model(
        model=model_id.strip(),
        temperature=temperature,
        max_tokens=max_tokens,
        configurable_fields=CONFIGURABLE_FIELDS,
    )
    return model
