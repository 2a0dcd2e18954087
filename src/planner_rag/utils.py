# src/planner_rag/utils.py
"""Observability helper shared by planner, capabilities and approach."""

import os

OBSERVE_ENABLED = os.getenv("LANGFUSE_ENABLED", "1") == "1"

if OBSERVE_ENABLED:
    from langfuse import observe
else:

    def observe(fn=None, **kwargs):
        def _wrap(f):
            return f

        return _wrap(fn) if fn else _wrap
