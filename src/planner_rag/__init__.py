"""Plan-and-execute RAG using an LLM planner.

This package answers a question by letting an LLM planner order a fixed set of
capabilities, then running that plan against the question:
- Capabilities: InformationFinder (retrieval) and RAG (templated answer synthesis)
- Planner: produce an ordered plan for a fixed goal
- Executor: run the plan step by step over a shared execution context
- Approach: public run() entry point returning question, plan, answer and sources
"""

__version__ = "0.1.0"
