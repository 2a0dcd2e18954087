"""Shared utilities for running question cases."""

import json
from glob import glob
from pathlib import Path
from typing import Any, Dict, List, Tuple

from planner_rag.state import RAGOptions, SourceSnippet


def load_case(path: Path) -> Dict[str, Any]:
    """Load a single case from a JSON file."""
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def resolve_cases(case_pattern: str) -> List[Tuple[Path, Dict[str, Any]]]:
    """Resolve a file path or glob pattern to (path, case_data) tuples, sorted by path."""
    if not any(c in case_pattern for c in "*?[]"):
        path = Path(case_pattern)
        if not path.is_file():
            raise FileNotFoundError(f"Case file not found: {case_pattern}")
        return [(path, load_case(path))]

    paths = [Path(p) for p in sorted(glob(case_pattern, recursive=True))]
    results = [(p, load_case(p)) for p in paths if p.is_file() and p.suffix == ".json"]
    if not results:
        raise FileNotFoundError(f"No JSON case files found matching: {case_pattern}")
    return results


def get_case_id(case_path: Path, case_data: Dict[str, Any]) -> str:
    return case_data.get("case_id", case_path.stem)


def case_options(case_data: Dict[str, Any]) -> RAGOptions:
    return RAGOptions.model_validate(case_data.get("options") or {})


def case_sources(case_data: Dict[str, Any]) -> List[SourceSnippet]:
    return [SourceSnippet.model_validate(s) for s in case_data.get("sources") or []]
