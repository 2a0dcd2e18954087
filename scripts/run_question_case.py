# scripts/run_question_case.py

import argparse
import logging
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

from scripts.case_utils import case_options, case_sources, get_case_id, resolve_cases

from planner_rag.approach import PlannerApproach
from planner_rag.capabilities.adapters import StaticSearch
from planner_rag.config import ApproachSettings
from planner_rag.exceptions import PlannerRagError
from planner_rag.model import get_default_model


def run_single_case(case_path: Path, case: Dict[str, Any], *, settings: ApproachSettings, llm) -> bool:
    """Run the planner approach for one case. Returns False when the run failed."""
    case_id = get_case_id(case_path, case)
    approach = PlannerApproach(StaticSearch(case_sources(case)), llm, settings)

    print(f"\nRunning planner approach for case: {case_id}")
    try:
        response = approach.run(case["question"], case_options(case))
    except PlannerRagError as e:
        print(f"  ✗ {type(e).__name__}: {e.message} {e.details or ''}")
        return False

    print("  ✓ Completed")
    print(f"\n[plan]\n{response.prompt}")
    print(f"\n[sources]\n{response.sources_as_text}")
    print(f"\n[answer]\n{response.answer}")

    expected = case.get("expected_answer_contains")
    if expected and expected not in response.answer:
        print(f"  ⚠ Answer does not contain expected text: {expected!r}")
    return True


def main():
    parser = argparse.ArgumentParser(
        description="Run the planner approach on case(s).\n\n"
        "Supports both single cases and glob patterns:\n"
        "  --case tests/cases/c001_stadium.json\n"
        "  --case 'tests/cases/*.json'",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--case", required=True, help="Path to case JSON or glob pattern")
    parser.add_argument(
        "--deployment",
        default=None,
        help="Chat model deployment id (default: $OPENAI_CHATGPT_DEPLOYMENT)",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")

    args = parser.parse_args()

    load_dotenv()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    overrides = {"chat_deployment": args.deployment} if args.deployment else {}
    settings = ApproachSettings.from_env(**overrides)
    llm = get_default_model(settings.chat_deployment)

    cases = resolve_cases(args.case)
    print(f"Found {len(cases)} case(s) to run")

    failed = 0
    for case_path, case in cases:
        if not run_single_case(case_path, case, settings=settings, llm=llm):
            failed += 1

    print(f"\nDone: {len(cases) - failed} succeeded, {failed} failed")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
