"""Utility for manually evaluating a Java source against a catalog problem.

Runs the full evaluation pipeline (workspace, javac, java, heuristics)
outside of the HTTP service and prints the raw result as JSON, which is
handy when checking a toolchain or a docker image by hand.

Example::

    python tools/manual_runner.py \
        --problem 5 \
        --source ~/solutions/PropertyCounter.java \
        --backend docker

Use ``--list`` to print the available problem ids and titles.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from evaluator import config
from evaluator.pipeline import EvaluationPipeline
from evaluator.problems import ProblemService


def parse_args() -> argparse.Namespace:
    """Parse CLI arguments."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--problem",
        type=int,
        help="problem id to evaluate against",
    )
    parser.add_argument(
        "--source",
        type=Path,
        help="path to the .java file to submit",
    )
    parser.add_argument(
        "--backend",
        choices=["local", "docker"],
        help="override the configured sandbox backend",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="path to a sandbox config json",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="list problems and exit",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    problems = ProblemService()
    if args.list:
        for problem in problems.get_all_problems():
            print(f"{problem.id:>3}  {problem.title} ({problem.difficulty})")
        return 0
    if args.problem is None or args.source is None:
        print("--problem and --source are required")
        return 2

    sandbox_config = config.get_sandbox_config(args.config)
    if args.backend:
        sandbox_config["backend"] = args.backend
    problem = problems.get_problem(args.problem)
    result = EvaluationPipeline(sandbox_config=sandbox_config).evaluate(
        args.source.read_text(encoding="utf-8"),
        problem.testCases,
        filename=args.source.name,
    )
    print(json.dumps(result.to_response(), indent=2, ensure_ascii=False))
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
