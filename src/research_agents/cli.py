"""CLI entrypoint: run one research agent for one input and print the result."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Mapping

from pydantic import BaseModel, ValidationError

from research_agents import __version__
from research_agents.agents import AGENTS
from research_agents.core.config import ResearchAgentSettings
from research_agents.core.errors import ConfigurationError, ResearchAgentError
from research_agents.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="research-agents",
        description="Run a research agent workflow for a single subject",
    )
    parser.add_argument("--version", action="version", version=f"research-agents {__version__}")
    parser.add_argument("agent", choices=sorted(AGENTS), help="Which workflow to run")
    parser.add_argument("input", nargs="+", help="Subject: a company, a person, or a question")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log per-step timings (same as WORKFLOW_DEBUG=true)",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Print the run summary (status and step timings) to stderr",
    )
    return parser


def _render(output: object) -> str:
    if isinstance(output, BaseModel):
        return output.model_dump_json(indent=2)
    if isinstance(output, str):
        return output
    return json.dumps(output, indent=2, default=_jsonable)


def _jsonable(value: object) -> object:
    if isinstance(value, Mapping):
        return dict(value)
    return str(value)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ResearchAgentSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    if args.debug:
        settings = settings.model_copy(update={"debug": True})
    configure_logging(settings.log_level, debug=settings.debug)

    try:
        agent = AGENTS[args.agent](settings)
        run = asyncio.run(agent.run(" ".join(args.input)))
    except (ConfigurationError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    if args.trace:
        print(json.dumps(run.to_json(), indent=2), file=sys.stderr)

    try:
        output = run.unwrap()
    except ResearchAgentError as e:
        print(f"Run failed: {e}", file=sys.stderr)
        return 1
    except Exception:
        logger.exception("Run failed", extra={"run_id": run.run_id})
        return 1

    print(_render(output))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
