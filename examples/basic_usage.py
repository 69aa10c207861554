#!/usr/bin/env python3
"""Programmatic agent run example.

This demonstrates using the research components directly:

* load settings from `.env`
* run the AI initiative finder for one company
* inspect the run (status, step timings) before using the validated report

The company name is passed as an argument.
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Sequence

from research_agents.agents import CompetitiveIntelligence, InitiativeFinderAgent
from research_agents.core.config import ResearchAgentSettings
from research_agents.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Find a company's recent AI initiatives.")
    parser.add_argument("company", help='Company to research, e.g. "Acme Corp"')
    return parser.parse_args(argv)


async def _run(company: str) -> int:
    settings = ResearchAgentSettings()
    configure_logging(settings.log_level, debug=settings.debug)

    run = await InitiativeFinderAgent(settings).run(company)
    for record in run.records:
        print(f"{record.step_id}: {record.status.value} ({record.duration_ms:.0f} ms)")

    if not run.succeeded:
        print(f"Run failed in step {run.failed_step}: {run.error}")
        return 1

    report: CompetitiveIntelligence = run.output
    if not report.updates_found:
        print(f"No recent AI activity found for {report.company}.")
        return 0

    print(f"{len(report.initiatives)} initiatives (confidence {report.confidence_score:.2f}):")
    for item in report.initiatives:
        print(f"- {item.date} {item.title} <{item.source_link}>")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    return asyncio.run(_run(args.company))


if __name__ == "__main__":
    raise SystemExit(main())
