"""Unit tests for structured logging."""

from __future__ import annotations

import json
import logging

from research_agents.logging import JsonFormatter


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="research_agents.workflow",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Step finished %s",
        args=("search",),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


def test_workflow_context_is_top_level() -> None:
    record = _record(run_id="abc", step_id="search", duration_ms=12.5)

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "research_agents.workflow"
    assert payload["message"] == "Step finished search"
    assert payload["run_id"] == "abc"
    assert payload["step_id"] == "search"
    assert payload["duration_ms"] == 12.5
    assert "extra" not in payload


def test_other_extras_are_grouped() -> None:
    record = _record(run_id="abc", result_counts=[3, 0])

    payload = json.loads(JsonFormatter().format(record))

    assert payload["run_id"] == "abc"
    assert payload["extra"] == {"result_counts": [3, 0]}
