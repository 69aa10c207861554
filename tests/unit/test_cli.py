"""Unit tests for the CLI entrypoint."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest

from research_agents import cli
from research_agents.agents.base import ResearchAgent, Toolkit
from research_agents.core.errors import ProviderError
from research_agents.workflow import Step, WorkflowRun


class EchoAgent(ResearchAgent):
    name = "echo"
    required_settings = ()

    def __init__(self, settings) -> None:
        super().__init__(settings, toolkit_factory=lambda s: _NullToolkit())

    def build_steps(self, tools: Toolkit) -> list[Step]:
        async def echo(run: WorkflowRun) -> str:
            return f"echo: {run.input}"

        return [Step("echo", echo)]


class FailingAgent(EchoAgent):
    def build_steps(self, tools: Toolkit) -> list[Step]:
        async def fail(run: WorkflowRun) -> str:
            raise ProviderError("search down", provider="web-search:exa")

        return [Step("fail", fail)]


class _NullToolkit:
    async def aclose(self) -> None:
        return None


@pytest.fixture(autouse=True)
def _quiet_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setitem(cli.AGENTS, "initiatives", EchoAgent)
    monkeypatch.setitem(cli.AGENTS, "dossier", FailingAgent)

    # main() reconfigures the root logger; put it back afterwards.
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_cli_prints_result(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["initiatives", "Acme", "Corp", "--trace"]) == 0

    captured = capsys.readouterr()
    assert "echo: Acme Corp" in captured.out
    summary = json.loads(captured.err)
    assert summary["status"] == "succeeded"


def test_cli_reports_failed_run(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["dossier", "Ada"]) == 1

    assert "search down" in capsys.readouterr().err


def test_cli_rejects_unknown_agent() -> None:
    with pytest.raises(SystemExit):
        cli.main(["nope", "Ada"])
