"""Unit tests for step orchestration.

These tests assert declaration-order execution, frozen step results,
fail-fast declaration checks and exactly-once teardown on every path.
"""

from __future__ import annotations

import asyncio

import pytest

from research_agents.core.errors import ConfigurationError, ProviderError, StepTimeoutError
from research_agents.workflow import (
    IllegalTransitionError,
    RunStatus,
    Step,
    StepOrchestrator,
    StepStatus,
    WorkflowRun,
)
from research_agents.workflow.state_machine import transition


def _const(value: object):
    async def _run(run: WorkflowRun) -> object:
        return value

    return _run


@pytest.mark.asyncio
async def test_steps_run_in_order_and_see_frozen_prior_results() -> None:
    order: list[str] = []

    async def first(run: WorkflowRun) -> list[int]:
        order.append("first")
        await asyncio.sleep(0.01)
        return [1, 2]

    async def second(run: WorkflowRun) -> int:
        order.append("second")
        assert run.results == {"first": (1, 2)}
        return sum(run.result("first"))

    async def third(run: WorkflowRun) -> str:
        order.append("third")
        with pytest.raises(TypeError):
            run.results["first"] = "tampered"  # type: ignore[index]
        with pytest.raises(KeyError):
            run.result("fourth")
        return f"{run.input}:{run.result('second')}"

    run = await StepOrchestrator().run(
        "acme",
        [Step("first", first), Step("second", second), Step("third", third)],
    )

    assert order == ["first", "second", "third"]
    assert run.status is RunStatus.SUCCEEDED
    assert run.output == "acme:3"
    assert run.unwrap() == "acme:3"
    assert list(run.results) == ["first", "second", "third"]
    assert [r.status for r in run.records] == [StepStatus.COMPLETED] * 3


@pytest.mark.asyncio
async def test_teardown_runs_once_on_success() -> None:
    calls: list[str] = []

    async def teardown() -> None:
        calls.append("async")

    run = await StepOrchestrator().run(
        "x", [Step("only", _const("done"))], teardown=[teardown, lambda: calls.append("sync")]
    )

    assert run.succeeded
    # Reverse registration order.
    assert calls == ["sync", "async"]


@pytest.mark.asyncio
async def test_failure_skips_remaining_steps_and_still_tears_down() -> None:
    error = ProviderError("search down", provider="web-search:exa")
    executed: list[str] = []
    teardowns: list[RunStatus] = []
    runs: list[WorkflowRun] = []

    async def ok(run: WorkflowRun) -> str:
        runs.append(run)
        executed.append("ok")
        return "fine"

    async def boom(run: WorkflowRun) -> None:
        executed.append("boom")
        raise error

    async def never(run: WorkflowRun) -> None:
        executed.append("never")

    async def teardown() -> None:
        teardowns.append(runs[0].status)

    run = await StepOrchestrator().run(
        "x",
        [Step("ok", ok), Step("boom", boom), Step("never", never)],
        teardown=[teardown],
    )

    assert executed == ["ok", "boom"]
    assert run.status is RunStatus.FAILED
    assert run.failed_step == "boom"
    assert run.error is error
    assert teardowns == [RunStatus.FAILED]
    assert [r.status for r in run.records] == [StepStatus.COMPLETED, StepStatus.FAILED]
    assert "never" not in run.results

    with pytest.raises(ProviderError) as exc_info:
        run.unwrap()
    assert exc_info.value is error


@pytest.mark.asyncio
async def test_teardown_failure_does_not_mask_outcome() -> None:
    second_ran: list[bool] = []

    def broken() -> None:
        raise RuntimeError("sink already gone")

    run = await StepOrchestrator().run(
        "x",
        [Step("only", _const(1))],
        teardown=[lambda: second_ran.append(True), broken],
    )

    assert run.succeeded
    assert second_ran == [True]
    assert [str(e) for e in run.teardown_errors] == ["sink already gone"]


@pytest.mark.parametrize(
    "steps",
    [
        [],
        [Step("", _const(1))],
        [Step("a", _const(1)), Step("a", _const(2))],
        [Step("a", "not callable")],  # type: ignore[arg-type]
        [Step("a", _const(1), timeout=0)],
    ],
)
@pytest.mark.asyncio
async def test_malformed_declarations_fail_before_any_step(steps: list[Step]) -> None:
    teardown_calls: list[int] = []

    with pytest.raises(ConfigurationError):
        await StepOrchestrator().run("x", steps, teardown=[lambda: teardown_calls.append(1)])

    assert teardown_calls == []


@pytest.mark.asyncio
async def test_later_step_cannot_mutate_an_earlier_result_in_place() -> None:
    async def extend(run: WorkflowRun) -> None:
        run.result("evidence").append("forged")

    run = await StepOrchestrator().run(
        "x",
        [Step("evidence", _const(["found"])), Step("extend", extend)],
    )

    assert run.status is RunStatus.FAILED
    assert run.failed_step == "extend"
    assert isinstance(run.error, AttributeError)
    assert run.result("evidence") == ("found",)


@pytest.mark.asyncio
async def test_nested_containers_are_frozen_when_recorded() -> None:
    seen: list[object] = []

    async def read(run: WorkflowRun) -> None:
        by_category = run.result("search")
        seen.append(by_category)
        with pytest.raises(TypeError):
            by_category["news"] = []  # type: ignore[index]

    run = await StepOrchestrator().run(
        "x",
        [Step("search", _const({"news": [{"url": "u"}]})), Step("read", read)],
    )

    assert run.succeeded
    (by_category,) = seen
    assert isinstance(by_category["news"], tuple)
    assert dict(by_category["news"][0]) == {"url": "u"}
    with pytest.raises(TypeError):
        by_category["news"][0]["url"] = "v"  # type: ignore[index]


@pytest.mark.asyncio
async def test_step_timeout_fails_the_run() -> None:
    async def hang(run: WorkflowRun) -> None:
        await asyncio.sleep(10)

    run = await StepOrchestrator().run("x", [Step("hang", hang, timeout=0.01)])

    assert run.status is RunStatus.FAILED
    assert isinstance(run.error, StepTimeoutError)
    assert not isinstance(run.error, ProviderError)
    assert run.error.step_id == "hang"


@pytest.mark.asyncio
async def test_default_step_timeout_applies_when_step_has_none() -> None:
    async def hang(run: WorkflowRun) -> None:
        await asyncio.sleep(10)

    run = await StepOrchestrator(step_timeout=0.01).run("x", [Step("hang", hang)])

    assert isinstance(run.error, StepTimeoutError)


@pytest.mark.asyncio
async def test_cancellation_still_finalizes_and_propagates() -> None:
    teardown_calls: list[int] = []
    started = asyncio.Event()

    async def wait_forever(run: WorkflowRun) -> None:
        started.set()
        await asyncio.sleep(10)

    task = asyncio.create_task(
        StepOrchestrator().run(
            "x", [Step("wait", wait_forever)], teardown=[lambda: teardown_calls.append(1)]
        )
    )
    await started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert teardown_calls == [1]


def test_run_state_machine_rejects_illegal_transitions() -> None:
    assert transition(current=RunStatus.PENDING, to=RunStatus.RUNNING) is RunStatus.RUNNING
    with pytest.raises(IllegalTransitionError):
        transition(current=RunStatus.PENDING, to=RunStatus.SUCCEEDED)
    with pytest.raises(IllegalTransitionError):
        transition(current=RunStatus.SUCCEEDED, to=RunStatus.FAILED)


def test_unwrap_on_unfinished_run() -> None:
    with pytest.raises(RuntimeError):
        WorkflowRun(input="x").unwrap()


@pytest.mark.asyncio
async def test_run_summary_json() -> None:
    run = await StepOrchestrator(debug=True).run("acme", [Step("only", _const(1))])

    summary = run.to_json()
    assert summary["status"] == "succeeded"
    assert summary["input"] == "acme"
    assert [s["id"] for s in summary["steps"]] == ["only"]
