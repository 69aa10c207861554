"""Sequential step execution with guaranteed teardown."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from contextlib import AsyncExitStack, asynccontextmanager

from research_agents.core.errors import ConfigurationError, StepTimeoutError

from .run import Step, StepRecord, WorkflowRun, now
from .state_machine import RunStatus, StepStatus
from .trace import WorkflowTrace

logger = logging.getLogger(__name__)

Teardown = Callable[[], Awaitable[None] | None]


def check_steps(steps: Sequence[Step]) -> None:
    """Reject malformed declarations before anything runs."""

    if not steps:
        raise ConfigurationError("A workflow needs at least one step")

    seen: set[str] = set()
    for index, step in enumerate(steps):
        if not isinstance(step, Step):
            raise ConfigurationError(f"Step #{index} is not a Step: {step!r}")
        if not step.id or not step.id.strip():
            raise ConfigurationError(f"Step #{index} has an empty id")
        if step.id in seen:
            raise ConfigurationError(f"Duplicate step id: {step.id!r}")
        if not callable(step.run):
            raise ConfigurationError(f"Step {step.id!r} has no callable run")
        if step.timeout is not None and step.timeout <= 0:
            raise ConfigurationError(f"Step {step.id!r} has a non-positive timeout")
        seen.add(step.id)


class StepOrchestrator:
    """Run declared steps strictly in order and always finalize the run.

    A step starts only after every earlier step has completed and its result
    has been recorded. The first failing step moves the run to FAILED and the
    remaining steps are skipped. Teardown runs exactly once on every path.
    """

    def __init__(
        self,
        *,
        name: str = "workflow",
        debug: bool = False,
        step_timeout: float | None = None,
    ) -> None:
        self.name = name
        self.debug = debug
        self.step_timeout = step_timeout

    async def run(
        self,
        input: str,
        steps: Sequence[Step],
        *,
        teardown: Sequence[Teardown] = (),
    ) -> WorkflowRun:
        """Execute `steps` for `input` and return the finished run.

        Step failures do not raise here; they are recorded on the run and
        `run.unwrap()` re-raises them unchanged. Only declaration errors raise.
        """

        check_steps(steps)
        run = WorkflowRun(input=input)
        async with self.run_and_finalize(run, teardown=teardown) as trace:
            for step in steps:
                await self._execute(run, step, trace)
        return run

    @asynccontextmanager
    async def run_and_finalize(
        self,
        run: WorkflowRun,
        *,
        teardown: Sequence[Teardown] = (),
    ) -> AsyncIterator[WorkflowTrace]:
        """Scope one run: start it, settle its status, then tear it down.

        Teardown callbacks run in reverse registration order, followed by the
        trace sink. A failing callback is logged and kept on
        `run.teardown_errors`; it never replaces the run's own outcome.
        """

        trace = WorkflowTrace(run, name=self.name, debug=self.debug)
        async with AsyncExitStack() as stack:
            stack.push_async_callback(trace.close)
            for callback in teardown:
                stack.push_async_callback(self._guarded, run, callback)

            run._move_to(RunStatus.RUNNING)
            logger.info(
                "Workflow run started",
                extra={"workflow": self.name, "run_id": run.run_id},
            )
            try:
                yield trace
            except Exception as exc:
                run.error = exc
                run._move_to(RunStatus.FAILED)
                logger.error(
                    "Workflow run failed: %s",
                    exc,
                    exc_info=exc,
                    extra={"workflow": self.name, "run_id": run.run_id, "step_id": run.failed_step},
                )
            except BaseException as exc:
                # Cancellation and interpreter exits still finalize, then propagate.
                run.error = exc
                run._move_to(RunStatus.FAILED)
                raise
            else:
                run._move_to(RunStatus.SUCCEEDED)

    async def _guarded(self, run: WorkflowRun, callback: Teardown) -> None:
        try:
            result = callback()
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            run.teardown_errors.append(exc)
            logger.exception(
                "Teardown callback failed",
                extra={"workflow": self.name, "run_id": run.run_id},
            )

    async def _execute(self, run: WorkflowRun, step: Step, trace: WorkflowTrace) -> None:
        timeout = step.timeout if step.timeout is not None else self.step_timeout
        started_at = now()
        trace.step_started(step.id)

        try:
            if timeout is None:
                value = await step.run(run)
            else:
                try:
                    value = await asyncio.wait_for(step.run(run), timeout)
                except TimeoutError as exc:
                    raise StepTimeoutError(step.id, timeout) from exc
        except BaseException as exc:
            run.failed_step = step.id
            record = StepRecord(
                step_id=step.id,
                status=StepStatus.FAILED,
                started_at=started_at,
                finished_at=now(),
                error=f"{type(exc).__name__}: {exc}",
            )
            run.records.append(record)
            trace.step_finished(record)
            raise

        run._record(step.id, value)
        record = StepRecord(
            step_id=step.id,
            status=StepStatus.COMPLETED,
            started_at=started_at,
            finished_at=now(),
        )
        run.records.append(record)
        trace.step_finished(record)
