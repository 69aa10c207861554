from __future__ import annotations

import logging

from .run import StepRecord, WorkflowRun

logger = logging.getLogger(__name__)


class WorkflowTrace:
    """Workflow-scoped telemetry sink.

    With `debug` on, every step start and finish is logged with its timing.
    `close()` emits one summary record for the run and must be called exactly
    once, at teardown.
    """

    def __init__(self, run: WorkflowRun, *, name: str, debug: bool = False) -> None:
        self._run = run
        self._name = name
        self._debug = debug
        self.closed = False

    def _extra(self, **kwargs: object) -> dict[str, object]:
        return {"workflow": self._name, "run_id": self._run.run_id, **kwargs}

    def step_started(self, step_id: str) -> None:
        if self._debug:
            logger.info("Step started", extra=self._extra(step_id=step_id))

    def step_finished(self, record: StepRecord) -> None:
        if self._debug:
            logger.info(
                "Step finished",
                extra=self._extra(
                    step_id=record.step_id,
                    status=record.status.value,
                    duration_ms=record.duration_ms,
                ),
            )

    async def close(self) -> None:
        if self.closed:
            raise RuntimeError(f"Trace for run {self._run.run_id} already closed")
        self.closed = True
        logger.info(
            "Workflow run ended",
            extra=self._extra(
                status=self._run.status.value,
                steps=[r.step_id for r in self._run.records],
                failed_step=self._run.failed_step,
            ),
        )
