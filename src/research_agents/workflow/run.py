"""Workflow run and step definitions."""

from __future__ import annotations

import uuid
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any

from .state_machine import RunStatus, StepStatus, TERMINAL_STATES, transition

StepFn = Callable[["WorkflowRun"], Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class Step:
    """An ordered unit of work.

    `run` receives the live `WorkflowRun` and reads earlier results through
    `run.result(step_id)`. `timeout` is in seconds; None means unbounded.
    """

    id: str
    run: StepFn
    timeout: float | None = None


@dataclass(frozen=True, slots=True)
class StepRecord:
    step_id: str
    status: StepStatus
    started_at: datetime
    finished_at: datetime | None = None
    error: str | None = None

    @property
    def duration_ms(self) -> float | None:
        if self.finished_at is None:
            return None
        return (self.finished_at - self.started_at).total_seconds() * 1000


@dataclass(slots=True, eq=False)
class WorkflowRun:
    """One execution of a workflow for a given input.

    Only the orchestrator mutates a run. Once a step's result is recorded it
    cannot be replaced, and builtin containers in it are frozen (see `freeze`).
    """

    input: str
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    status: RunStatus = RunStatus.PENDING
    error: BaseException | None = None
    failed_step: str | None = None
    records: list[StepRecord] = field(default_factory=list)
    teardown_errors: list[BaseException] = field(default_factory=list)
    _results: dict[str, Any] = field(default_factory=dict, init=False, repr=False)

    @property
    def results(self) -> Mapping[str, Any]:
        return MappingProxyType(self._results)

    def result(self, step_id: str) -> Any:
        """Return the frozen result of a completed step."""

        if step_id not in self._results:
            raise KeyError(f"Step {step_id!r} has not completed in run {self.run_id}")
        return self._results[step_id]

    @property
    def output(self) -> Any:
        """Result of the last completed step (the run's visible result)."""

        if not self._results:
            return None
        return next(reversed(self._results.values()))

    @property
    def succeeded(self) -> bool:
        return self.status is RunStatus.SUCCEEDED

    @property
    def finished(self) -> bool:
        return self.status in TERMINAL_STATES

    def unwrap(self) -> Any:
        """Return the output, or re-raise the original failure unchanged."""

        if self.status is RunStatus.FAILED and self.error is not None:
            raise self.error
        if self.status is not RunStatus.SUCCEEDED:
            raise RuntimeError(f"Run {self.run_id} has not finished (status={self.status.value})")
        return self.output

    def to_json(self) -> dict[str, object]:
        out: dict[str, object] = {
            "run_id": self.run_id,
            "input": self.input,
            "status": self.status.value,
            "steps": [
                {
                    "id": r.step_id,
                    "status": r.status.value,
                    "duration_ms": r.duration_ms,
                }
                for r in self.records
            ],
        }
        if self.error is not None:
            out["error"] = f"{type(self.error).__name__}: {self.error}"
            out["failed_step"] = self.failed_step
        return out

    # Orchestrator-side mutation. Not part of the step-facing API.

    def _move_to(self, to: RunStatus) -> None:
        self.status = transition(current=self.status, to=to)

    def _record(self, step_id: str, value: Any) -> None:
        if step_id in self._results:
            raise ValueError(f"Step {step_id!r} already has a result")
        self._results[step_id] = freeze(value)


def freeze(value: Any) -> Any:
    """Return a read-only copy of the builtin containers in `value`.

    Lists become tuples, dicts become `MappingProxyType` and sets become
    frozensets, recursively. Anything else is returned as-is.
    """

    if isinstance(value, list) or type(value) is tuple:
        return tuple(freeze(v) for v in value)
    if isinstance(value, dict | MappingProxyType):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, set | frozenset):
        return frozenset(value)
    return value


def now() -> datetime:
    return datetime.now(tz=UTC)
