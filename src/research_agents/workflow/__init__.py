"""Step orchestration for research workflows.

A workflow is an ordered list of `Step`s. The `StepOrchestrator` runs them one
after another, threads each result into later steps through the
`WorkflowRun`, and finalizes every run exactly once.
"""

from .orchestrator import StepOrchestrator, check_steps
from .run import Step, StepRecord, WorkflowRun
from .state_machine import IllegalTransitionError, RunStatus, StepStatus
from .trace import WorkflowTrace

__all__ = [
    "IllegalTransitionError",
    "RunStatus",
    "Step",
    "StepOrchestrator",
    "StepRecord",
    "StepStatus",
    "WorkflowRun",
    "WorkflowTrace",
    "check_steps",
]
