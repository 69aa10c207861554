"""Error taxonomy for research workflows.

Nothing here is retried by the core. Errors propagate to the orchestrator,
which records them on the run unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass


class ResearchAgentError(Exception):
    """Base class for all errors raised by research_agents."""


class ConfigurationError(ResearchAgentError):
    """A missing credential or a malformed workflow declaration.

    Raised before any external call is attempted.
    """


class ProviderError(ResearchAgentError):
    """A search, memory or generation provider call failed."""

    def __init__(
        self,
        message: str,
        *,
        provider: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is not None:
            return f"[{self.provider}] {base} (status {self.status_code})"
        return f"[{self.provider}] {base}"


class StepTimeoutError(ResearchAgentError):
    """A workflow step exceeded the deadline set by the orchestrator."""

    def __init__(self, step_id: str, timeout: float) -> None:
        super().__init__(f"Step {step_id!r} timed out after {timeout:g}s")
        self.step_id = step_id
        self.timeout = timeout


@dataclass(frozen=True, slots=True)
class Violation:
    """A single field-level schema violation.

    `path` uses dotted field names with bracketed list indexes, e.g.
    `initiatives[2].title`. The document root is `$`.
    """

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class ValidationError(ResearchAgentError):
    """Generation output failed to conform to its declared schema."""

    def __init__(self, schema_name: str, violations: list[Violation]) -> None:
        self.schema_name = schema_name
        self.violations = list(violations)
        details = "; ".join(str(v) for v in self.violations)
        super().__init__(f"Output does not conform to {schema_name}: {details}")

    @property
    def paths(self) -> list[str]:
        return [v.path for v in self.violations]
