"""Declared output schemas and their validation.

A schema is declared once, as a pydantic model wrapped in an `OutputSchema`.
The same declaration produces both the constraint sent to the generation
provider (`to_response_format`) and the local validator (`validate`), so the
two cannot drift apart.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict

from research_agents.core.errors import ValidationError, Violation

ROOT_PATH = "$"


class SchemaModel(BaseModel):
    """Base for declared output shapes.

    Strict: no coercion between strings, numbers and booleans. Unknown fields
    in nested objects are always rejected; the top-level policy is decided by
    `OutputSchema.permissive`.
    """

    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)


ModelT = TypeVar("ModelT", bound=SchemaModel)


@dataclass(frozen=True, slots=True)
class OutputSchema(Generic[ModelT]):
    """A named, declarative description of a structured output."""

    name: str
    model: type[ModelT]
    permissive: bool = False

    @property
    def field_names(self) -> frozenset[str]:
        return frozenset(self.model.model_fields)


def format_path(loc: tuple[int | str, ...]) -> str:
    """Render a pydantic error location as `field[2].child`."""

    if not loc:
        return ROOT_PATH
    out = ""
    for part in loc:
        if isinstance(part, int):
            out += f"[{part}]"
        elif out:
            out += f".{part}"
        else:
            out = str(part)
    return out


def _violations_from(exc: pydantic.ValidationError) -> list[Violation]:
    return [
        Violation(path=format_path(tuple(err["loc"])), message=err["msg"])
        for err in exc.errors(include_url=False)
    ]


def validate(schema: OutputSchema[ModelT], candidate: Any) -> ModelT:
    """Validate `candidate` against `schema`.

    Returns the parsed model on success. Raises `ValidationError` listing every
    field-level violation otherwise. Pure: no I/O, no shared state.
    """

    if not isinstance(candidate, Mapping):
        raise ValidationError(
            schema.name,
            [Violation(ROOT_PATH, f"expected an object, got {type(candidate).__name__}")],
        )

    known = schema.field_names
    violations: list[Violation] = []
    if not schema.permissive:
        violations.extend(
            Violation(str(key), "unknown field")
            for key in candidate
            if key not in known
        )
    data = {key: value for key, value in candidate.items() if key in known}

    value: ModelT | None = None
    try:
        value = schema.model.model_validate(data, strict=True)
    except pydantic.ValidationError as exc:
        violations.extend(_violations_from(exc))

    if violations or value is None:
        raise ValidationError(schema.name, violations)
    return value


def parse_json(schema: OutputSchema[ModelT], text: str) -> ModelT:
    """Decode provider text as JSON, then validate it."""

    try:
        candidate = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise ValidationError(schema.name, [Violation(ROOT_PATH, f"invalid JSON: {exc}")]) from exc
    return validate(schema, candidate)


def _constrain(node: Any) -> Any:
    if isinstance(node, list):
        return [_constrain(item) for item in node]
    if not isinstance(node, dict):
        return node

    out: dict[str, Any] = {}
    for key, value in node.items():
        if key in ("title", "default"):
            continue
        if key in ("properties", "$defs"):
            # Keys here are field/definition names, not schema keywords.
            out[key] = {name: _constrain(sub) for name, sub in value.items()}
        else:
            out[key] = _constrain(value)
    if out.get("type") == "object" and "properties" in out:
        out["additionalProperties"] = False
        out["required"] = list(out["properties"])
    return out


def to_json_schema(schema: OutputSchema[Any]) -> dict[str, Any]:
    """Project the declared model into a strict JSON schema.

    Every object forbids additional properties and lists all of its
    properties as required, which is what strict constrained decoding expects.
    """

    raw = copy.deepcopy(schema.model.model_json_schema())
    constrained: dict[str, Any] = _constrain(raw)
    return constrained


def to_response_format(schema: OutputSchema[Any]) -> dict[str, Any]:
    """Build the `response_format` payload for constrained decoding."""

    return {
        "type": "json_schema",
        "json_schema": {
            "name": schema.name,
            "schema": to_json_schema(schema),
            "strict": True,
        },
    }
