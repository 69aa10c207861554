"""Output schema declaration, validation and provider projection."""

from research_agents.schema.validator import (
    OutputSchema,
    SchemaModel,
    parse_json,
    to_json_schema,
    to_response_format,
    validate,
)

__all__ = [
    "OutputSchema",
    "SchemaModel",
    "parse_json",
    "to_json_schema",
    "to_response_format",
    "validate",
]
