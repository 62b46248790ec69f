"""
Schema tools.

JSON-in/JSON-out helpers around the validator and resolver, plus function
tools wrapping them so a schema-generating agent can check its own output.
The MCP server reuses the plain helpers.
"""

import json
from typing import Any, Mapping

from agents import RunContextWrapper, function_tool

from formtree.config import get_config
from formtree.resolver import (
    missing_required_fields,
    resolve_visible_fields,
    visible_names,
)
from formtree.validation import validate


def _load_json(value: Any) -> Any:
    if isinstance(value, (str, bytes, bytearray)):
        return json.loads(value)
    return value


def field_summary(field: Any) -> dict[str, Any]:
    """Flat description of a field, without its branches."""
    if isinstance(field, Mapping):
        data = dict(field)
    else:
        data = field.model_dump(mode="json", exclude_none=True)
    return {
        key: data[key]
        for key in ("name", "label", "type", "required", "options")
        if key in data
    }


def validate_payload(schema: Any) -> dict[str, Any]:
    """Validate a schema (mapping or JSON text) and return the result as a dict."""
    config = get_config()
    result = validate(schema, include_suggestions=config.include_suggestions)
    return result.model_dump(mode="json")


def resolve_payload(schema: Any, answers: Any = None) -> dict[str, Any]:
    """
    Resolve the visible fields of a schema for the given answers.

    ``schema`` may be a full schema (with ``fields``) or a bare field list;
    either may be JSON text. Invalid schemas are still resolved.

    Raises:
        ValueError: If the inputs are not JSON or have the wrong shape.
    """
    schema = _load_json(schema)
    answers = _load_json(answers) or {}

    if isinstance(schema, Mapping):
        fields = schema.get("fields") or []
    elif isinstance(schema, list):
        fields = schema
    else:
        raise ValueError("schema must be an object with 'fields' or an array of fields")
    if not isinstance(answers, Mapping):
        raise ValueError("answers must be an object mapping field names to values")

    visible = resolve_visible_fields(fields, answers)
    missing = missing_required_fields(fields, answers)
    return {
        "visible_fields": [field_summary(f) for f in visible],
        "visible_names": visible_names(visible),
        "missing_required": visible_names(missing),
        "complete": not missing,
    }


@function_tool
async def validate_form_schema_tool(
    ctx: RunContextWrapper[Any],
    schema_json: str,
) -> str:
    """
    Validate a conditional form schema.

    Use this tool after drafting a form schema to check it before handing it
    to the user. Fix every reported issue and validate again.

    Args:
        schema_json: JSON string with the schema.
            Example: {"title": "Intake", "fields": [{"type": "radio", ...}]}

    Returns:
        JSON string with:
        - valid: whether the schema may be used
        - issues: list of {path, message, suggestion, kind}
    """
    config = get_config()
    return json.dumps(validate_payload(schema_json), indent=config.indent_json_output)


@function_tool
async def resolve_visible_fields_tool(
    ctx: RunContextWrapper[Any],
    schema_json: str,
    answers_json: str = "{}",
) -> str:
    """
    Compute which fields of a form are visible for a set of answers.

    Args:
        schema_json: JSON string with the schema or its field list.
        answers_json: JSON object mapping field names to answers.
            Example: {"pain": "Yes", "areas": ["Head", "Back"]}

    Returns:
        JSON string with visible_fields, visible_names, missing_required
        and complete.
    """
    config = get_config()
    try:
        payload = resolve_payload(schema_json, answers_json)
    except (json.JSONDecodeError, ValueError) as e:
        payload = {"error": True, "message": str(e)}
    return json.dumps(payload, indent=config.indent_json_output)
