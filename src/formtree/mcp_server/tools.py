"""
MCP Tool definitions for formtree.

Wraps schema validation, field resolution and form sessions as MCP tools.
"""

import logging
from typing import Any

from formtree.mcp_server.session_store import (
    create_form_session,
    drop_form_session,
    get_form_session,
)
from formtree.session import FormSession
from formtree.tools.schema_tools import field_summary, resolve_payload, validate_payload
from formtree.validation import SchemaValidationError, parse_schema

logger = logging.getLogger("formtree-mcp")


def _session_payload(session_id: str, session: FormSession) -> dict[str, Any]:
    visible = session.visible_fields()
    missing = session.missing_required()
    return {
        "session_id": session_id,
        "title": session.schema.title,
        "answers": dict(session.answers),
        "visible_fields": [field_summary(f) for f in visible],
        "missing_required": [f.name for f in missing],
        "complete": not missing,
        "submission": session.submission(),
    }


def mcp_start_form_session(schema: Any) -> dict[str, Any]:
    """
    Validate a schema and start a form session for it.

    Returns the session payload, or the validation result when the schema
    is rejected.
    """
    try:
        parsed = parse_schema(schema)
    except SchemaValidationError as e:
        logger.info(f"Rejected schema for new session: {e}")
        return {
            "error": "Schema is not valid",
            "validation": e.result.model_dump(mode="json"),
        }

    session_id = create_form_session(parsed)
    logger.info(f"Started form session {session_id} for '{parsed.title}'")
    return _session_payload(session_id, get_form_session(session_id))


def mcp_set_answer(session_id: str, name: str, value: Any) -> dict[str, Any]:
    """Record an answer in a session and return the re-resolved form."""
    session = get_form_session(session_id)
    if session is None:
        return {"error": f"Unknown session: {session_id}"}

    session.set_answer(name, value)
    return _session_payload(session_id, session)


def mcp_get_form_session(session_id: str) -> dict[str, Any]:
    session = get_form_session(session_id)
    if session is None:
        return {"error": f"Unknown session: {session_id}"}
    return _session_payload(session_id, session)


def mcp_end_form_session(session_id: str) -> dict[str, Any]:
    return {"session_id": session_id, "ended": drop_form_session(session_id)}


def handle_tool_call(name: str, arguments: dict[str, Any]) -> dict[str, Any]:
    """
    Dispatch an MCP tool call by name.

    Raises:
        ValueError: If the arguments have the wrong shape.
    """
    if name == "validate_form_schema":
        return validate_payload(arguments.get("schema"))
    if name == "resolve_visible_fields":
        return resolve_payload(arguments.get("schema"), arguments.get("answers"))
    if name == "start_form_session":
        return mcp_start_form_session(arguments.get("schema"))
    if name == "set_answer":
        return mcp_set_answer(
            arguments.get("session_id", ""),
            arguments.get("name", ""),
            arguments.get("value"),
        )
    if name == "get_form_session":
        return mcp_get_form_session(arguments.get("session_id", ""))
    if name == "end_form_session":
        return mcp_end_form_session(arguments.get("session_id", ""))
    return {"error": f"Unknown tool: {name}"}


_SCHEMA_PROPERTY = {
    "description": "Form schema object { title, fields: [...] } or its JSON text",
    "anyOf": [{"type": "object"}, {"type": "string"}],
}

_SESSION_ID_PROPERTY = {
    "type": "string",
    "description": "Id returned by start_form_session",
}


def get_mcp_tools() -> list[dict]:
    """
    Get MCP tool definitions for registration with MCP server.

    Returns list of tool schemas compatible with MCP protocol.
    """
    return [
        {
            "name": "validate_form_schema",
            "description": """
Validate a conditional form schema before it is used.

Returns {valid, issues}; each issue has a dotted path (e.g.
"fields.0.conditions.Yes.0.options"), a message, a suggestion and a kind.
Structural problems are reported alone; otherwise every rule violation is
reported at once.

RULES:
- radio, select, checkbox and multiselect fields need a non-empty "options" array
- every "conditions" key must be one of the field's options
- "name" must be snake_case
- at least one branch must contain a field that itself has "conditions"
""".strip(),
            "inputSchema": {
                "type": "object",
                "properties": {"schema": _SCHEMA_PROPERTY},
                "required": ["schema"],
            },
        },
        {
            "name": "resolve_visible_fields",
            "description": (
                "Compute the visible fields of a form for a set of answers. Works on "
                "schemas that are not yet valid; unresolvable branches are not expanded."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "schema": _SCHEMA_PROPERTY,
                    "answers": {
                        "type": "object",
                        "description": "Field name -> answer (string, number, or array of strings)",
                    },
                },
                "required": ["schema"],
            },
        },
        {
            "name": "start_form_session",
            "description": "Validate a schema and start filling it in. Returns a session_id.",
            "inputSchema": {
                "type": "object",
                "properties": {"schema": _SCHEMA_PROPERTY},
                "required": ["schema"],
            },
        },
        {
            "name": "set_answer",
            "description": "Answer one field of a form session and get the updated visible fields.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "session_id": _SESSION_ID_PROPERTY,
                    "name": {"type": "string", "description": "Field name"},
                    "value": {
                        "description": "Answer value",
                        "anyOf": [
                            {"type": "string"},
                            {"type": "number"},
                            {"type": "array", "items": {"type": "string"}},
                            {"type": "null"},
                        ],
                    },
                },
                "required": ["session_id", "name", "value"],
            },
        },
        {
            "name": "get_form_session",
            "description": "Get the answers, visible fields and completeness of a form session.",
            "inputSchema": {
                "type": "object",
                "properties": {"session_id": _SESSION_ID_PROPERTY},
                "required": ["session_id"],
            },
        },
        {
            "name": "end_form_session",
            "description": "Discard a form session.",
            "inputSchema": {
                "type": "object",
                "properties": {"session_id": _SESSION_ID_PROPERTY},
                "required": ["session_id"],
            },
        },
    ]
