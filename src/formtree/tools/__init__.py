"""
Function tools for formtree.

These tools can be given to agents that draft form schemas.
"""

from formtree.tools.schema_tools import (
    field_summary,
    resolve_payload,
    resolve_visible_fields_tool,
    validate_form_schema_tool,
    validate_payload,
)

__all__ = [
    "validate_form_schema_tool",
    "resolve_visible_fields_tool",
    "validate_payload",  # Plain helper, also used by the MCP server
    "resolve_payload",
    "field_summary",
]
