"""
formtree: conditional form schemas.

Validate a declarative form schema with branching logic, then compute
which fields are visible as answers come in.

Simple Usage:
    from formtree import validate, resolve_visible_fields

    result = validate(candidate)
    if not result.valid:
        for issue in result.issues:
            print(issue.path, issue.message, issue.suggestion)

    visible = resolve_visible_fields(candidate["fields"], {"pain": "Yes"})

Sessions:
    from formtree import FormSession, parse_schema

    session = FormSession(schema=parse_schema(candidate))
    session.set_answer("pain", "Yes")
    session.is_complete()

MCP Server:
    python run_mcp_server.py --transport stdio
"""

from formtree.models.field_definitions import (
    AnswerMap,
    FieldType,
    FormField,
    FormSchema,
)
from formtree.models.validation_result import (
    IssueKind,
    ValidationIssue,
    ValidationResult,
)
from formtree.resolver import (
    active_branch_keys,
    is_complete,
    missing_required_fields,
    resolve_visible_fields,
    visible_answers,
)
from formtree.session import FormSession
from formtree.validation import (
    SchemaValidationError,
    parse_schema,
    validate,
)

__all__ = [
    # Validation
    "validate",
    "parse_schema",
    "SchemaValidationError",
    "ValidationResult",
    "ValidationIssue",
    "IssueKind",
    # Models
    "FieldType",
    "FormField",
    "FormSchema",
    "AnswerMap",
    # Resolution
    "resolve_visible_fields",
    "active_branch_keys",
    "missing_required_fields",
    "is_complete",
    "visible_answers",
    "FormSession",
]

__version__ = "0.1.0"
