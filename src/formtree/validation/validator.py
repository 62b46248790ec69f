"""
Schema validator entry point.

``validate`` never raises for malformed input: every problem comes back as
a ``ValidationIssue``. Structural issues short-circuit the semantic pass;
semantic issues are all collected so an editor can fix them in one go.
"""

import json
import logging
from typing import Any, Mapping

from formtree.models.field_definitions import FormSchema
from formtree.models.validation_result import IssueKind, ValidationIssue, ValidationResult
from formtree.validation.constants import (
    JSON_PARSE_MESSAGE,
    JSON_PARSE_SUGGESTION,
    NO_SCHEMA_MESSAGE,
    NO_SCHEMA_SUGGESTION,
    NOT_A_MAPPING_MESSAGE,
    NOT_A_MAPPING_SUGGESTION,
)
from formtree.validation.semantic import collect_semantic_issues
from formtree.validation.structural import collect_structural_issues

logger = logging.getLogger("formtree")


class SchemaValidationError(Exception):
    """Raised by ``parse_schema`` when a candidate schema is invalid."""

    def __init__(self, result: ValidationResult):
        self.result = result
        first = result.issues[0] if result.issues else None
        detail = f"{first.path or '<root>'}: {first.message}" if first else "invalid schema"
        super().__init__(f"Invalid form schema ({result.issue_count} issue(s)); first: {detail}")


def _unparsable(message: str, suggestion: str) -> ValidationIssue:
    return ValidationIssue(
        path="",
        message=message,
        suggestion=suggestion,
        kind=IssueKind.UNPARSABLE_INPUT,
    )


def _coerce_candidate(candidate: Any) -> tuple[Mapping[str, Any] | None, ValidationIssue | None]:
    """Turn the candidate into a mapping, or explain why it cannot be one."""
    if candidate is None:
        return None, _unparsable(NO_SCHEMA_MESSAGE, NO_SCHEMA_SUGGESTION)

    if isinstance(candidate, FormSchema):
        return candidate.to_json_dict(), None

    if isinstance(candidate, (str, bytes, bytearray)):
        if not candidate.strip():
            return None, _unparsable(NO_SCHEMA_MESSAGE, NO_SCHEMA_SUGGESTION)
        try:
            candidate = json.loads(candidate)
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
            return None, _unparsable(JSON_PARSE_MESSAGE.format(error=e), JSON_PARSE_SUGGESTION)

    if not isinstance(candidate, Mapping):
        return None, _unparsable(
            NOT_A_MAPPING_MESSAGE.format(kind=type(candidate).__name__),
            NOT_A_MAPPING_SUGGESTION,
        )

    return candidate, None


def validate(candidate: Any, *, include_suggestions: bool = True) -> ValidationResult:
    """
    Validate a candidate form schema.

    Args:
        candidate: A mapping shaped ``{"title": ..., "fields": [...]}``, its
            JSON text, or a ``FormSchema``.
        include_suggestions: When False, suggestions are stripped from the
            returned issues.

    Returns:
        ValidationResult with ``valid`` True iff no issues were found.
    """
    schema, parse_issue = _coerce_candidate(candidate)

    if parse_issue is not None:
        issues = [parse_issue]
    else:
        issues = collect_structural_issues(schema)
        if issues:
            logger.debug(f"Structural pass found {len(issues)} issue(s); skipping semantic pass")
        else:
            issues = collect_semantic_issues(schema)

    if not include_suggestions:
        issues = [issue.model_copy(update={"suggestion": None}) for issue in issues]

    result = ValidationResult.from_issues(issues)
    logger.debug(f"Schema validation finished: valid={result.valid}, issues={result.issue_count}")
    return result


def parse_schema(candidate: Any) -> FormSchema:
    """
    Validate a candidate and return it as a ``FormSchema``.

    Raises:
        SchemaValidationError: If the candidate is not a valid schema.
    """
    result = validate(candidate)
    if not result.valid:
        raise SchemaValidationError(result)

    schema, _ = _coerce_candidate(candidate)
    return FormSchema.model_validate(schema)
