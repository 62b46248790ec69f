"""
Structural pre-pass.

Fast, deterministic shape checks that run before the semantic pass. Any
issue found here stops validation so the semantic pass never reports
follow-on noise for a broken tree.
"""

from typing import Any, Mapping

from formtree.models.field_definitions import OPTION_FIELD_TYPES
from formtree.models.validation_result import IssueKind, ValidationIssue
from formtree.validation.constants import (
    BRANCH_NOT_ARRAY_MESSAGE,
    BRANCH_NOT_ARRAY_SUGGESTION,
    FIELD_NOT_OBJECT_MESSAGE,
    FIELD_NOT_OBJECT_SUGGESTION,
    FIELDS_NOT_ARRAY_MESSAGE,
    FIELDS_NOT_ARRAY_SUGGESTION,
    MISSING_OPTIONS_MESSAGE,
    MISSING_OPTIONS_SUGGESTION,
    ROOT_PATH,
)


def _is_option_list(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0


def collect_structural_issues(schema: Mapping[str, Any]) -> list[ValidationIssue]:
    """Walk ``schema["fields"]`` and every branch, collecting shape defects.

    Uses an explicit stack so arbitrarily deep trees cannot exhaust the
    interpreter's recursion limit; issues still come out in document order.
    """
    issues: list[ValidationIssue] = []
    # ("fields", value, path, branch_key) or ("field", value, path, None)
    stack: list[tuple[str, Any, str, str | None]] = [
        ("fields", schema.get("fields"), ROOT_PATH, None),
    ]

    while stack:
        item_kind, value, path, branch_key = stack.pop()
        if item_kind == "fields":
            if _check_container(value, path, branch_key, issues):
                stack.extend(
                    ("field", field, f"{path}.{idx}", None)
                    for idx, field in reversed(list(enumerate(value)))
                )
        else:
            stack.extend(reversed(_check_field(value, path, issues)))

    return issues


def _check_container(
    fields: Any,
    path: str,
    branch_key: str | None,
    issues: list[ValidationIssue],
) -> bool:
    """Report a non-list field container. Returns whether to descend."""
    if isinstance(fields, list):
        return True

    if branch_key is None:
        message = FIELDS_NOT_ARRAY_MESSAGE
        suggestion = FIELDS_NOT_ARRAY_SUGGESTION
    else:
        message = BRANCH_NOT_ARRAY_MESSAGE.format(key=branch_key)
        suggestion = BRANCH_NOT_ARRAY_SUGGESTION
    issues.append(ValidationIssue(
        path=path,
        message=message,
        suggestion=suggestion,
        kind=IssueKind.NOT_AN_ARRAY,
    ))
    return False


def _check_field(
    field: Any,
    field_path: str,
    issues: list[ValidationIssue],
) -> list[tuple[str, Any, str, str | None]]:
    """Check one field and return its branches as pending containers."""
    if not isinstance(field, Mapping):
        issues.append(ValidationIssue(
            path=field_path,
            message=FIELD_NOT_OBJECT_MESSAGE,
            suggestion=FIELD_NOT_OBJECT_SUGGESTION.format(path=field_path),
            kind=IssueKind.NOT_AN_OBJECT,
        ))
        return []

    field_type = str(field.get("type") or "").lower()
    if field_type in OPTION_FIELD_TYPES and not _is_option_list(field.get("options")):
        issues.append(ValidationIssue(
            path=f"{field_path}.options",
            message=MISSING_OPTIONS_MESSAGE.format(type=field_type),
            suggestion=MISSING_OPTIONS_SUGGESTION,
            kind=IssueKind.MISSING_OPTIONS,
        ))

    # Non-mapping conditions are reported by the semantic pass
    conditions = field.get("conditions")
    if not isinstance(conditions, Mapping):
        return []
    return [
        ("fields", branch, f"{field_path}.conditions.{key}", str(key))
        for key, branch in conditions.items()
    ]
