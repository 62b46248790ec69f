"""
Semantic pass.

Runs only on structurally sound input. Two stages, both fully collected:

1. Model validation: the candidate is parsed into ``FormSchema`` and every
   pydantic error is turned into a path-qualified issue.
2. Rule traversal: a walk over every field, including every branch, that
   checks branch keys against options, snake_case names, unique names
   among fields that can be shown together, and that conditional logic
   exists and nests at least two levels deep.
"""

from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from formtree.models.field_definitions import MULTI_VALUE_FIELD_TYPES, FieldType, FormSchema
from formtree.models.validation_result import IssueKind, ValidationIssue
from formtree.validation.constants import (
    BAD_BRANCH_KEY_MESSAGE,
    BAD_BRANCH_KEY_SUGGESTION,
    BAD_FIELD_NAME_FALLBACK_SUGGESTION,
    BAD_FIELD_NAME_MESSAGE,
    BAD_FIELD_NAME_SUGGESTION,
    CONDITIONS_SUGGESTION,
    DUPLICATE_NAME_MESSAGE,
    DUPLICATE_NAME_SUGGESTION,
    FIELD_NAME_PATTERN,
    GENERIC_SUGGESTION,
    LABEL_SUGGESTION,
    MISSING_CONDITIONS_MESSAGE,
    MISSING_CONDITIONS_SUGGESTION,
    MISSING_KEY_SUGGESTION,
    MISSING_NESTED_CONDITIONS_MESSAGE,
    MISSING_NESTED_CONDITIONS_SUGGESTION,
    NON_WORD_RUN,
    OPTIONS_SUGGESTION,
    REQUIRED_SUGGESTION,
    ROOT_PATH,
    STRING_SUGGESTION,
    TOO_DEEP_MESSAGE,
    TOO_DEEP_SUGGESTION,
    TYPE_SUGGESTION,
)


def collect_semantic_issues(schema: Mapping[str, Any]) -> list[ValidationIssue]:
    """Run the model stage then the rule stage and return every issue found."""
    issues = collect_model_issues(schema)
    issues.extend(collect_rule_issues(schema))
    return issues


# ---------- Model stage ----------

def collect_model_issues(schema: Mapping[str, Any]) -> list[ValidationIssue]:
    """Parse into ``FormSchema`` and convert pydantic errors to issues."""
    try:
        FormSchema.model_validate(schema)
    except PydanticValidationError as e:
        return [_issue_from_pydantic(error) for error in e.errors()]
    except RecursionError:
        return [ValidationIssue(
            path=ROOT_PATH,
            message=TOO_DEEP_MESSAGE,
            suggestion=TOO_DEEP_SUGGESTION,
            kind=IssueKind.INVALID_VALUE,
        )]
    return []


def _issue_from_pydantic(error: dict[str, Any]) -> ValidationIssue:
    loc = tuple(error.get("loc", ()))
    path = ".".join(str(part) for part in loc)
    return ValidationIssue(
        path=path,
        message=error.get("msg") or "Invalid value",
        suggestion=_suggest_for_model_error(error.get("type", ""), loc, path),
        kind=IssueKind.INVALID_VALUE,
    )


def _suggest_for_model_error(error_type: str, loc: tuple[Any, ...], path: str) -> str:
    last = loc[-1] if loc else ""

    if "options" in loc[-2:]:
        return OPTIONS_SUGGESTION
    if last == "conditions" or (len(loc) >= 2 and loc[-2] == "conditions"):
        return CONDITIONS_SUGGESTION
    if last == "type" and error_type == "enum":
        return TYPE_SUGGESTION.format(choices=", ".join(t.value for t in FieldType))
    if last == "required":
        return REQUIRED_SUGGESTION
    if last == "label" and error_type == "string_too_short":
        return LABEL_SUGGESTION
    if error_type == "missing":
        return MISSING_KEY_SUGGESTION.format(key=last)
    if error_type == "string_type":
        return STRING_SUGGESTION.format(key=last)
    return GENERIC_SUGGESTION.format(path=path)


# ---------- Rule stage ----------

@dataclass
class _ConditionTally:
    """Tracks whether the tree branches, and whether branching nests."""

    any_conditions: bool = False
    nested_conditions: bool = False


@dataclass(eq=False)
class _Scope:
    """One field list: the root list or a single branch of a field.

    ``owner_path`` and ``key`` identify the branch; the root scope has no
    parent. Siblings share the same scope object.
    """

    parent: "_Scope | None" = None
    owner_path: str = ""
    key: str = ""
    multi: bool = False
    depth: int = 0


def _can_show_together(a: _Scope, b: _Scope) -> bool:
    """Whether fields in scopes ``a`` and ``b`` can be visible at once.

    Only different branches of one scalar field exclude each other; a field
    is always shown together with its siblings and enclosing fields.
    """
    while a.depth > b.depth:
        a = a.parent
    while b.depth > a.depth:
        b = b.parent
    if a is b:
        return True

    while a.parent is not b.parent:
        a = a.parent
        b = b.parent
    exclusive = a.owner_path == b.owner_path and a.key != b.key and not a.multi
    return not exclusive


def collect_rule_issues(schema: Mapping[str, Any]) -> list[ValidationIssue]:
    """Walk every field and apply the branching and naming rules.

    The walk keeps its own stack so tree depth is bounded by memory only.
    Issues come out in document order.
    """
    issues: list[ValidationIssue] = []
    tally = _ConditionTally()
    seen_names: dict[str, list[tuple[str, _Scope]]] = {}

    root = _Scope()
    stack: list[tuple[Any, ...]] = [("fields", schema.get("fields") or [], ROOT_PATH, root)]

    while stack:
        item = stack.pop()
        if item[0] == "fields":
            _, fields, path, scope = item
            stack.extend(
                ("field", field, f"{path}.{idx}", scope)
                for idx, field in reversed(list(enumerate(fields)))
            )
        elif item[0] == "field":
            _, field, field_path, scope = item
            _check_name(field.get("name"), field_path, scope, seen_names, issues)
            stack.extend(reversed(_pending_branches(field, field_path, scope, tally)))
        else:
            _, key, branch, branch_path, allowed, scope = item
            if key not in allowed:
                issues.append(ValidationIssue(
                    path=branch_path,
                    message=BAD_BRANCH_KEY_MESSAGE.format(key=key),
                    suggestion=BAD_BRANCH_KEY_SUGGESTION.format(key=key),
                    kind=IssueKind.BAD_BRANCH_KEY,
                ))
            stack.append(("fields", branch, branch_path, scope))

    if not tally.any_conditions:
        issues.append(ValidationIssue(
            path=ROOT_PATH,
            message=MISSING_CONDITIONS_MESSAGE,
            suggestion=MISSING_CONDITIONS_SUGGESTION,
            kind=IssueKind.MISSING_CONDITIONS,
        ))
    elif not tally.nested_conditions:
        issues.append(ValidationIssue(
            path=ROOT_PATH,
            message=MISSING_NESTED_CONDITIONS_MESSAGE,
            suggestion=MISSING_NESTED_CONDITIONS_SUGGESTION,
            kind=IssueKind.MISSING_NESTED_CONDITIONS,
        ))

    return issues


def suggest_field_name(name: str) -> str:
    """Lowercase ``name`` and collapse runs of non-word characters to ``_``."""
    return NON_WORD_RUN.sub("_", name).lower()


def _check_name(
    name: Any,
    field_path: str,
    scope: _Scope,
    seen_names: dict[str, list[tuple[str, _Scope]]],
    issues: list[ValidationIssue],
) -> None:
    # Non-string names are reported by the model stage
    if not isinstance(name, str):
        return

    if not FIELD_NAME_PATTERN.fullmatch(name):
        example = suggest_field_name(name)
        issues.append(ValidationIssue(
            path=f"{field_path}.name",
            message=BAD_FIELD_NAME_MESSAGE,
            suggestion=(
                BAD_FIELD_NAME_SUGGESTION.format(example=example)
                if example else BAD_FIELD_NAME_FALLBACK_SUGGESTION
            ),
            kind=IssueKind.BAD_FIELD_NAME,
        ))
        return

    earlier = seen_names.setdefault(name, [])
    for first_path, first_scope in earlier:
        if _can_show_together(first_scope, scope):
            issues.append(ValidationIssue(
                path=f"{field_path}.name",
                message=DUPLICATE_NAME_MESSAGE.format(name=name, first_path=first_path),
                suggestion=DUPLICATE_NAME_SUGGESTION.format(name=name),
                kind=IssueKind.DUPLICATE_FIELD_NAME,
            ))
            return
    earlier.append((field_path, scope))


def _pending_branches(
    field: Mapping[str, Any],
    field_path: str,
    scope: _Scope,
    tally: _ConditionTally,
) -> list[tuple[Any, ...]]:
    conditions = field.get("conditions")
    if not isinstance(conditions, Mapping) or not conditions:
        return []

    tally.any_conditions = True
    if scope.parent is not None:
        tally.nested_conditions = True

    options = field.get("options")
    allowed = {o for o in options if isinstance(o, str)} if isinstance(options, list) else set()
    multi = str(field.get("type") or "").lower() in MULTI_VALUE_FIELD_TYPES

    return [
        (
            "branch",
            key,
            branch,
            f"{field_path}.conditions.{key}",
            allowed,
            _Scope(scope, field_path, key, multi, scope.depth + 1),
        )
        for key, branch in conditions.items()
    ]
