"""
Conditional field resolution.

Given a field tree and the current answers, compute the flat, ordered list
of visible fields: each parent is followed immediately by the fields of its
active branches, depth-first, preserving sibling order. Fields inside
inactive branches are excluded entirely.

The functions here are stateless and never mutate their inputs; call them
again after every answer change. They accept ``FormField`` models or plain
mappings, so an in-progress (not yet valid) schema can still be previewed:
anything that cannot be resolved simply does not expand.
"""

from enum import Enum
from itertools import chain
from typing import Any, Iterable, Iterator, Mapping, Sequence

from pydantic import BaseModel

from formtree.models.field_definitions import MULTI_VALUE_FIELD_TYPES

FieldLike = Any  # FormField or a mapping with the same keys

_EXHAUSTED = object()


def _get(field: FieldLike, key: str, default: Any = None) -> Any:
    if isinstance(field, Mapping):
        return field.get(key, default)
    return getattr(field, key, default)


def _is_field(value: Any) -> bool:
    return isinstance(value, (Mapping, BaseModel))


def _field_type(field: FieldLike) -> str:
    value = _get(field, "type")
    if isinstance(value, Enum):
        value = value.value
    return str(value or "").lower()


def field_name(field: FieldLike) -> str | None:
    name = _get(field, "name")
    return name if isinstance(name, str) else None


def has_answer(value: Any) -> bool:
    """Whether ``value`` counts as answered (None, "" and [] do not)."""
    if value is None:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return True


def _answer_key(value: Any) -> str | None:
    """The branch key an answer selects: strings as-is, numbers in plain form.

    ``1`` and ``1.0`` both select ``"1"``; booleans select nothing.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return None


def active_branch_keys(field: FieldLike, answers: Mapping[str, Any]) -> list[str]:
    """
    Return the branch keys of ``field`` activated by the current answers.

    Scalar kinds activate the key equal to the answer; a numeric answer
    matches the key spelled the same way. Multi-valued kinds
    (checkbox, multiselect) activate every selected key, in the order the
    keys are declared in ``conditions``.
    """
    conditions = _get(field, "conditions")
    if not isinstance(conditions, Mapping) or not conditions:
        return []

    name = field_name(field)
    if name is None:
        return []

    value = answers.get(name)
    if not has_answer(value):
        return []

    if _field_type(field) in MULTI_VALUE_FIELD_TYPES:
        if not isinstance(value, (list, tuple)):
            return []
        selected = {_answer_key(v) for v in value} - {None}
        return [key for key in conditions if key in selected]

    key = _answer_key(value)
    if key is not None and key in conditions:
        return [key]
    return []


def resolve_visible_fields(
    fields: Sequence[FieldLike],
    answers: Mapping[str, Any] | None = None,
) -> list[FieldLike]:
    """
    Flatten the currently visible fields, parents before their active children.

    Args:
        fields: Top-level fields (or the fields of one branch).
        answers: Current answer map keyed by field name.

    Returns:
        A new list holding the visible field objects in display order.
    """
    answers = answers or {}
    visible: list[FieldLike] = []
    # One iterator per open field list; the innermost list is on top
    stack: list[Iterator[Any]] = [_iter_field_list(fields)]

    while stack:
        field = next(stack[-1], _EXHAUSTED)
        if field is _EXHAUSTED:
            stack.pop()
            continue
        if not _is_field(field):
            continue
        visible.append(field)

        keys = active_branch_keys(field, answers)
        if keys:
            conditions = _get(field, "conditions")
            stack.append(chain.from_iterable(_iter_field_list(conditions[key]) for key in keys))

    return visible


def _iter_field_list(fields: Any) -> Iterator[Any]:
    if not isinstance(fields, Sequence) or isinstance(fields, (str, bytes)):
        return iter(())
    return iter(fields)


def missing_required_fields(
    fields: Sequence[FieldLike],
    answers: Mapping[str, Any] | None = None,
) -> list[FieldLike]:
    """Visible required fields that have no answer yet.

    Required fields hidden by an inactive branch are never reported.
    """
    answers = answers or {}
    return [
        field
        for field in resolve_visible_fields(fields, answers)
        if _get(field, "required") is True and not has_answer(answers.get(field_name(field)))
    ]


def is_complete(fields: Sequence[FieldLike], answers: Mapping[str, Any] | None = None) -> bool:
    """Whether every visible required field is answered."""
    return not missing_required_fields(fields, answers)


def visible_answers(
    fields: Sequence[FieldLike],
    answers: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Answers for the visible fields only, in display order.

    Answers held for hidden fields stay in the caller's map (so toggling a
    branch back restores them) but are left out here.
    """
    answers = answers or {}
    result: dict[str, Any] = {}
    for field in resolve_visible_fields(fields, answers):
        name = field_name(field)
        if name is not None and has_answer(answers.get(name)):
            result[name] = answers[name]
    return result


def visible_names(fields: Iterable[FieldLike]) -> list[str]:
    return [name for name in (field_name(f) for f in fields) if name is not None]
