"""
Field definition models for conditional forms.

A form is a tree: every field may carry ``conditions``, a mapping from one
of its option values to the child fields shown when that option is
answered. These models describe an accepted schema; untrusted input goes
through ``formtree.validation.validate`` first.
"""

from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, StrictBool


class FieldType(str, Enum):
    """Supported field kinds."""

    TEXT = "text"
    NUMBER = "number"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    SELECT = "select"
    MULTISELECT = "multiselect"


# Kinds that must declare a non-empty options list
OPTION_FIELD_TYPES = frozenset({"radio", "select", "multiselect", "checkbox"})

# Kinds whose answer is a list of selected options
MULTI_VALUE_FIELD_TYPES = frozenset({"checkbox", "multiselect"})


class FormField(BaseModel):
    """
    A single question node in the form tree.

    ``conditions`` keys must be members of ``options``; the child fields of a
    key are visible only while the answer equals (radio, select) or includes
    (checkbox, multiselect) that key.
    """

    model_config = ConfigDict(frozen=True)

    type: FieldType = Field(..., description="Field kind")
    label: str = Field(..., min_length=1, description="Human-readable label")
    name: str = Field(..., description="snake_case answer key")
    required: StrictBool = Field(default=False, description="Whether an answer is required while visible")
    options: list[str] | None = Field(
        default=None,
        description="Allowed values for radio, select, checkbox and multiselect",
    )
    conditions: dict[str, list["FormField"]] | None = Field(
        default=None,
        description="Child fields keyed by the option value that activates them",
    )

    @property
    def has_conditions(self) -> bool:
        """Whether this field gates at least one branch."""
        return bool(self.conditions)

    @property
    def is_multi_valued(self) -> bool:
        return self.type.value in MULTI_VALUE_FIELD_TYPES

    def iter_branches(self) -> Iterator[tuple[str, list["FormField"]]]:
        """Yield ``(option, fields)`` pairs in declared order."""
        if self.conditions:
            yield from self.conditions.items()


FormField.model_rebuild()


class FormSchema(BaseModel):
    """Root of a conditional form."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Form title")
    fields: list[FormField] = Field(..., description="Top-level fields in display order")

    def iter_fields(self) -> Iterator[FormField]:
        """Walk every field depth-first, including inside every branch."""
        stack = list(reversed(self.fields))
        while stack:
            field = stack.pop()
            yield field
            for _, branch in reversed(list(field.iter_branches())):
                stack.extend(reversed(branch))

    def to_json_dict(self) -> dict[str, Any]:
        """Export as a plain JSON-serializable dict."""
        return self.model_dump(mode="json", exclude_none=True)


# Answer values are scalars for text/number/radio/select, lists for checkbox/multiselect
AnswerValue = str | int | float | bool | list[str] | None
AnswerMap = dict[str, AnswerValue]
