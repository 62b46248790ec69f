"""
Caller-owned form session state.

The resolver is pure; a rendering layer keeps the schema it is showing and
the answers given so far, and re-resolves after every change. ``FormSession``
is that holder. Switching schema resets the answers.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from formtree.models.field_definitions import AnswerMap, AnswerValue, FormField, FormSchema
from formtree.resolver import (
    is_complete,
    missing_required_fields,
    resolve_visible_fields,
    visible_answers,
)

logger = logging.getLogger("formtree")


@dataclass
class FormSession:
    """A schema plus the answers given so far."""

    schema: FormSchema
    answers: AnswerMap = field(default_factory=dict)

    def set_answer(self, name: str, value: AnswerValue) -> list[FormField]:
        """Record an answer and return the new visible field list."""
        self.answers[name] = value
        visible = self.visible_fields()
        logger.debug(f"Answer set for '{name}'; {len(visible)} field(s) visible")
        return visible

    def clear_answer(self, name: str) -> None:
        self.answers.pop(name, None)

    def reset(self) -> None:
        """Drop every answer, keeping the schema."""
        self.answers = {}

    def switch_schema(self, schema: FormSchema) -> None:
        self.schema = schema
        self.answers = {}

    def visible_fields(self) -> list[FormField]:
        return resolve_visible_fields(self.schema.fields, self.answers)

    def missing_required(self) -> list[FormField]:
        return missing_required_fields(self.schema.fields, self.answers)

    def is_complete(self) -> bool:
        return is_complete(self.schema.fields, self.answers)

    def submission(self) -> dict[str, Any]:
        """Answers of the visible fields, ready to hand to an export layer."""
        return visible_answers(self.schema.fields, self.answers)
