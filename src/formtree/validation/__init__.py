"""
Schema validation for conditional forms.

Structural pre-pass followed by a semantic pass (model validation plus
branching and naming rules).
"""

from formtree.validation.semantic import suggest_field_name
from formtree.validation.validator import (
    SchemaValidationError,
    parse_schema,
    validate,
)

__all__ = [
    "validate",
    "parse_schema",
    "SchemaValidationError",
    "suggest_field_name",
]
