"""
Data models for formtree.

This module contains Pydantic models for:
- Form fields and schemas (recursive conditional branches)
- Validation issues and results
"""

from formtree.models.field_definitions import (
    MULTI_VALUE_FIELD_TYPES,
    OPTION_FIELD_TYPES,
    AnswerMap,
    AnswerValue,
    FieldType,
    FormField,
    FormSchema,
)
from formtree.models.validation_result import (
    IssueKind,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Form tree
    "FieldType",
    "FormField",
    "FormSchema",
    "OPTION_FIELD_TYPES",
    "MULTI_VALUE_FIELD_TYPES",
    # Answers
    "AnswerMap",
    "AnswerValue",
    # Validation
    "IssueKind",
    "ValidationIssue",
    "ValidationResult",
]
