"""
Validation result models for schema validation.

These models represent the output of ``formtree.validation.validate``.
Failures are reported as data: every issue carries a dotted path into the
candidate schema, a message and an optional suggestion.
"""

from enum import Enum

from pydantic import BaseModel, Field


class IssueKind(str, Enum):
    """Failure kinds reported by the validator."""

    UNPARSABLE_INPUT = "UnparsableInput"
    NOT_AN_ARRAY = "NotAnArray"
    NOT_AN_OBJECT = "NotAnObject"
    MISSING_OPTIONS = "MissingOptions"
    INVALID_VALUE = "InvalidValue"
    BAD_BRANCH_KEY = "BadBranchKey"
    BAD_FIELD_NAME = "BadFieldName"
    DUPLICATE_FIELD_NAME = "DuplicateFieldName"
    MISSING_CONDITIONS = "MissingConditions"
    MISSING_NESTED_CONDITIONS = "MissingNestedConditions"


class ValidationIssue(BaseModel):
    """A single problem found in a candidate schema."""

    path: str = Field(..., description='Dotted locator, e.g. "fields.2.conditions.Yes.0.options"')
    message: str = Field(..., description="Human-readable description of the problem")
    suggestion: str | None = Field(default=None, description="Advisory fix")
    kind: IssueKind = Field(..., description="Failure kind")


class ValidationResult(BaseModel):
    """Result of schema validation."""

    valid: bool = Field(..., description="Whether the schema may be used")
    issues: list[ValidationIssue] = Field(
        default_factory=list, description="Problems found, in discovery order"
    )

    @classmethod
    def from_issues(cls, issues: list[ValidationIssue]) -> "ValidationResult":
        return cls(valid=not issues, issues=list(issues))

    @property
    def issue_count(self) -> int:
        """Get the number of issues."""
        return len(self.issues)

    def get_path_issues(self, path: str) -> list[ValidationIssue]:
        """Get all issues reported at a specific path."""
        return [i for i in self.issues if i.path == path]

    def kinds(self) -> list[IssueKind]:
        return [i.kind for i in self.issues]

    def to_error_dict(self) -> dict[str, list[str]]:
        """Convert issues to a dict mapping paths to messages."""
        result: dict[str, list[str]] = {}
        for issue in self.issues:
            result.setdefault(issue.path, []).append(issue.message)
        return result
