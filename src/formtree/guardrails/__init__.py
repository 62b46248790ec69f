"""
Guardrails for formtree.

Schema checks for agent output.
"""

from formtree.guardrails.output_guardrails import (
    check_form_schema_output,
    form_schema_guardrail,
)

__all__ = [
    "form_schema_guardrail",
    "check_form_schema_output",
]
