"""
Output guardrails for formtree.

A schema produced by an upstream generator agent is untrusted input; this
guardrail runs the validator on the agent's final output and trips when
the schema cannot be used.
"""

from typing import Any

from agents import (
    Agent,
    GuardrailFunctionOutput,
    RunContextWrapper,
    output_guardrail,
)
from pydantic import BaseModel

from formtree.config import get_config
from formtree.models.field_definitions import FormSchema
from formtree.models.validation_result import ValidationResult
from formtree.validation import validate


def check_form_schema_output(output: Any) -> ValidationResult:
    """Validate an agent output given as a model, a mapping or JSON text."""
    if isinstance(output, FormSchema):
        candidate = output.to_json_dict()
    elif isinstance(output, BaseModel):
        candidate = output.model_dump(mode="json", exclude_none=True)
    else:
        candidate = output

    return validate(candidate, include_suggestions=get_config().include_suggestions)


@output_guardrail
async def form_schema_guardrail(
    ctx: RunContextWrapper[Any],
    agent: Agent[Any],
    output: Any,
) -> GuardrailFunctionOutput:
    """
    Guardrail to validate a generated form schema.

    Ensures the output:
    1. Is a well-formed schema tree
    2. Declares options for every choice field
    3. Only branches on declared options
    4. Contains nested conditional logic
    """
    if not get_config().enable_guardrails:
        return GuardrailFunctionOutput(
            output_info={"skipped": True},
            tripwire_triggered=False,
        )

    result = check_form_schema_output(output)

    return GuardrailFunctionOutput(
        output_info=result.model_dump(mode="json"),
        tripwire_triggered=not result.valid,
    )
