"""Tests for agent tools and guardrails."""

import json

import pytest
from agents import FunctionTool, OutputGuardrail

from formtree.config import update_config
from formtree.guardrails import check_form_schema_output, form_schema_guardrail
from formtree.models.field_definitions import FormSchema
from formtree.models.validation_result import IssueKind
from formtree.tools import (
    field_summary,
    resolve_payload,
    resolve_visible_fields_tool,
    validate_form_schema_tool,
    validate_payload,
)


class TestValidatePayload:
    """Tests for the JSON-facing validation helper."""

    def test_valid(self, nested_schema):
        """Test a valid schema payload."""
        payload = validate_payload(json.dumps(nested_schema))
        assert payload == {"valid": True, "issues": []}

    def test_invalid(self, one_level_schema):
        """Test issues are plain JSON data."""
        payload = validate_payload(one_level_schema)
        assert payload["valid"] is False
        assert payload["issues"][0]["kind"] == "MissingNestedConditions"
        json.dumps(payload)

    def test_respects_suggestion_setting(self, one_level_schema):
        """Test the config switch strips suggestions."""
        update_config(include_suggestions=False)
        payload = validate_payload(one_level_schema)
        assert payload["issues"][0]["suggestion"] is None


class TestResolvePayload:
    """Tests for the JSON-facing resolution helper."""

    def test_from_schema_text(self, nested_schema):
        """Test resolving from JSON text."""
        payload = resolve_payload(json.dumps(nested_schema), '{"pain": "Yes"}')
        assert payload["visible_names"] == ["full_name", "pain", "location", "symptoms", "notes"]
        assert payload["missing_required"] == ["full_name", "location"]
        assert payload["complete"] is False

    def test_from_field_list(self, nested_schema):
        """Test a bare field list is accepted."""
        payload = resolve_payload(nested_schema["fields"], {"symptoms": ["Fever"]})
        assert "temperature" in payload["visible_names"]

    def test_summaries_drop_branches(self, nested_schema):
        """Test visible fields are reported without their subtrees."""
        payload = resolve_payload(nested_schema)
        pain = payload["visible_fields"][1]
        assert pain == {
            "name": "pain",
            "label": "Are you in pain?",
            "type": "radio",
            "required": True,
            "options": ["Yes", "No"],
        }

    def test_invalid_schema_still_resolves(self, one_level_schema):
        """Test resolution does not require a valid schema."""
        payload = resolve_payload(one_level_schema, {"pain": "Yes"})
        assert payload["visible_names"] == ["pain", "where"]

    @pytest.mark.parametrize("schema, answers", [
        ("42", None),
        ({"fields": []}, ["not", "a", "map"]),
    ])
    def test_bad_shapes(self, schema, answers):
        """Test wrong shapes raise ValueError."""
        with pytest.raises(ValueError):
            resolve_payload(schema, answers)

    def test_field_summary_of_model(self, nested_schema):
        """Test summaries of FormField models."""
        field = FormSchema.model_validate(nested_schema).fields[0]
        assert field_summary(field) == {
            "name": "full_name", "label": "Full name", "type": "text", "required": True,
        }


class TestFunctionTools:
    """Tests for the agent function tools."""

    def test_tools_registered(self):
        """Test the decorated tools are FunctionTools."""
        assert isinstance(validate_form_schema_tool, FunctionTool)
        assert isinstance(resolve_visible_fields_tool, FunctionTool)
        assert validate_form_schema_tool.name == "validate_form_schema_tool"
        assert resolve_visible_fields_tool.name == "resolve_visible_fields_tool"

    def test_tool_parameters(self):
        """Test the JSON arguments are exposed, not the context."""
        props = validate_form_schema_tool.params_json_schema["properties"]
        assert list(props) == ["schema_json"]


class TestSchemaGuardrail:
    """Tests for the output guardrail."""

    def test_guardrail_registered(self):
        """Test the decorator produced an output guardrail."""
        assert isinstance(form_schema_guardrail, OutputGuardrail)

    def test_valid_model_output(self, nested_schema):
        """Test a valid FormSchema passes."""
        result = check_form_schema_output(FormSchema.model_validate(nested_schema))
        assert result.valid

    def test_json_text_output(self, flat_schema):
        """Test JSON text output is validated."""
        result = check_form_schema_output(json.dumps(flat_schema))
        assert result.kinds() == [IssueKind.MISSING_CONDITIONS]

    def test_free_text_output(self):
        """Test prose output is unparsable."""
        result = check_form_schema_output("Here is your form!")
        assert result.kinds() == [IssueKind.UNPARSABLE_INPUT]
