"""Tests for the MCP tool layer."""

import json

import pytest
from starlette.testclient import TestClient

from formtree.mcp_server import create_mcp_server, create_sse_app, get_mcp_tools, handle_tool_call
from formtree.mcp_server.server import run_tool
from formtree.mcp_server.session_store import form_sessions


@pytest.fixture(autouse=True)
def clear_sessions():
    form_sessions.clear()
    yield
    form_sessions.clear()


class TestToolDefinitions:
    """Tests for MCP tool schemas."""

    def test_tool_names(self):
        """Test every tool is declared once."""
        names = [t["name"] for t in get_mcp_tools()]
        assert names == [
            "validate_form_schema",
            "resolve_visible_fields",
            "start_form_session",
            "set_answer",
            "get_form_session",
            "end_form_session",
        ]

    def test_input_schemas(self):
        """Test tools declare object input schemas with required keys."""
        for tool in get_mcp_tools():
            assert tool["inputSchema"]["type"] == "object"
            assert tool["inputSchema"]["required"]


class TestHandleToolCall:
    """Tests for tool dispatch."""

    def test_validate(self, one_level_schema):
        """Test validation through the MCP layer."""
        result = handle_tool_call("validate_form_schema", {"schema": one_level_schema})
        assert result["valid"] is False

    def test_resolve(self, nested_schema):
        """Test resolution through the MCP layer."""
        result = handle_tool_call(
            "resolve_visible_fields",
            {"schema": nested_schema, "answers": {"pain": "No"}},
        )
        assert "reason" in result["visible_names"]

    def test_unknown_tool(self):
        """Test unknown tools return an error payload."""
        assert handle_tool_call("nope", {}) == {"error": "Unknown tool: nope"}


class TestFormSessions:
    """Tests for session tools."""

    def test_session_flow(self, nested_schema):
        """Test start, answer and read back a session."""
        started = handle_tool_call("start_form_session", {"schema": nested_schema})
        session_id = started["session_id"]
        assert started["title"] == "Clinic intake"
        assert started["missing_required"] == ["full_name", "pain"]

        handle_tool_call("set_answer", {"session_id": session_id, "name": "full_name", "value": "Ann"})
        answered = handle_tool_call("set_answer", {"session_id": session_id, "name": "pain", "value": "No"})
        assert answered["complete"] is True
        assert answered["submission"] == {"full_name": "Ann", "pain": "No"}

        fetched = handle_tool_call("get_form_session", {"session_id": session_id})
        assert fetched["answers"] == {"full_name": "Ann", "pain": "No"}

    def test_invalid_schema_rejected(self, flat_schema):
        """Test sessions need a valid schema."""
        result = handle_tool_call("start_form_session", {"schema": flat_schema})
        assert result["error"] == "Schema is not valid"
        assert result["validation"]["issues"][0]["kind"] == "MissingConditions"
        assert form_sessions == {}

    def test_unknown_session(self):
        """Test answering an unknown session."""
        result = handle_tool_call("set_answer", {"session_id": "missing", "name": "a", "value": "b"})
        assert "Unknown session" in result["error"]

    def test_end_session(self, nested_schema):
        """Test ending a session forgets it."""
        session_id = handle_tool_call("start_form_session", {"schema": nested_schema})["session_id"]
        assert handle_tool_call("end_form_session", {"session_id": session_id})["ended"] is True
        assert "error" in handle_tool_call("get_form_session", {"session_id": session_id})


class TestServer:
    """Tests for server wiring."""

    def test_run_tool_reports_errors(self):
        """Test tool exceptions become error payloads."""
        text = run_tool("resolve_visible_fields", {"schema": "not json"})
        assert "error" in json.loads(text)

    def test_create_server(self):
        """Test the server is created with its name."""
        assert create_mcp_server().name == "formtree-mcp"

    def test_health(self):
        """Test the SSE app health endpoint."""
        client = TestClient(create_sse_app(create_mcp_server()))
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["service"] == "formtree-mcp"
