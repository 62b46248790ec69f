# Global session store for MCP connections

import uuid

from formtree.models.field_definitions import FormSchema
from formtree.session import FormSession

# Key: session_id, Value: the form being filled in and its answers
form_sessions: dict[str, FormSession] = {}


def create_form_session(schema: FormSchema) -> str:
    """Start a session for a validated schema and return its id."""
    session_id = uuid.uuid4().hex
    form_sessions[session_id] = FormSession(schema=schema)
    return session_id


def get_form_session(session_id: str | None) -> FormSession | None:
    """Get a session by id, or None if it does not exist."""
    if not session_id:
        return None
    return form_sessions.get(session_id)


def drop_form_session(session_id: str) -> bool:
    """Forget a session. Returns whether it existed."""
    return form_sessions.pop(session_id, None) is not None
