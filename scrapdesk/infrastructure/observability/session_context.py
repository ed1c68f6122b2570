"""Operator session id management for log correlation.

One operator session spans every notification the operator works
through on a single dashboard visit. The session id lives in a
contextvar so that entries logged from feed callbacks, operator
actions and the debounced refresh task can be correlated.

Usage:
    # When the engine starts
    set_operator_session_id(generate_operator_session_id())

    # In structlog configuration
    processors = [..., operator_session_processor, ...]
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4

# Default is empty string to avoid None type issues
_operator_session_id: ContextVar[str] = ContextVar("operator_session_id", default="")


def generate_operator_session_id() -> str:
    """Generate a new operator session id (UUID4)."""
    return str(uuid4())


def get_operator_session_id() -> str:
    """Get the current operator session id, or empty string if not set."""
    return _operator_session_id.get()


def set_operator_session_id(session_id: str) -> None:
    """Set the operator session id in the current context.

    Tasks created after this call inherit the value.

    Args:
        session_id: The session id to set.
    """
    _operator_session_id.set(session_id)


def operator_session_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor to add operator_session_id to every log entry.

    Args:
        logger: The logger instance (unused, required by structlog).
        method_name: The logging method name (unused, required by structlog).
        event_dict: The event dictionary to modify.

    Returns:
        The event dictionary with operator_session_id added when set.
    """
    session_id = get_operator_session_id()
    if session_id and "operator_session_id" not in event_dict:
        event_dict["operator_session_id"] = session_id
    return event_dict
