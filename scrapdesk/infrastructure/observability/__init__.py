"""Observability infrastructure for structured logging and session correlation.

Usage:
    from scrapdesk.infrastructure.observability import (
        configure_structlog,
        set_operator_session_id,
    )

    configure_structlog(environment="production")
    set_operator_session_id(generate_operator_session_id())
"""

from scrapdesk.infrastructure.observability.logging import configure_structlog
from scrapdesk.infrastructure.observability.session_context import (
    generate_operator_session_id,
    get_operator_session_id,
    operator_session_processor,
    set_operator_session_id,
)

__all__: list[str] = [
    "configure_structlog",
    "generate_operator_session_id",
    "get_operator_session_id",
    "operator_session_processor",
    "set_operator_session_id",
]
