"""Base service logging mixin.

Provides LoggingMixin for standardized structured logging across
application services.

Usage:
    from scrapdesk.application.services.base import LoggingMixin

    class MyService(LoggingMixin):
        def __init__(self, dependency: SomePort) -> None:
            self._dependency = dependency
            self._init_logger(component="notifications")

        async def do_something(self) -> None:
            log = self._log_operation("do_something", transaction_id="tx1")
            log.info("operation_started")
"""

import structlog

from scrapdesk.infrastructure.observability.session_context import (
    get_operator_session_id,
)


class LoggingMixin:
    """Mixin providing structured logging for services.

    The logger is bound with ``service`` (the class name) and
    ``component``. Each operation additionally gets ``operation`` and the
    current ``operator_session_id``.

    Attributes:
        _log: The structlog BoundLogger for this service instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "notifications") -> None:
        """Initialize the logger with service name binding.

        Should be called in __init__ after setting up dependencies.
        """
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Create operation-scoped logger with the operator session id.

        Args:
            operation: Name of the operation being performed.
            **context: Additional context to bind to the logger.

        Returns:
            BoundLogger with operation and session context.
        """
        return self._log.bind(
            operation=operation,
            operator_session_id=get_operator_session_id(),
            **context,
        )
