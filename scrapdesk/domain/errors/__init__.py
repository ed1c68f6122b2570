"""Domain errors for Scrapdesk.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from ScrapdeskError.
"""

from scrapdesk.domain.errors.payload import MalformedPayloadError
from scrapdesk.domain.errors.queue import EmptyQueueError
from scrapdesk.domain.errors.workflow import InvalidWorkflowTransitionError

__all__: list[str] = [
    "EmptyQueueError",
    "InvalidWorkflowTransitionError",
    "MalformedPayloadError",
]
