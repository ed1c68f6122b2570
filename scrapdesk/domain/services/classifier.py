"""Event classification into priority tiers.

Classification table:
    INSERT          -> HIGH   (a new money-moving transaction needs action)
    DELETE          -> LOW    (informational)
    UPDATE amount > high_threshold                       -> HIGH
    UPDATE medium_threshold < amount <= high_threshold   -> MEDIUM
    UPDATE otherwise                                     -> LOW

Thresholds are in the dashboard's currency units and are supplied by
configuration; the defaults below match the production dashboard.
"""

from __future__ import annotations

from decimal import Decimal

from scrapdesk.domain.models.notification import Priority
from scrapdesk.domain.models.transaction_event import EventKind, TransactionEvent

DEFAULT_HIGH_AMOUNT_THRESHOLD = Decimal("100000")
DEFAULT_MEDIUM_AMOUNT_THRESHOLD = Decimal("50000")


def classify(
    event: TransactionEvent,
    *,
    high_threshold: Decimal = DEFAULT_HIGH_AMOUNT_THRESHOLD,
    medium_threshold: Decimal = DEFAULT_MEDIUM_AMOUNT_THRESHOLD,
) -> Priority:
    """Assign a priority tier to a transaction event.

    Pure and total: every event maps to exactly one tier.

    Args:
        event: The event to classify.
        high_threshold: UPDATE amounts strictly above this are HIGH.
        medium_threshold: UPDATE amounts strictly above this (and not HIGH)
            are MEDIUM.

    Returns:
        The priority tier.
    """
    if event.kind is EventKind.INSERT:
        return Priority.HIGH
    if event.kind is EventKind.DELETE:
        return Priority.LOW
    if event.amount > high_threshold:
        return Priority.HIGH
    if event.amount > medium_threshold:
        return Priority.MEDIUM
    return Priority.LOW
