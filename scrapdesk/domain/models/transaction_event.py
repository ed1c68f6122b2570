"""Transaction change event domain model.

A TransactionEvent is the canonical, transport-independent snapshot of
one change to a money-moving transaction. The feed boundary builds it
from whichever raw record the change carried; the core engine never
sees transport-specific payload shapes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum


class EventKind(Enum):
    """Kind of change delivered by the feed.

    Kinds:
        INSERT: A new transaction was recorded.
        UPDATE: An existing transaction was edited.
        DELETE: A transaction was removed.
    """

    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class TransactionType(Enum):
    """Business direction of the underlying transaction.

    Types:
        PURCHASE: Material bought from a supplier (cash goes out).
        SALE: Material sold to a buyer (cash comes in).
    """

    PURCHASE = "purchase"
    SALE = "sale"


@dataclass(frozen=True, eq=True)
class TransactionEvent:
    """Immutable snapshot of a transaction change.

    Only ``transaction_id``, ``kind``, ``amount``, ``is_walk_in`` and
    ``transaction_type`` influence engine behaviour. The remaining fields
    are descriptive and carried through for display.

    Attributes:
        transaction_id: Stable identifier of the underlying transaction.
        kind: INSERT, UPDATE or DELETE.
        amount: Monetary amount, never negative.
        is_walk_in: True when the counterparty is an unregistered walk-in.
        transaction_type: PURCHASE or SALE.
        material: Material name or type.
        supplier_id: Registered supplier reference, if any.
        payment_method: Payment method as recorded.
        walk_in_name: Walk-in counterparty name, if any.
        created_at: When the transaction was recorded upstream.
    """

    transaction_id: str
    kind: EventKind
    amount: Decimal
    is_walk_in: bool = field(default=False)
    transaction_type: TransactionType = field(default=TransactionType.PURCHASE)
    material: str | None = field(default=None)
    supplier_id: str | None = field(default=None)
    payment_method: str | None = field(default=None)
    walk_in_name: str | None = field(default=None)
    created_at: datetime | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate event fields."""
        if not self.transaction_id:
            raise ValueError("transaction_id must be a non-empty string")
        if self.amount < 0:
            raise ValueError(f"amount must be non-negative, got {self.amount}")

    @property
    def counterparty_label(self) -> str:
        """Human-readable counterparty for display."""
        if self.is_walk_in:
            return self.walk_in_name or "Walk-in Customer"
        return self.supplier_id or "Unknown Supplier"
