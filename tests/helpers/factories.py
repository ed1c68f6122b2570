"""Builders for domain objects used across tests."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from scrapdesk.domain.models.transaction_event import (
    EventKind,
    TransactionEvent,
    TransactionType,
)


def make_event(
    transaction_id: str = "tx1",
    kind: EventKind = EventKind.INSERT,
    amount: int | str | Decimal = 1000,
    transaction_type: TransactionType = TransactionType.PURCHASE,
    **extra: Any,
) -> TransactionEvent:
    """Build a TransactionEvent with sensible defaults."""
    return TransactionEvent(
        transaction_id=transaction_id,
        kind=kind,
        amount=Decimal(str(amount)),
        transaction_type=transaction_type,
        **extra,
    )


def purchase_row(transaction_id: str = "tx1", amount: float = 1000, **extra: Any) -> dict[str, Any]:
    """A purchases-table row as the change feed delivers it."""
    row: dict[str, Any] = {
        "id": transaction_id,
        "material_type": "Copper",
        "transaction_date": "2026-01-15",
        "total_amount": amount,
        "created_at": "2026-01-15T10:00:00+00:00",
        "created_by": "clerk-1",
        "is_walkin": False,
        "supplier_id": "sup-9",
        "payment_method": "cash",
    }
    row.update(extra)
    return row


def sales_row(transaction_id: str = "sale1", amount: float = 1000, **extra: Any) -> dict[str, Any]:
    """A sales-table row as the change feed delivers it."""
    row: dict[str, Any] = {
        "id": transaction_id,
        "transaction_id": f"T-{transaction_id}",
        "material_name": "Aluminium",
        "transaction_date": "2026-01-15",
        "total_amount": amount,
        "weight_kg": 12.5,
        "price_per_kg": 80.0,
        "created_at": "2026-01-15T10:00:00+00:00",
        "payment_method": "mpesa",
    }
    row.update(extra)
    return row
