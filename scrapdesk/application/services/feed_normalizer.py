"""Feed boundary normalization.

Maps a RawChange from the change feed to the canonical TransactionEvent.
This is the only place that knows transport payload shapes:

- The record is ``after`` when present, ``before`` otherwise (a DELETE
  carries only the old row).
- Purchase rows name the material ``material_type``; sales rows name it
  ``material_name``.
- Row shapes are validated with pydantic. Anything unusable raises
  MalformedPayloadError, which the engine absorbs.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from structlog import get_logger

from scrapdesk.application.ports.change_feed import RawChange
from scrapdesk.domain.errors.payload import MalformedPayloadError
from scrapdesk.domain.models.transaction_event import (
    EventKind,
    TransactionEvent,
    TransactionType,
)

logger = get_logger(__name__)


class _TransactionRecord(BaseModel):
    """Fields shared by purchase and sales rows."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., min_length=1, description="Transaction row id")
    total_amount: Decimal | None = Field(
        default=None,
        ge=0,
        description="Transaction total; may be absent on DELETE rows",
    )
    payment_method: str | None = Field(default=None)
    created_at: datetime | None = Field(default=None)


class PurchaseRecord(_TransactionRecord):
    """Row of the purchases table (material bought from a supplier)."""

    material_type: str | None = Field(default=None)
    supplier_id: str | None = Field(default=None)
    is_walkin: bool = Field(default=False)
    walkin_name: str | None = Field(default=None)


class SalesRecord(_TransactionRecord):
    """Row of the sales table (material sold to a buyer)."""

    material_name: str | None = Field(default=None)


class FeedNormalizer:
    """Turns raw feed changes into TransactionEvents.

    Args:
        tables: Subscribed table names mapped to the transaction type
            their rows carry.
    """

    def __init__(self, tables: Mapping[str, TransactionType]) -> None:
        self._tables = dict(tables)

    @property
    def tables(self) -> dict[str, TransactionType]:
        return dict(self._tables)

    def normalize(self, change: RawChange) -> TransactionEvent:
        """Map one raw change to a TransactionEvent.

        Args:
            change: The change as delivered by the feed.

        Returns:
            The canonical event.

        Raises:
            MalformedPayloadError: Unknown kind or table, no record, or a
                record that fails validation.
        """
        try:
            kind = EventKind(str(change.kind).upper())
        except ValueError:
            raise MalformedPayloadError(
                change.table, str(change.kind), "unknown change kind"
            ) from None

        transaction_type = self._tables.get(change.table)
        if transaction_type is None:
            raise MalformedPayloadError(change.table, kind.value, "unsubscribed table")

        raw = change.after if change.after else change.before
        if not raw:
            raise MalformedPayloadError(change.table, kind.value, "no record in payload")
        if not isinstance(raw, Mapping):
            raise MalformedPayloadError(change.table, kind.value, "record is not a mapping")

        if transaction_type is TransactionType.SALE:
            record = _validate(SalesRecord, raw, change.table, kind)
            return self._from_sale(record, kind, change.table)
        record = _validate(PurchaseRecord, raw, change.table, kind)
        return self._from_purchase(record, kind, change.table)

    def _from_purchase(
        self, record: PurchaseRecord, kind: EventKind, table: str
    ) -> TransactionEvent:
        return TransactionEvent(
            transaction_id=record.id,
            kind=kind,
            amount=_amount(record, kind, table),
            is_walk_in=record.is_walkin,
            transaction_type=TransactionType.PURCHASE,
            material=record.material_type,
            supplier_id=record.supplier_id,
            payment_method=record.payment_method,
            walk_in_name=record.walkin_name,
            created_at=record.created_at,
        )

    def _from_sale(
        self, record: SalesRecord, kind: EventKind, table: str
    ) -> TransactionEvent:
        return TransactionEvent(
            transaction_id=record.id,
            kind=kind,
            amount=_amount(record, kind, table),
            transaction_type=TransactionType.SALE,
            material=record.material_name,
            payment_method=record.payment_method,
            created_at=record.created_at,
        )


def _validate(
    model: type[_TransactionRecord],
    raw: Mapping[str, Any],
    table: str,
    kind: EventKind,
) -> Any:
    try:
        return model.model_validate(dict(raw))
    except ValidationError as exc:
        logger.debug(
            "payload_validation_failed",
            table=table,
            kind=kind.value,
            errors=exc.error_count(),
        )
        raise MalformedPayloadError(
            table, kind.value, f"{exc.error_count()} invalid field(s)"
        ) from exc


def _amount(record: _TransactionRecord, kind: EventKind, table: str) -> Decimal:
    if record.total_amount is not None:
        return record.total_amount
    # Old rows of a DELETE may carry only the primary key.
    if kind is EventKind.DELETE:
        return Decimal(0)
    raise MalformedPayloadError(table, kind.value, "missing total_amount")
