"""Unit tests for event classification into priority tiers."""

from __future__ import annotations

from decimal import Decimal

import pytest

from scrapdesk.domain.models.notification import Priority
from scrapdesk.domain.models.transaction_event import EventKind
from scrapdesk.domain.services.classifier import classify
from tests.helpers import make_event


class TestClassificationTable:
    """Tests for the default classification table."""

    @pytest.mark.parametrize(
        ("kind", "amount", "expected"),
        [
            (EventKind.INSERT, 0, Priority.HIGH),
            (EventKind.INSERT, 10, Priority.HIGH),
            (EventKind.INSERT, 500_000, Priority.HIGH),
            (EventKind.DELETE, 0, Priority.LOW),
            (EventKind.DELETE, 500_000, Priority.LOW),
            (EventKind.UPDATE, 150_000, Priority.HIGH),
            (EventKind.UPDATE, "100000.01", Priority.HIGH),
            (EventKind.UPDATE, 100_000, Priority.MEDIUM),
            (EventKind.UPDATE, 60_000, Priority.MEDIUM),
            (EventKind.UPDATE, "50000.01", Priority.MEDIUM),
            (EventKind.UPDATE, 50_000, Priority.LOW),
            (EventKind.UPDATE, 10, Priority.LOW),
            (EventKind.UPDATE, 0, Priority.LOW),
        ],
    )
    def test_classification(self, kind: EventKind, amount: object, expected: Priority) -> None:
        """Every (kind, amount) maps to its documented tier."""
        assert classify(make_event(kind=kind, amount=amount)) is expected

    def test_insert_ignores_amount(self) -> None:
        """Small inserts are still HIGH."""
        assert classify(make_event(kind=EventKind.INSERT, amount=1)) is Priority.HIGH

    def test_delete_ignores_amount(self) -> None:
        """Large deletes are still LOW."""
        assert classify(make_event(kind=EventKind.DELETE, amount=1_000_000)) is Priority.LOW


class TestConfigurableThresholds:
    """Tests for custom thresholds."""

    def test_custom_thresholds(self) -> None:
        """Thresholds supplied by the caller take effect."""
        event = make_event(kind=EventKind.UPDATE, amount=2_000)
        assert (
            classify(event, high_threshold=Decimal("1500"), medium_threshold=Decimal("500"))
            is Priority.HIGH
        )
        assert (
            classify(event, high_threshold=Decimal("5000"), medium_threshold=Decimal("1000"))
            is Priority.MEDIUM
        )
        assert (
            classify(event, high_threshold=Decimal("5000"), medium_threshold=Decimal("3000"))
            is Priority.LOW
        )
