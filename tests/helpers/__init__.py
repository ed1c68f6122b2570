"""Test helpers for Scrapdesk tests.

Helpers:
    FakeTimeAuthority: Controllable time authority for deterministic tests
    make_event: TransactionEvent builder
    purchase_row / sales_row: Raw feed rows
    Pipeline: Wired engine plus its stub collaborators

Usage:
    from tests.helpers import FakeTimeAuthority, make_event
"""

from tests.helpers.factories import make_event, purchase_row, sales_row
from tests.helpers.fake_time_authority import FakeTimeAuthority
from tests.helpers.pipeline import Pipeline

__all__ = ["FakeTimeAuthority", "Pipeline", "make_event", "purchase_row", "sales_row"]
