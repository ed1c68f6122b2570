"""Unit tests for QueueStats and stats aggregation."""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone

import pytest

from scrapdesk.domain.models.notification import Priority
from scrapdesk.domain.models.notification_queue import NotificationQueue, empty_queue
from scrapdesk.domain.models.queue_stats import EMPTY_QUEUE_STATS, QueueStats
from scrapdesk.domain.models.transaction_event import EventKind
from scrapdesk.domain.services.stats_aggregator import aggregate_stats
from tests.helpers import make_event

T0 = datetime(2026, 1, 15, 10, 0, 0, tzinfo=timezone.utc)


class TestQueueStatsValidation:
    """Tests for QueueStats invariants."""

    def test_empty_stats(self) -> None:
        assert EMPTY_QUEUE_STATS.total == 0
        assert EMPTY_QUEUE_STATS.unhandled_count == 0
        assert EMPTY_QUEUE_STATS.is_empty

    def test_total_must_match_tiers(self) -> None:
        with pytest.raises(ValueError, match="must equal"):
            QueueStats(total=3, high=1, medium=1, low=0)

    def test_processed_cannot_exceed_total(self) -> None:
        with pytest.raises(ValueError, match="cannot exceed"):
            QueueStats(total=1, high=1, processed=2)

    def test_negative_counts_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            QueueStats(total=0, high=1, medium=-1)

    def test_unhandled_count(self) -> None:
        stats = QueueStats(total=4, high=2, medium=1, low=1, processed=1)
        assert stats.unhandled_count == 3

    def test_to_dict(self) -> None:
        stats = QueueStats(total=2, high=1, low=1)
        assert stats.to_dict() == {
            "total": 2,
            "high": 1,
            "medium": 0,
            "low": 1,
            "processed": 0,
        }


def _recount(queue: NotificationQueue) -> tuple[int, int, int, int, int]:
    items = list(queue)
    return (
        len(items),
        sum(1 for item in items if item.priority is Priority.HIGH),
        sum(1 for item in items if item.priority is Priority.MEDIUM),
        sum(1 for item in items if item.priority is Priority.LOW),
        sum(1 for item in items if item.processed),
    )


class TestStatsAfterRandomOperations:
    """Stats always match the queue after arbitrary operation sequences."""

    @pytest.mark.parametrize("seed", [3, 11, 99, 2026])
    def test_invariants_hold(self, seed: int) -> None:
        rng = random.Random(seed)
        queue = empty_queue()
        now = T0
        for _ in range(200):
            now += timedelta(milliseconds=rng.randint(0, 1500))
            op = rng.choice(
                ["insert", "insert", "insert", "pop", "mark", "remove", "clear_below", "clear_all"]
            )
            if op == "insert":
                queue = queue.insert(
                    make_event(
                        transaction_id=f"tx{rng.randint(1, 20)}",
                        kind=rng.choice(list(EventKind)),
                        amount=rng.randint(0, 200_000),
                    ),
                    now,
                ).queue
            elif op == "pop" and not queue.is_empty:
                queue, _ = queue.pop_front()
            elif op == "mark" and not queue.is_empty:
                queue = queue.mark_processed(rng.choice(queue.ids()))
            elif op == "remove" and not queue.is_empty:
                queue = queue.remove(rng.choice(queue.ids()))
            elif op == "clear_below":
                queue = queue.clear_below(rng.choice(list(Priority)))
            elif op == "clear_all" and rng.random() < 0.2:
                queue = queue.clear_all()

            stats = queue.stats()
            assert stats.total == stats.high + stats.medium + stats.low
            assert 0 <= stats.processed <= stats.total
            assert (stats.total, stats.high, stats.medium, stats.low, stats.processed) == (
                _recount(queue)
            )


class TestAggregateStats:
    """Tests for aggregate_stats()."""

    def test_empty(self) -> None:
        assert aggregate_stats([]) == EMPTY_QUEUE_STATS

    def test_counts_each_tier(self) -> None:
        queue = empty_queue()
        events = [
            make_event("a", EventKind.INSERT),
            make_event("b", EventKind.UPDATE, 60_000),
            make_event("c", EventKind.UPDATE, 10),
            make_event("d", EventKind.DELETE),
        ]
        for index, event in enumerate(events):
            queue = queue.insert(event, T0 + timedelta(seconds=index)).queue
        queue = queue.mark_processed(queue.ids()[0])

        assert aggregate_stats(queue) == QueueStats(
            total=4, high=1, medium=1, low=2, processed=1
        )
