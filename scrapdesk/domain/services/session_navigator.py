"""Session navigation over buffered notifications.

The navigator pages through a snapshot of notification ids rather than
the live queue, so a burst of inserts reshuffling priority order never
moves the notification under the operator's cursor. New arrivals are
appended to the snapshot tail; removals at or before the cursor
re-anchor the snapshot to the live queue.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from scrapdesk.domain.models.notification import NotificationId
from scrapdesk.domain.models.notification_queue import NotificationQueue


@dataclass(frozen=True, eq=True)
class NavigatorState:
    """Cursor into a snapshot of the queue.

    Attributes:
        snapshot: Notification ids in the order they are paged.
        cursor_index: Position of the displayed notification.
    """

    snapshot: tuple[NotificationId, ...] = field(default=())
    cursor_index: int = field(default=0)

    @property
    def current(self) -> NotificationId | None:
        if 0 <= self.cursor_index < len(self.snapshot):
            return self.snapshot[self.cursor_index]
        return None

    @property
    def has_next(self) -> bool:
        return self.cursor_index < len(self.snapshot) - 1

    @property
    def has_previous(self) -> bool:
        return self.cursor_index > 0

    @property
    def position(self) -> int:
        """1-based position for display, 0 when empty."""
        return self.cursor_index + 1 if self.snapshot else 0

    @property
    def size(self) -> int:
        return len(self.snapshot)


EMPTY_NAVIGATOR = NavigatorState()


def next_position(navigator: NavigatorState) -> NavigatorState:
    """Move the cursor forward; no-op at the end."""
    if not navigator.has_next:
        return navigator
    return NavigatorState(navigator.snapshot, navigator.cursor_index + 1)


def previous_position(navigator: NavigatorState) -> NavigatorState:
    """Move the cursor backward; no-op at the start."""
    if not navigator.has_previous:
        return navigator
    return NavigatorState(navigator.snapshot, navigator.cursor_index - 1)


def append_arrival(navigator: NavigatorState, notification_id: NotificationId) -> NavigatorState:
    """Add a newly queued notification to the end of the snapshot."""
    if notification_id in navigator.snapshot:
        return navigator
    return NavigatorState(
        (*navigator.snapshot, notification_id), navigator.cursor_index
    )


def anchor(
    queue: NotificationQueue,
    eligible: Callable[[NotificationId], bool] | None = None,
) -> NavigatorState:
    """Take a fresh snapshot of the live queue.

    The cursor lands on the first eligible id (the head of the live queue
    when every id is eligible). With nothing eligible the cursor stays at 0.
    """
    snapshot = queue.ids()
    cursor = 0
    if eligible is not None:
        for index, notification_id in enumerate(snapshot):
            if eligible(notification_id):
                cursor = index
                break
    return NavigatorState(snapshot, cursor)


def reconcile(
    navigator: NavigatorState,
    queue: NotificationQueue,
    eligible: Callable[[NotificationId], bool] | None = None,
) -> NavigatorState:
    """Bring the snapshot in line with the queue after removals.

    A removal at or before the cursor discards the navigation state and
    re-anchors the snapshot to the live queue. Removals strictly after the
    cursor are filtered out of the snapshot and the cursor stays put.
    """
    live = set(queue.ids())
    if not live:
        return EMPTY_NAVIGATOR
    current = navigator.current
    if current is None or current not in live:
        return anchor(queue, eligible)
    if any(nid not in live for nid in navigator.snapshot[: navigator.cursor_index]):
        return anchor(queue, eligible)
    snapshot = tuple(nid for nid in navigator.snapshot if nid in live)
    return NavigatorState(snapshot, navigator.cursor_index)
