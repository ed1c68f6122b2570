"""Time Authority Protocol - interface for consistent timestamp provisioning.

Every component that stamps or compares times (enqueue timestamps, the
dedup window, notification expiry, the refresh debounce) injects a
TimeAuthorityProtocol implementation instead of calling datetime.now()
directly. Tests inject FakeTimeAuthority to make bursts and expiry
deterministic.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    For production:
        Use SystemTimeAuthority from scrapdesk/infrastructure/adapters/

    For testing:
        Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return current time with timezone awareness.

        Returns:
            Current datetime with timezone information (UTC recommended).
        """
        ...

    @abstractmethod
    def utcnow(self) -> datetime:
        """Return current UTC time.

        Returns:
            Current datetime in UTC timezone.
        """
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return monotonic clock value for measuring elapsed time.

        Returns:
            Monotonically increasing float value (in seconds).

        Note:
            Use this for measuring elapsed time, not for timestamps.
            The reference point is arbitrary - only differences are meaningful.
        """
        ...
