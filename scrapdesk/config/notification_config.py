"""Notification engine configuration.

This module defines configuration for transaction classification, queue
dedup and expiry, the aggregate refresh debounce and the subscribed
tables, with environment variable overrides for deployment tuning.

Environment Variables (Classification):
- SCRAPDESK_HIGH_AMOUNT_THRESHOLD: UPDATE amount above which priority is HIGH (default: 100000)
- SCRAPDESK_MEDIUM_AMOUNT_THRESHOLD: UPDATE amount above which priority is MEDIUM (default: 50000)

Environment Variables (Engine):
- SCRAPDESK_DEDUP_WINDOW_MS: Near-duplicate collapse window in ms (default: 1000)
- SCRAPDESK_REFRESH_DEBOUNCE_SECONDS: Aggregate refresh debounce (default: 1.0)
- SCRAPDESK_DEFAULT_EXPIRY_HOURS: Lifetime of INSERT/UPDATE notifications (default: 24)
- SCRAPDESK_DELETE_EXPIRY_HOURS: Lifetime of DELETE notifications (default: 1)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal, InvalidOperation

from scrapdesk.domain.models.queue_policy import QueuePolicy
from scrapdesk.domain.models.transaction_event import TransactionType


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_decimal_env(key: str, default: Decimal) -> Decimal:
    """Get decimal environment variable with default.

    Money thresholds are parsed as Decimal so "100000.50" keeps its cents.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return Decimal(value)
    except InvalidOperation:
        return default


@dataclass(frozen=True)
class ClassificationThresholds:
    """Amount thresholds for classifying UPDATE events.

    Attributes:
        high_threshold: UPDATE amounts strictly above this are HIGH.
                        Default: 100000.
        medium_threshold: UPDATE amounts strictly above this (and not HIGH)
                          are MEDIUM. Default: 50000.
    """

    high_threshold: Decimal = Decimal("100000")
    medium_threshold: Decimal = Decimal("50000")

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.medium_threshold < 0:
            raise ValueError(
                f"medium_threshold must be non-negative, got {self.medium_threshold}"
            )
        if self.medium_threshold >= self.high_threshold:
            raise ValueError(
                f"medium_threshold ({self.medium_threshold}) must be less than "
                f"high_threshold ({self.high_threshold})"
            )

    @classmethod
    def from_environment(cls) -> "ClassificationThresholds":
        """Create thresholds from environment variables with defaults.

        Environment Variables:
            SCRAPDESK_HIGH_AMOUNT_THRESHOLD: HIGH threshold (default: 100000)
            SCRAPDESK_MEDIUM_AMOUNT_THRESHOLD: MEDIUM threshold (default: 50000)

        Returns:
            ClassificationThresholds with values from environment or defaults.
        """
        return cls(
            high_threshold=_get_decimal_env(
                "SCRAPDESK_HIGH_AMOUNT_THRESHOLD", Decimal("100000")
            ),
            medium_threshold=_get_decimal_env(
                "SCRAPDESK_MEDIUM_AMOUNT_THRESHOLD", Decimal("50000")
            ),
        )


DEFAULT_CLASSIFICATION_THRESHOLDS = ClassificationThresholds()


@dataclass(frozen=True)
class NotificationEngineConfig:
    """Configuration for the notification engine.

    Attributes:
        thresholds: Classification thresholds for UPDATE events.
        dedup_window_ms: Same transaction and kind enqueued within this
                         many milliseconds collapse to one. Default: 1000.
        refresh_debounce_seconds: Quiet period before the aggregate refresh
                                  fires after a burst. Default: 1.0.
        default_expiry_hours: Lifetime of INSERT/UPDATE notifications.
                              Default: 24.
        delete_expiry_hours: Lifetime of DELETE notifications. Default: 1.
        payment_bearing_types: Transaction types whose INSERTs require the
                               operator to confirm payment before completion.
        purchase_table: Feed table carrying purchase transactions.
        sales_table: Feed table carrying sales transactions.
        channel_prefix: Prefix of the feed channel names.
    """

    thresholds: ClassificationThresholds = field(
        default_factory=ClassificationThresholds
    )
    dedup_window_ms: int = 1000
    refresh_debounce_seconds: float = 1.0
    default_expiry_hours: int = 24
    delete_expiry_hours: int = 1
    payment_bearing_types: frozenset[TransactionType] = frozenset(
        {TransactionType.PURCHASE, TransactionType.SALE}
    )
    purchase_table: str = "transactions"
    sales_table: str = "sales_transactions"
    channel_prefix: str = "notifications"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.dedup_window_ms < 0:
            raise ValueError(
                f"dedup_window_ms must be non-negative, got {self.dedup_window_ms}"
            )
        if self.refresh_debounce_seconds < 0:
            raise ValueError(
                "refresh_debounce_seconds must be non-negative, "
                f"got {self.refresh_debounce_seconds}"
            )
        if self.default_expiry_hours < 1:
            raise ValueError(
                f"default_expiry_hours must be positive, got {self.default_expiry_hours}"
            )
        if self.delete_expiry_hours < 1:
            raise ValueError(
                f"delete_expiry_hours must be positive, got {self.delete_expiry_hours}"
            )
        if not self.purchase_table or not self.sales_table:
            raise ValueError("purchase_table and sales_table must be non-empty")
        if self.purchase_table == self.sales_table:
            raise ValueError(
                f"purchase_table and sales_table must differ, got '{self.purchase_table}'"
            )

    @property
    def tables(self) -> dict[str, TransactionType]:
        """Subscribed tables mapped to the transaction type they carry."""
        return {
            self.purchase_table: TransactionType.PURCHASE,
            self.sales_table: TransactionType.SALE,
        }

    def channel_for(self, table: str) -> str:
        return f"{self.channel_prefix}-{table}"

    def to_queue_policy(self) -> QueuePolicy:
        """Build the domain queue policy from this configuration."""
        return QueuePolicy(
            high_threshold=self.thresholds.high_threshold,
            medium_threshold=self.thresholds.medium_threshold,
            dedup_window=timedelta(milliseconds=self.dedup_window_ms),
            default_expiry=timedelta(hours=self.default_expiry_hours),
            delete_expiry=timedelta(hours=self.delete_expiry_hours),
        )

    @classmethod
    def from_environment(cls) -> "NotificationEngineConfig":
        """Create config from environment variables with defaults.

        Environment Variables:
            SCRAPDESK_HIGH_AMOUNT_THRESHOLD: HIGH threshold (default: 100000)
            SCRAPDESK_MEDIUM_AMOUNT_THRESHOLD: MEDIUM threshold (default: 50000)
            SCRAPDESK_DEDUP_WINDOW_MS: Dedup window ms (default: 1000)
            SCRAPDESK_REFRESH_DEBOUNCE_SECONDS: Refresh debounce (default: 1.0)
            SCRAPDESK_DEFAULT_EXPIRY_HOURS: INSERT/UPDATE expiry (default: 24)
            SCRAPDESK_DELETE_EXPIRY_HOURS: DELETE expiry (default: 1)

        Returns:
            NotificationEngineConfig with values from environment or defaults.
        """
        return cls(
            thresholds=ClassificationThresholds.from_environment(),
            dedup_window_ms=_get_int_env("SCRAPDESK_DEDUP_WINDOW_MS", 1000),
            refresh_debounce_seconds=_get_float_env(
                "SCRAPDESK_REFRESH_DEBOUNCE_SECONDS", 1.0
            ),
            default_expiry_hours=_get_int_env("SCRAPDESK_DEFAULT_EXPIRY_HOURS", 24),
            delete_expiry_hours=_get_int_env("SCRAPDESK_DELETE_EXPIRY_HOURS", 1),
        )


# Pre-defined configurations for common use cases

# Default production config
DEFAULT_NOTIFICATION_ENGINE_CONFIG = NotificationEngineConfig()

# Testing config: no debounce delay so refreshes can be awaited directly
TEST_NOTIFICATION_ENGINE_CONFIG = NotificationEngineConfig(
    refresh_debounce_seconds=0.0,
)
