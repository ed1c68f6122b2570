"""Configuration for the notification engine."""

from scrapdesk.config.notification_config import (
    DEFAULT_CLASSIFICATION_THRESHOLDS,
    DEFAULT_NOTIFICATION_ENGINE_CONFIG,
    TEST_NOTIFICATION_ENGINE_CONFIG,
    ClassificationThresholds,
    NotificationEngineConfig,
)

__all__: list[str] = [
    "ClassificationThresholds",
    "DEFAULT_CLASSIFICATION_THRESHOLDS",
    "DEFAULT_NOTIFICATION_ENGINE_CONFIG",
    "NotificationEngineConfig",
    "TEST_NOTIFICATION_ENGINE_CONFIG",
]
