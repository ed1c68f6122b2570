"""Domain signals emitted by the notification engine."""
