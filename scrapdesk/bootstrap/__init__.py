"""Dependency wiring for the notification engine."""
