"""Application services for the notification pipeline."""
