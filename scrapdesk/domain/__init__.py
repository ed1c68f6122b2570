"""
Domain layer - Pure notification queue and workflow logic.

This layer contains:
- Domain models (events, notifications, queue, workflow session)
- Pure services (classifier, deduplicator, navigator, reducer)
- Domain signals
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure,
config or bootstrap. Only stdlib and typing imports are allowed.
"""
