"""
Infrastructure layer - Adapters, stubs and observability.

Implements application ports. May import from application and domain.
"""
