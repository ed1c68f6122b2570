"""
Application layer - Use cases and orchestration.

Coordinates the pure domain reducer with the outside world through
ports. Must NOT import from infrastructure.
"""
