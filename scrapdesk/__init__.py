"""
Scrapdesk - Realtime transaction notification engine.

Turns the transaction change feed of a scrap-metal buying and selling
dashboard into a deduplicated, priority-ranked notification queue and
drives the operator acknowledgment workflow over it.

Layers:
- domain: pure queue, classification and workflow logic
- application: ports and the async engine orchestration
- infrastructure: observability, stubs and rendering-layer helpers
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
