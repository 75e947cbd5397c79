"""API routes package"""

from . import catalog, health, plans

__all__ = ["catalog", "health", "plans"]
