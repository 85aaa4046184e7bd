"""Route group exports."""

from . import customers, dashboard, health, regions

__all__ = ["customers", "dashboard", "health", "regions"]
