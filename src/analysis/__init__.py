"""
Analysis modules for swapfeed.
"""

from .monitor import OrderType, PriceMonitor

__all__ = ["OrderType", "PriceMonitor"]
