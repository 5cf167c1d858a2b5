"""
Order Service Models

This module contains all database models for the Order Service.
"""

from .base import OrderServiceBase
from .order import Order

__all__ = [
    # Base classes
    "OrderServiceBase",
    # Order models
    "Order",
]
