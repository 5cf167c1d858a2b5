"""
Order schemas package
"""

from .order import OrderBase, OrderCreate, OrderItemsUpdate, OrderResponse

__all__ = [
    "OrderBase",
    "OrderCreate",
    "OrderItemsUpdate",
    "OrderResponse",
]
