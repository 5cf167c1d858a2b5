from datetime import date, time
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OrderBase(BaseModel):
    """Order fields as exchanged over the wire (camelCase)"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: Optional[str] = None
    order_date: Optional[date] = None
    order_time: Optional[time] = None
    quantity: Optional[int] = None
    on_hand: Optional[bool] = None


class OrderCreate(OrderBase):
    """Create order request; any orderId in the body is ignored"""

    pass


class OrderItemsUpdate(BaseModel):
    """Update order request; only items is writable"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: Optional[str] = Field(...)


class OrderResponse(OrderBase):
    """Persisted order"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    order_id: int = Field(..., gt=0)
