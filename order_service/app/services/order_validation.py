"""
Order input validation.

Runs before the store is called. The store itself accepts any field as given.
"""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from ..core.exceptions import OrderValidationError
from ..schemas.order import OrderCreate, OrderItemsUpdate

ORDER_FIELDS = ("items", "orderDate", "orderTime", "quantity", "onHand")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _validate_items(items: Optional[str]) -> List[Dict[str, str]]:
    if items is None or not items.strip():
        return [{"field": "items", "message": "Items must not be blank"}]
    return []


def validate_order_input(data: Mapping[str, Any]) -> OrderCreate:
    """Turn raw form data into an ``OrderCreate`` or raise ``OrderValidationError``.

    Blank strings count as missing. ``items`` is required; ``quantity`` must not
    be negative. A checkbox style ``onHand`` ("on") is accepted as true.
    """
    payload = {
        field: _blank_to_none(data.get(field))
        for field in ORDER_FIELDS
        if field in data
    }
    if payload.get("onHand") == "on":
        payload["onHand"] = True
    elif "onHand" not in payload:
        payload["onHand"] = False

    errors = _validate_items(payload.get("items"))

    try:
        order = OrderCreate.model_validate(payload)
    except ValidationError as exc:
        for error in exc.errors():
            errors.append(
                {
                    "field": ".".join(str(loc) for loc in error["loc"]),
                    "message": error["msg"],
                }
            )
        raise OrderValidationError(errors) from exc

    if order.quantity is not None and order.quantity < 0:
        errors.append({"field": "quantity", "message": "Quantity cannot be negative"})

    if errors:
        raise OrderValidationError(errors)

    return order


def validate_items_update(data: Mapping[str, Any]) -> OrderItemsUpdate:
    """Validate an edit submission, which may only change ``items``."""
    items = _blank_to_none(data.get("items"))
    errors = _validate_items(items)
    if errors:
        raise OrderValidationError(errors)
    return OrderItemsUpdate(items=items)
