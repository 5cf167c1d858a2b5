"""
Order Service domain exceptions.

The error handler maps each of these to a distinct HTTP status, so callers can
tell a missing order apart from a broken database.
"""

from typing import Any, Dict, List, Optional


class OrderServiceError(Exception):
    """Base class for Order Service errors."""

    error_type = "order_service_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class OrderNotFoundError(OrderServiceError):
    """No order row matched the requested id."""

    error_type = "not_found"

    def __init__(self, order_id: int):
        super().__init__(
            f"Order {order_id} not found", details={"order_id": order_id}
        )
        self.order_id = order_id


class OrderStorageError(OrderServiceError):
    """The backing database failed; the original error is chained as __cause__."""

    error_type = "storage_error"

    def __init__(self, operation: str, message: Optional[str] = None):
        super().__init__(
            message or f"Order storage failure during {operation}",
            details={"operation": operation},
        )
        self.operation = operation


class OrderValidationError(OrderServiceError):
    """Order input rejected before reaching the store."""

    error_type = "order_validation_error"

    def __init__(self, errors: List[Dict[str, str]]):
        super().__init__(
            "Order validation failed", details={"validation_errors": errors}
        )
        self.errors = errors

    def messages(self) -> Dict[str, str]:
        """Field name to first error message, for form rendering."""
        result: Dict[str, str] = {}
        for error in self.errors:
            result.setdefault(error["field"], error["message"])
        return result


class OrdersApiError(OrderServiceError):
    """A call from the web front end to the orders REST API failed."""

    error_type = "upstream_error"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, details={"upstream_status": status_code})
        self.status_code = status_code
