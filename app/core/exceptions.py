from typing import Any, Dict, Optional


class LedgerError(Exception):
    """
    Base class for every failure the ledger reports to its caller.
    Each subclass carries a stable error code and the HTTP status the API maps it to.
    """
    code = "ledger_error"
    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationFailure(LedgerError):
    """Malformed request shape. Raised before any storage access."""
    code = "validation_error"
    status_code = 422

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, {"field": field} if field else None)
        self.field = field


class ItemNotFound(LedgerError):
    code = "item_not_found"
    status_code = 404

    def __init__(self, item_code: str):
        super().__init__(f"Item ID {item_code} not found.", {"itemCode": item_code})
        self.item_code = item_code


class InsufficientStock(LedgerError):
    """A stock-reducing action asked for more than is on hand."""
    code = "insufficient_stock"
    status_code = 400

    def __init__(self, available: int, requested: int, item_code: Optional[str] = None):
        details = {"available": available, "requested": requested}
        if item_code:
            details["itemCode"] = item_code
        super().__init__(
            f"Insufficient stock. Available: {available}, Requested: {requested}",
            details,
        )
        self.available = available
        self.requested = requested
        self.item_code = item_code


class TransactionFailure(LedgerError):
    """
    Storage-level failure (connectivity, constraint violation, lock timeout).
    The transaction has been rolled back, so the caller may resubmit the identical request.
    """
    code = "transaction_failed"
    status_code = 500

    def __init__(self, reason: str = "Failed to complete inventory transaction."):
        super().__init__("Failed to complete inventory transaction.", {"reason": reason})
        self.reason = reason


class NotificationNotFound(LedgerError):
    code = "notification_not_found"
    status_code = 404

    def __init__(self, notification_id: int):
        super().__init__(f"Notification {notification_id} not found.", {"id": notification_id})
        self.notification_id = notification_id
