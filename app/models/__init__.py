# app/models/__init__.py
from .inventory import InventoryItem, ItemCategory
from .history import ActionRecord, LedgerAction
from .notification import AlertType, NotificationEntry
from .outbox import OutboxEvent

# Export all models
__all__ = [
    "ActionRecord",
    "AlertType",
    "InventoryItem",
    "ItemCategory",
    "LedgerAction",
    "NotificationEntry",
    "OutboxEvent",
]
