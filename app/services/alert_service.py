import logging
from datetime import date
from typing import Any, Optional

from app.events.outbox_utility import create_outbox_event
from app.models.inventory import InventoryItem
from app.models.notification import AlertType, NotificationEntry

log = logging.getLogger(__name__)

EVENT_TYPES = {
    AlertType.LOW_STOCK: "notification.low_stock.v1",
    AlertType.EXPIRY_WARNING: "notification.expiry_warning.v1",
}


def is_low_stock(quantity: int, min_quantity: int) -> bool:
    return quantity <= min_quantity


def low_stock_details(quantity: int, min_quantity: int) -> str:
    return f"Quantity is {quantity}, which is at or below the minimum of {min_quantity}."


def expiry_details(days_left: int, expiry_date: date) -> str:
    unit = "day" if days_left == 1 else "days"
    return f"Expires in {days_left} {unit} on {expiry_date.isoformat()}."


def expiry_dedupe_key(item_id: int, on_day: date) -> str:
    return f"expiry:{item_id}:{on_day.isoformat()}"


async def record_alert(
    item: InventoryItem,
    alert_type: AlertType,
    details: str,
    conn: Any,
    dedupe_key: Optional[str] = None,
) -> NotificationEntry:
    """
    Inserts one NotificationEntry carrying a snapshot of the item, plus the outbox
    event that asks the delivery sink to send it. Both rows share the caller's transaction.
    """
    entry = await NotificationEntry.create(
        item_id=item.id,
        alert_type=alert_type,
        item_code=item.item_code,
        item_name=item.name,
        location=item.location,
        expiry_date=item.expiry_date,
        details=details,
        dedupe_key=dedupe_key,
        using_db=conn,
    )
    await create_outbox_event(
        aggregate_type="notification",
        aggregate_id=entry.id,
        event_type=EVENT_TYPES[alert_type],
        payload={
            "notification_id": entry.id,
            "alert_type": alert_type.value,
            "item_code": item.item_code,
            "item_name": item.name,
            "location": item.location,
            "expiry_date": item.expiry_date.isoformat() if item.expiry_date else None,
            "details": details,
        },
        conn=conn,
    )
    return entry


async def record_low_stock_alert(item: InventoryItem, conn: Any) -> NotificationEntry:
    log.warning(f"Low stock detected for item {item.item_code}: {item.quantity} <= {item.min_quantity}")
    return await record_alert(
        item,
        AlertType.LOW_STOCK,
        low_stock_details(item.quantity, item.min_quantity),
        conn,
    )


async def record_expiry_warning(
    item: InventoryItem, days_left: int, today: date, conn: Any
) -> Optional[NotificationEntry]:
    """
    Returns None when a warning for this item and day already exists (an earlier
    sweep recorded it). A concurrent sweep that slips past the check hits the unique
    dedupe_key and raises IntegrityError, which the caller treats as a duplicate
    after its transaction has rolled back.
    """
    key = expiry_dedupe_key(item.id, today)
    if await NotificationEntry.filter(dedupe_key=key).using_db(conn).exists():
        return None
    return await record_alert(
        item,
        AlertType.EXPIRY_WARNING,
        expiry_details(days_left, item.expiry_date),
        conn,
        dedupe_key=key,
    )
