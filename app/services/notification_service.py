from typing import Any, Dict, List

from app.core.exceptions import NotificationNotFound
from app.models.notification import NotificationEntry


def serialize_notification(entry: NotificationEntry) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "itemId": entry.item_code,
        "itemName": entry.item_name,
        "alertType": entry.alert_type.value,
        "expiry": entry.expiry_date.isoformat() if entry.expiry_date else None,
        "location": entry.location,
        "details": entry.details,
        "read": entry.is_read,
        "createdAt": entry.created_at.isoformat() if entry.created_at else None,
    }


async def list_notifications(unread_only: bool = False) -> List[Dict[str, Any]]:
    query = NotificationEntry.all()
    if unread_only:
        query = query.filter(is_read=False)
    entries = await query.order_by("-created_at", "-id")
    return [serialize_notification(e) for e in entries]


async def acknowledge_notification(notification_id: int) -> Dict[str, Any]:
    """Marks a notification read. Acknowledging an already-read entry is a no-op success."""
    updated = await NotificationEntry.filter(id=notification_id).update(is_read=True)
    # MySQL reports changed rows, not matched ones, so 0 can mean "already read"
    if not updated and not await NotificationEntry.filter(id=notification_id).exists():
        raise NotificationNotFound(notification_id)
    return {"id": notification_id, "read": True}
