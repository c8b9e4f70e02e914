from typing import Any, Dict, List

from tortoise.functions import Sum

from app.core.exceptions import ItemNotFound
from app.models.history import ActionRecord, LedgerAction
from app.models.inventory import InventoryItem

IN_STOCK = "In Stock"
LOW_STOCK = "Low Stock"
OUT_OF_STOCK = "Out of Stock"


def stock_status(quantity: int, min_quantity: int) -> str:
    """Display status. Strictly below the minimum reads as Low Stock here, unlike the alert rule which fires at the minimum."""
    if quantity <= 0:
        return OUT_OF_STOCK
    if quantity < min_quantity:
        return LOW_STOCK
    return IN_STOCK


def serialize_item(item: InventoryItem) -> Dict[str, Any]:
    return {
        "id": item.item_code,
        "dbId": item.id,
        "name": item.name,
        "category": item.category.value,
        "quantity": item.quantity,
        "minQuantity": item.min_quantity,
        "status": stock_status(item.quantity, item.min_quantity),
        "expiryDate": item.expiry_date.isoformat() if item.expiry_date else None,
        "location": item.location,
        "lastScanned": item.last_action_at.strftime("%m/%d/%Y") if item.last_action_at else None,
    }


async def get_item(item_code: str) -> Dict[str, Any]:
    item = await InventoryItem.get_or_none(item_code=item_code)
    if not item:
        raise ItemNotFound(item_code)
    return serialize_item(item)


async def list_inventory() -> Dict[str, Any]:
    """All items with their derived status, plus the home-screen summary computed from history."""
    items = [serialize_item(i) for i in await InventoryItem.all().order_by("item_code")]

    totals = await (
        ActionRecord.all()
        .annotate(total=Sum("quantity"))
        .group_by("action")
        .values("action", "total")
    )
    checked_in = 0
    checked_out = 0
    for row in totals:
        total = row["total"] or 0
        if row["action"] == LedgerAction.CHECK_IN:
            checked_in += total
        else:
            checked_out += total

    return {
        "items": items,
        "summary": {
            "checkedIn": checked_in,
            "checkedOut": checked_out,
            "lowStockCount": sum(1 for i in items if i["status"] == LOW_STOCK),
        },
    }
