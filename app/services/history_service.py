from datetime import datetime
from typing import Any, Dict, List, Optional

from app.core.exceptions import ValidationFailure
from app.models.history import ActionRecord, LedgerAction
from app.models.inventory import ItemCategory

# Sort directives accepted by query_history, mapped to ORM orderings
SORT_ORDERS = {
    "date": ("-created_at", "-id"),
    "newest": ("-created_at", "-id"),
    "oldest": ("created_at", "id"),
}


def format_timestamp(value: Optional[datetime]) -> str:
    """Renders e.g. '05/21/2024, 10:00:00 AM'."""
    if value is None:
        return "N/A"
    return value.strftime("%m/%d/%Y, %I:%M:%S %p")


def serialize_record(record: ActionRecord) -> Dict[str, Any]:
    return {
        "id": record.id,
        "itemId": record.item_code,
        "itemName": record.item_name,
        "category": record.category.value,
        "action": record.action.value,
        "actionLabel": record.action_label,
        "quantity": record.quantity,
        "caseId": record.case_id,
        "user": record.user,
        "date": format_timestamp(record.created_at),
        "timestamp": record.created_at.isoformat() if record.created_at else None,
    }


def _parse_category(category: str) -> ItemCategory:
    for member in ItemCategory:
        if category.strip().lower() in (member.value.lower(), member.name.lower()):
            return member
    raise ValidationFailure(f"Unknown category '{category}'.", field="category")


async def query_history(
    case_id: Optional[str] = None,
    action: Optional[str] = None,
    category: Optional[str] = None,
    item_code: Optional[str] = None,
    sort: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Returns ActionRecord snapshots matching every given filter, newest first unless sort='oldest'."""
    ordering = SORT_ORDERS.get((sort or "date").strip().lower())
    if ordering is None:
        raise ValidationFailure(f"Unsupported sort '{sort}'.", field="sort")

    query = ActionRecord.all()
    if case_id:
        query = query.filter(case_id=case_id)
    if action:
        parsed = LedgerAction.parse(action)
        if parsed is LedgerAction.OTHER:
            # Free-text actions share OTHER, so match the label they were submitted with
            query = query.filter(action=parsed, action_label=action.strip())
        else:
            query = query.filter(action=parsed)
    if category:
        query = query.filter(category=_parse_category(category))
    if item_code:
        query = query.filter(item_code=item_code)

    records = await query.order_by(*ordering)
    return [serialize_record(r) for r in records]
