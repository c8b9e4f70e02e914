import math
import secrets
from dataclasses import dataclass
from typing import Any, Optional

from app.core.config import DEFAULT_USER
from app.core.exceptions import InsufficientStock, ValidationFailure
from app.models.history import LedgerAction


@dataclass(frozen=True)
class ValidatedAction:
    """Normalized action request. Produced by validate_action_request, consumed by the ledger engine."""
    item_code: str
    action: LedgerAction
    action_label: str
    quantity: int
    case_id: str
    user: str


def generate_case_id() -> str:
    """Fallback case reference: 'C' followed by five digits (10000-99999)."""
    return f"C{10000 + secrets.randbelow(90000)}"


def coerce_quantity(raw: Any) -> int:
    """
    Coerces caller input to a non-negative integer.
    Missing, boolean, non-numeric or non-finite input becomes 0; negatives floor at 0.
    """
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return 0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(value):
        return 0
    return max(0, int(value))


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def validate_action_request(
    item_code: Any,
    action: Any,
    quantity: Any = None,
    case_id: Any = None,
    user: Any = None,
    default_user: str = DEFAULT_USER,
) -> ValidatedAction:
    """
    Structural validation of a submitted action. Touches no storage.
    Raises ValidationFailure when the item code or action is absent.
    """
    code = _clean(item_code)
    if code is None:
        raise ValidationFailure("Item code is required.", field="itemCode")

    label = _clean(action)
    if label is None:
        raise ValidationFailure("Action is required.", field="action")

    return ValidatedAction(
        item_code=code,
        action=LedgerAction.parse(label),
        action_label=label,
        quantity=coerce_quantity(quantity),
        case_id=_clean(case_id) or generate_case_id(),
        user=_clean(user) or default_user,
    )


def check_availability(request: ValidatedAction, available: int) -> None:
    """
    Business precondition evaluated against the item's current (locked) quantity.
    Only Use, Check Out and Remove All are bounded by what is on hand.
    """
    if request.action.reduces_stock and request.quantity > available:
        raise InsufficientStock(available=available, requested=request.quantity, item_code=request.item_code)
