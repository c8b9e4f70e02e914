import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from tortoise import timezone
from tortoise.exceptions import BaseORMException
from tortoise.transactions import in_transaction

from app.core.config import LEDGER_TX_TIMEOUT
from app.core.exceptions import ItemNotFound, TransactionFailure
from app.models.history import ActionRecord, LedgerAction
from app.models.inventory import InventoryItem
from app.services.action_validator import ValidatedAction, check_availability
from app.services.alert_service import is_low_stock, record_low_stock_alert

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionResult:
    new_quantity: int
    record_id: int
    low_stock_alert_id: Optional[int] = None

    @property
    def low_stock_alert(self) -> bool:
        return self.low_stock_alert_id is not None


def compute_new_quantity(current: int, action: LedgerAction, quantity: int) -> int:
    """
    Applies the action's delta to the current stock, floored at zero.
    Transfer only decrements: the destination is not credited on a single-location record.
    """
    if action == LedgerAction.CHECK_IN:
        updated = current + quantity
    elif action.reduces_stock or action == LedgerAction.TRANSFER:
        updated = current - quantity
    else:
        updated = current
    return max(0, updated)


async def _apply_in_transaction(request: ValidatedAction) -> ActionResult:
    async with in_transaction() as conn:
        # 1. CRITICAL: Lock the item row so concurrent actions cannot both read the same stock level
        item = await (
            InventoryItem.filter(item_code=request.item_code)
            .using_db(conn)
            .select_for_update()
            .first()
        )
        if not item:
            raise ItemNotFound(request.item_code)

        # 2. Re-evaluate the stock precondition on the locked row
        check_availability(request, item.quantity)

        # 3. Apply the quantity delta
        item.quantity = compute_new_quantity(item.quantity, request.action, request.quantity)
        item.last_action_at = timezone.now()
        await item.save(update_fields=["quantity", "last_action_at"], using_db=conn)

        # 4. Append the history record with a snapshot of the item's descriptive fields
        record = await ActionRecord.create(
            item_id=item.id,
            item_code=item.item_code,
            item_name=item.name,
            category=item.category,
            action=request.action,
            action_label=request.action_label,
            quantity=request.quantity,
            case_id=request.case_id,
            user=request.user,
            using_db=conn,
        )

        # 5. Post-update low stock check (check-in never alerts)
        await item.refresh_from_db(
            fields=["quantity", "min_quantity", "name", "location", "expiry_date"],
            using_db=conn,
        )
        alert = None
        if request.action.triggers_low_stock and is_low_stock(item.quantity, item.min_quantity):
            alert = await record_low_stock_alert(item, conn)

    return ActionResult(
        new_quantity=item.quantity,
        record_id=record.id,
        low_stock_alert_id=alert.id if alert else None,
    )


async def apply_action(request: ValidatedAction, timeout: float = LEDGER_TX_TIMEOUT) -> ActionResult:
    """
    Executes one action as a single all-or-nothing unit of work:
    lock item -> stock check -> update quantity -> insert history -> conditional low stock alert.

    ItemNotFound and InsufficientStock propagate unchanged. Storage errors and
    timeouts are reported as TransactionFailure once the transaction has rolled back.
    No retry happens here; resubmitting is the caller's decision.
    """
    try:
        result = await asyncio.wait_for(_apply_in_transaction(request), timeout=timeout)
    except asyncio.TimeoutError:
        log.error(f"Action {request.action_label} on {request.item_code} timed out after {timeout}s; rolled back.")
        raise TransactionFailure(f"Transaction did not complete within {timeout} seconds.") from None
    except BaseORMException as e:
        log.error(f"Transaction failed for {request.action_label} on {request.item_code}: {e}")
        raise TransactionFailure(str(e)) from e

    log.info(
        f"{request.action.value} x{request.quantity} on {request.item_code} "
        f"(case {request.case_id}) -> quantity {result.new_quantity}"
    )
    return result
