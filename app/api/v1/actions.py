import logging
from fastapi import APIRouter, Depends, status
from app.api.deps import get_ledger
from app.schemas.action import ActionRequest, ActionResponse
from app.schemas.response import SuccessResponse
from app.services.ledger import InventoryLedger

router = APIRouter()
log = logging.getLogger(__name__)


@router.post("", status_code=status.HTTP_200_OK, response_model=SuccessResponse)
async def submit_action_endpoint(payload: ActionRequest, ledger: InventoryLedger = Depends(get_ledger)):
    """
    Logs an inventory action (Check In, Use, Transfer, Remove All, Check Out) and updates the item quantity.
    Ledger failures propagate to the registered exception handlers.
    """
    result = await ledger.submit_action(
        item_code=payload.item_code,
        action=payload.action,
        quantity=payload.quantity,
        case_id=payload.case_id,
        user=payload.user,
    )
    data = ActionResponse(
        new_quantity=result.new_quantity,
        record_id=result.record_id,
        low_stock_alert=result.low_stock_alert,
    ).model_dump(by_alias=True)
    return SuccessResponse(data=data)
