from typing import Optional
from fastapi import APIRouter, Depends, Query
from app.api.deps import get_ledger
from app.schemas.response import SuccessResponse
from app.services.ledger import InventoryLedger

router = APIRouter()


@router.get("", response_model=SuccessResponse)
async def get_history_endpoint(
    case_id: Optional[str] = Query(None, alias="caseId"),
    action: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    item_code: Optional[str] = Query(None, alias="itemCode"),
    sort: Optional[str] = Query(None, description="'date'/'newest' (default) or 'oldest'"),
    ledger: InventoryLedger = Depends(get_ledger),
):
    """Fetches transaction records, newest first by default."""
    records = await ledger.query_history(
        case_id=case_id,
        action=action,
        category=category,
        item_code=item_code,
        sort=sort,
    )
    return SuccessResponse(data=records)
