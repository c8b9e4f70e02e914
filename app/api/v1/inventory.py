from fastapi import APIRouter, Depends
from app.api.deps import get_ledger
from app.schemas.response import SuccessResponse
from app.services.ledger import InventoryLedger

router = APIRouter()


@router.get("", response_model=SuccessResponse)
async def list_inventory_endpoint(ledger: InventoryLedger = Depends(get_ledger)):
    """Fetches all inventory items with their stock status and the check-in/check-out summary."""
    return SuccessResponse(data=await ledger.list_inventory())


@router.get("/{item_code}", response_model=SuccessResponse)
async def get_inventory_item_endpoint(item_code: str, ledger: InventoryLedger = Depends(get_ledger)):
    """Fetches one item by its code."""
    return SuccessResponse(data=await ledger.get_item(item_code))
