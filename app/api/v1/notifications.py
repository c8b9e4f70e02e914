import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from app.api.deps import get_ledger
from app.schemas.response import SuccessResponse
from app.services.ledger import InventoryLedger

router = APIRouter()
log = logging.getLogger(__name__)


@router.get("", response_model=SuccessResponse)
async def list_notifications_endpoint(
    unread_only: bool = Query(False, alias="unreadOnly"),
    ledger: InventoryLedger = Depends(get_ledger),
):
    """Fetches all notifications/alerts, newest first."""
    return SuccessResponse(data=await ledger.list_notifications(unread_only=unread_only))


@router.post("/expiry-sweep", response_model=SuccessResponse)
async def run_expiry_sweep_endpoint(
    today: Optional[date] = Query(None, description="Sweep as of this date (defaults to today)."),
    ledger: InventoryLedger = Depends(get_ledger),
):
    """Runs one expiry sweep cycle immediately."""
    stats = await ledger.run_expiry_sweep(today=today)
    log.info(f"On-demand expiry sweep completed: {stats.as_dict()}")
    return SuccessResponse(data={"status": "completed", "stats": stats.as_dict()})


@router.post("/{notification_id}/read", response_model=SuccessResponse)
async def acknowledge_notification_endpoint(notification_id: int, ledger: InventoryLedger = Depends(get_ledger)):
    """Marks a specific notification as read. Safe to repeat."""
    return SuccessResponse(data=await ledger.acknowledge_notification(notification_id))
