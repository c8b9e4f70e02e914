from datetime import date
from typing import Any, Dict, List, Optional

from app.core.config import DEFAULT_USER, LEDGER_TX_TIMEOUT
from app.services import expiry_sweep, history_service, inventory_service, notification_service
from app.services.action_validator import validate_action_request
from app.services.expiry_sweep import SweepStats
from app.services.ledger_service import ActionResult, apply_action


class InventoryLedger:
    """
    Application-scoped entry point to the ledger. Created once in the FastAPI
    lifespan and stored on app.state; holds configuration only, all state lives in the database.
    """

    def __init__(self, default_user: str = DEFAULT_USER, tx_timeout: float = LEDGER_TX_TIMEOUT):
        self.default_user = default_user
        self.tx_timeout = tx_timeout

    async def submit_action(
        self,
        item_code: Any,
        action: Any,
        quantity: Any = None,
        case_id: Any = None,
        user: Any = None,
    ) -> ActionResult:
        request = validate_action_request(
            item_code, action, quantity, case_id, user, default_user=self.default_user
        )
        return await apply_action(request, timeout=self.tx_timeout)

    async def query_history(self, **filters: Optional[str]) -> List[Dict[str, Any]]:
        return await history_service.query_history(**filters)

    async def list_notifications(self, unread_only: bool = False) -> List[Dict[str, Any]]:
        return await notification_service.list_notifications(unread_only=unread_only)

    async def acknowledge_notification(self, notification_id: int) -> Dict[str, Any]:
        return await notification_service.acknowledge_notification(notification_id)

    async def list_inventory(self) -> Dict[str, Any]:
        return await inventory_service.list_inventory()

    async def get_item(self, item_code: str) -> Dict[str, Any]:
        return await inventory_service.get_item(item_code)

    async def run_expiry_sweep(self, today: Optional[date] = None) -> SweepStats:
        return await expiry_sweep.run_expiry_sweep(today=today)
