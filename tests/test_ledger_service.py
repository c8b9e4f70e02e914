import asyncio
import pytest
from unittest.mock import AsyncMock, patch
from tortoise.exceptions import OperationalError

from app.core.exceptions import InsufficientStock, ItemNotFound, TransactionFailure
from app.models.history import ActionRecord, LedgerAction
from app.models.inventory import InventoryItem
from app.models.notification import AlertType, NotificationEntry
from app.models.outbox import OutboxEvent
from app.services.action_validator import validate_action_request
from app.services.ledger import InventoryLedger
from app.services.ledger_service import apply_action, compute_new_quantity


@pytest.mark.parametrize("current, action, qty, expected", [
    (10, LedgerAction.CHECK_IN, 1, 11),
    (10, LedgerAction.USE, 5, 5),
    (10, LedgerAction.CHECK_OUT, 10, 0),
    (10, LedgerAction.REMOVE_ALL, 10, 0),
    (10, LedgerAction.TRANSFER, 4, 6),
    (10, LedgerAction.TRANSFER, 40, 0),
    (10, LedgerAction.OTHER, 3, 10),
])
def test_compute_new_quantity(current, action, qty, expected):
    assert compute_new_quantity(current, action, qty) == expected


async def _submit(item_code, action, quantity, **kwargs):
    return await apply_action(validate_action_request(item_code, action, quantity, **kwargs))


class TestActionOutcomes:
    @pytest.mark.asyncio
    async def test_use_without_alert(self, make_item):
        """qty 10, Use 5 -> 5, one record, no notification."""
        item = await make_item(quantity=10, min_quantity=2)

        result = await _submit("MED001", "Use", 5)

        assert result.new_quantity == 5
        assert not result.low_stock_alert
        records = await ActionRecord.filter(item_id=item.id)
        assert len(records) == 1
        assert records[0].action == LedgerAction.USE
        assert records[0].quantity == 5
        assert await NotificationEntry.all().count() == 0

    @pytest.mark.asyncio
    async def test_use_crossing_threshold(self, make_item):
        """qty 10, min 5, Use 8 -> 2 and exactly one LowStock entry."""
        item = await make_item(quantity=10, min_quantity=5)

        result = await _submit("MED001", "Use", 8)

        assert result.new_quantity == 2
        assert result.low_stock_alert
        assert await ActionRecord.filter(item_id=item.id).count() == 1
        alerts = await NotificationEntry.filter(item_id=item.id)
        assert len(alerts) == 1
        assert alerts[0].alert_type == AlertType.LOW_STOCK
        assert alerts[0].details == "Quantity is 2, which is at or below the minimum of 5."
        assert alerts[0].item_code == "MED001"
        assert alerts[0].location == "Ambulance 1"
        assert not alerts[0].is_read

        events = await OutboxEvent.filter(event_type="notification.low_stock.v1")
        assert len(events) == 1
        assert events[0].payload["notification_id"] == alerts[0].id

    @pytest.mark.asyncio
    async def test_insufficient_stock_leaves_no_trace(self, make_item):
        """Use 30 of 10 is rejected and nothing changes."""
        item = await make_item(quantity=10, min_quantity=5)

        with pytest.raises(InsufficientStock) as excinfo:
            await _submit("MED001", "Use", 30)

        assert excinfo.value.available == 10
        assert excinfo.value.requested == 30
        await item.refresh_from_db()
        assert item.quantity == 10
        assert await ActionRecord.all().count() == 0
        assert await NotificationEntry.all().count() == 0

    @pytest.mark.asyncio
    async def test_unknown_item(self, make_item):
        """Unknown code fails with ItemNotFound and mutates nothing."""
        item = await make_item(quantity=10)

        with pytest.raises(ItemNotFound) as excinfo:
            await _submit("NON999", "Use", 1)

        assert excinfo.value.item_code == "NON999"
        await item.refresh_from_db()
        assert item.quantity == 10
        assert await ActionRecord.all().count() == 0
        assert await NotificationEntry.all().count() == 0

    @pytest.mark.asyncio
    async def test_check_in_never_alerts(self, make_item):
        """Check In 1 on qty 10 -> 11, no notification even with min >= 11."""
        await make_item(quantity=10, min_quantity=20)

        result = await _submit("MED001", "Check In", 1)

        assert result.new_quantity == 11
        assert await NotificationEntry.all().count() == 0


class TestLedgerBehaviour:
    @pytest.mark.asyncio
    async def test_record_snapshot_and_defaults(self, make_item):
        item = await make_item(quantity=10)

        result = await _submit("MED001", "Check Out", 2)

        record = await ActionRecord.get(id=result.record_id)
        assert record.item_code == "MED001"
        assert record.item_name == "Epinephrine Auto-Injector"
        assert record.category == item.category
        assert record.user == "Current User"
        assert record.case_id.startswith("C") and len(record.case_id) == 6

        await item.refresh_from_db()
        assert item.last_action_at is not None

    @pytest.mark.asyncio
    async def test_snapshot_survives_rename(self, make_item):
        item = await make_item(quantity=10)
        result = await _submit("MED001", "Use", 1)

        item.name = "Epinephrine 0.3mg"
        await item.save()

        record = await ActionRecord.get(id=result.record_id)
        assert record.item_name == "Epinephrine Auto-Injector"

    @pytest.mark.asyncio
    async def test_zero_quantity_is_logged(self, make_item):
        await make_item(quantity=10)

        result = await _submit("MED001", "Use", "not-a-number")

        assert result.new_quantity == 10
        record = await ActionRecord.get(id=result.record_id)
        assert record.quantity == 0

    @pytest.mark.asyncio
    async def test_unknown_action_logs_only(self, make_item):
        await make_item(quantity=3, min_quantity=5)

        result = await _submit("MED001", "Inspect", 2)

        assert result.new_quantity == 3
        record = await ActionRecord.get(id=result.record_id)
        assert record.action == LedgerAction.OTHER
        assert record.action_label == "Inspect"
        assert await NotificationEntry.all().count() == 0

    @pytest.mark.asyncio
    async def test_transfer_decrements_and_alerts(self, make_item):
        await make_item(quantity=4, min_quantity=2)

        result = await _submit("MED001", "Transfer", 3)

        assert result.new_quantity == 1
        assert result.low_stock_alert

    @pytest.mark.asyncio
    async def test_transfer_beyond_stock_floors_at_zero(self, make_item):
        await make_item(quantity=4)

        result = await _submit("MED001", "Transfer", 9)

        assert result.new_quantity == 0

    @pytest.mark.asyncio
    async def test_remove_all(self, make_item):
        await make_item(quantity=7, min_quantity=0)

        result = await _submit("MED001", "Remove All", 7)

        assert result.new_quantity == 0
        assert await NotificationEntry.filter(alert_type=AlertType.LOW_STOCK).count() == 1

    @pytest.mark.asyncio
    async def test_check_out_crossing_threshold_alerts(self, make_item):
        item = await make_item(quantity=5, min_quantity=3)

        result = await _submit("MED001", "Check Out", 2)

        assert result.new_quantity == 3
        assert result.low_stock_alert
        alerts = await NotificationEntry.filter(item_id=item.id, alert_type=AlertType.LOW_STOCK)
        assert len(alerts) == 1
        assert alerts[0].details == "Quantity is 3, which is at or below the minimum of 3."

    @pytest.mark.asyncio
    async def test_each_low_action_records_its_own_alert(self, make_item):
        await make_item(quantity=6, min_quantity=5)

        await _submit("MED001", "Use", 1)
        await _submit("MED001", "Use", 1)

        assert await NotificationEntry.filter(alert_type=AlertType.LOW_STOCK).count() == 2

    @pytest.mark.asyncio
    async def test_newest_record_is_last_action(self, make_item):
        item = await make_item(quantity=10)

        await _submit("MED001", "Use", 1)
        last = await _submit("MED001", "Check In", 4)

        newest = await ActionRecord.filter(item_id=item.id).order_by("-created_at", "-id").first()
        assert newest.id == last.record_id

    @pytest.mark.asyncio
    async def test_concurrent_actions_do_not_lose_updates(self, make_item):
        item = await make_item(quantity=3)

        results = await asyncio.gather(
            *[_submit("MED001", "Use", 1) for _ in range(5)],
            return_exceptions=True,
        )

        succeeded = [r for r in results if not isinstance(r, Exception)]
        rejected = [r for r in results if isinstance(r, InsufficientStock)]
        assert len(succeeded) == 3
        assert len(rejected) == 2
        await item.refresh_from_db()
        assert item.quantity == 0
        assert await ActionRecord.all().count() == 3


class TestFailureHandling:
    @pytest.mark.asyncio
    async def test_history_insert_failure_rolls_back_quantity(self, make_item):
        item = await make_item(quantity=10)

        with patch.object(ActionRecord, "create", AsyncMock(side_effect=OperationalError("disk I/O error"))):
            with pytest.raises(TransactionFailure) as excinfo:
                await _submit("MED001", "Use", 4)

        assert "disk I/O error" in excinfo.value.reason
        await item.refresh_from_db()
        assert item.quantity == 10
        assert await ActionRecord.all().count() == 0

    @pytest.mark.asyncio
    async def test_timeout_reports_transaction_failure(self):
        async def slow(_request):
            await asyncio.sleep(1)

        request = validate_action_request("MED001", "Use", 1)
        with patch("app.services.ledger_service._apply_in_transaction", slow):
            with pytest.raises(TransactionFailure):
                await apply_action(request, timeout=0.01)

    @pytest.mark.asyncio
    async def test_timeout_mid_transaction_rolls_back_quantity(self, make_item):
        """Quantity write made before a stalled history insert is undone"""
        item = await make_item(quantity=10)

        async def slow_create(*args, **kwargs):
            await asyncio.sleep(1)

        with patch.object(ActionRecord, "create", slow_create):
            with pytest.raises(TransactionFailure):
                await apply_action(validate_action_request("MED001", "Use", 4), timeout=0.05)

        await item.refresh_from_db()
        assert item.quantity == 10
        assert await ActionRecord.all().count() == 0

        result = await _submit("MED001", "Use", 1)
        assert result.new_quantity == 9


class TestInventoryLedger:
    @pytest.mark.asyncio
    async def test_submit_action_uses_configured_user(self, make_item):
        await make_item(quantity=5)
        ledger = InventoryLedger(default_user="Medic on duty")

        result = await ledger.submit_action("MED001", "Use", 2)

        record = await ActionRecord.get(id=result.record_id)
        assert record.user == "Medic on duty"
        assert (await InventoryItem.get(item_code="MED001")).quantity == 3
