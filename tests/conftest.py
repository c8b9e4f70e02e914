import pytest
import pytest_asyncio
from datetime import date
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

from app.api.deps import get_ledger
from app.core.db import init_db, close_db
from app.main import app
from app.models.inventory import InventoryItem, ItemCategory


@pytest_asyncio.fixture
async def db():
    """Fresh in-memory SQLite database per test."""
    await init_db(db_url="sqlite://:memory:")
    yield
    await close_db()


@pytest.fixture
def make_item(db):
    """Factory for provisioned inventory items."""
    async def _make(
        item_code="MED001",
        name="Epinephrine Auto-Injector",
        category=ItemCategory.MEDICATION,
        quantity=10,
        min_quantity=0,
        expiry_date=None,
        location="Ambulance 1",
    ):
        return await InventoryItem.create(
            item_code=item_code,
            name=name,
            category=category,
            quantity=quantity,
            min_quantity=min_quantity,
            expiry_date=expiry_date,
            location=location,
        )
    return _make


@pytest.fixture
def mock_ledger():
    """Ledger double wired into the API through the dependency override."""
    ledger = MagicMock()
    ledger.submit_action = AsyncMock()
    ledger.query_history = AsyncMock(return_value=[])
    ledger.list_notifications = AsyncMock(return_value=[])
    ledger.acknowledge_notification = AsyncMock()
    ledger.list_inventory = AsyncMock()
    ledger.get_item = AsyncMock()
    ledger.run_expiry_sweep = AsyncMock()
    app.dependency_overrides[get_ledger] = lambda: ledger
    yield ledger
    app.dependency_overrides.pop(get_ledger, None)


@pytest.fixture
def client(mock_ledger):
    return TestClient(app)


@pytest.fixture
def today():
    return date(2026, 3, 1)
