# app/scripts/seed_data.py
import asyncio
from datetime import date
from app.core.db import init_db, close_db
from app.models.inventory import InventoryItem
from app.schemas.inventory import InventoryItemRequest

SEED_ITEMS = [
    InventoryItemRequest(item_code="MED001", name="Epinephrine Auto-Injector", category="Medication",
                         quantity=5, min_quantity=2, expiry_date=date(2027, 10, 21), location="Ambulance 1"),
    InventoryItemRequest(item_code="MED002", name="Morphine 10mg", category="Medication",
                         quantity=10, min_quantity=4, expiry_date=date(2027, 1, 7), location="Ambulance 1"),
    InventoryItemRequest(item_code="MED003", name="Aspirin 325mg", category="Medication",
                         quantity=20, min_quantity=5, expiry_date=date(2026, 11, 11), location="Ambulance 2"),
    InventoryItemRequest(item_code="EQP001", name="Defibrillator AED", category="Equipment",
                         quantity=2, min_quantity=1, expiry_date=date(2027, 2, 3), location="Ambulance Storage Room A"),
    InventoryItemRequest(item_code="EQP002", name="Blood Pressure Monitor", category="Equipment",
                         quantity=3, min_quantity=3, location="Storage Room A"),
    InventoryItemRequest(item_code="SUP001", name="Gauze Pads 4x4", category="Supplies",
                         quantity=50, min_quantity=10, expiry_date=date(2027, 10, 21), location="Cabinet 3"),
    InventoryItemRequest(item_code="SUP002", name="Medical Gloves (Box)", category="Supplies",
                         quantity=1, min_quantity=2, expiry_date=date(2026, 11, 20), location="Cabinet 3"),
]

async def seed():
    for seed_item in SEED_ITEMS:
        # Existing rows are left alone; stock only moves through recorded actions
        item, created = await InventoryItem.get_or_create(
            item_code=seed_item.item_code,
            defaults=seed_item.model_dump(exclude={"item_code"}),
        )
        print(f"{'Created' if created else 'Exists'}: {item.item_code} {item.name} (qty {item.quantity})")

    print("Inventory seeded.")

async def main():
    await init_db()
    await seed()
    await close_db()

if __name__ == "__main__":
    asyncio.run(main())
