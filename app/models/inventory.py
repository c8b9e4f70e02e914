from enum import Enum
from tortoise import fields, models


class ItemCategory(str, Enum):
    MEDICATION = "Medication"
    EQUIPMENT = "Equipment"
    SUPPLIES = "Supplies"


class InventoryItem(models.Model):
    id = fields.IntField(pk=True)
    # Stable external identifier printed on the QR/barcode label (e.g. MED001)
    item_code = fields.CharField(max_length=64, unique=True)
    name = fields.CharField(max_length=255)
    category = fields.CharEnumField(ItemCategory, max_length=32)
    quantity = fields.IntField(default=0) # Never negative; written only by the ledger engine
    min_quantity = fields.IntField(default=0) # For low stock alert
    expiry_date = fields.DateField(null=True)
    location = fields.CharField(max_length=255, default="")
    last_action_at = fields.DatetimeField(null=True)

    class Meta:
        table = "inventory_items"
        indexes = [
            ("category",),
            ("expiry_date",),  # Expiry sweep scans
        ]
