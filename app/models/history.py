from enum import Enum
from tortoise import fields, models
from app.models.inventory import ItemCategory


class LedgerAction(str, Enum):
    CHECK_IN = "Check In"
    USE = "Use"
    TRANSFER = "Transfer"
    REMOVE_ALL = "Remove All"
    CHECK_OUT = "Check Out"
    OTHER = "Other" # Unrecognised label: logged, no quantity effect

    @classmethod
    def parse(cls, label: str) -> "LedgerAction":
        """
        Maps a submitted label onto the closed action set.
        Accepts display labels ("Check In"), member names ("CHECK_IN") and
        compact forms ("CheckIn", "checkin"). Anything else is OTHER.
        """
        key = "".join(ch for ch in str(label).lower() if ch.isalnum())
        for action in cls:
            if key in (action.value.lower().replace(" ", ""), action.name.lower().replace("_", "")):
                return action
        return cls.OTHER

    @property
    def reduces_stock(self) -> bool:
        return self in STOCK_REDUCING_ACTIONS

    @property
    def triggers_low_stock(self) -> bool:
        return self in LOW_STOCK_TRIGGER_ACTIONS


# Actions checked against available stock before any mutation
STOCK_REDUCING_ACTIONS = frozenset({LedgerAction.USE, LedgerAction.CHECK_OUT, LedgerAction.REMOVE_ALL})

# Transfer decrements the single-location record, so it can also cross the threshold
LOW_STOCK_TRIGGER_ACTIONS = STOCK_REDUCING_ACTIONS | {LedgerAction.TRANSFER}


class ActionRecord(models.Model):
    """
    Append-only history ledger entry. Snapshot fields copy the item's
    descriptive attributes at action time and are never re-derived.
    """
    id = fields.IntField(pk=True)
    item = fields.ForeignKeyField("models.InventoryItem", related_name="history", on_delete=fields.RESTRICT)
    item_code = fields.CharField(max_length=64)
    item_name = fields.CharField(max_length=255)
    category = fields.CharEnumField(ItemCategory, max_length=32)
    action = fields.CharEnumField(LedgerAction, max_length=32)
    action_label = fields.CharField(max_length=64) # As submitted by the caller
    quantity = fields.IntField()
    case_id = fields.CharField(max_length=64)
    user = fields.CharField(max_length=128)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "inventory_history"
        indexes = [
            ("item_id",),
            ("case_id",),
            ("action",),
            ("created_at",),
        ]
