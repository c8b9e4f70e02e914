from enum import Enum
from tortoise import fields, models


class AlertType(str, Enum):
    LOW_STOCK = "Low Stock"
    EXPIRY_WARNING = "Expiry Warning"


class NotificationEntry(models.Model):
    id = fields.IntField(pk=True)
    item = fields.ForeignKeyField("models.InventoryItem", related_name="notifications", on_delete=fields.RESTRICT)
    alert_type = fields.CharEnumField(AlertType, max_length=32)
    item_code = fields.CharField(max_length=64)
    item_name = fields.CharField(max_length=255)
    location = fields.CharField(max_length=255, default="")
    expiry_date = fields.DateField(null=True)
    details = fields.TextField()
    is_read = fields.BooleanField(default=False)
    # Set only for sweep alerts; the unique index suppresses same-day duplicates
    dedupe_key = fields.CharField(max_length=128, null=True, unique=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "notification_log"
        indexes = [
            ("item_id",),
            ("is_read",),
            ("created_at",),
        ]
