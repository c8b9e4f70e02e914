from tortoise import fields, models
import uuid


class OutboxEvent(models.Model):
    """
    Stores notification-dispatch requests atomically with the ledger transaction
    that recorded the notification. The poller hands them to the delivery sink.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    aggregate_type = fields.CharField(max_length=64) # e.g., 'notification'
    aggregate_id = fields.CharField(max_length=64, null=True) # ID of the entity that generated the event
    event_type = fields.CharField(max_length=128) # e.g., 'notification.low_stock.v1'
    payload = fields.JSONField() # The actual event data
    published = fields.BooleanField(default=False)
    attempts = fields.IntField(default=0)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "outbox_events"
