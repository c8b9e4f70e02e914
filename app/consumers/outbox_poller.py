import asyncio
import logging
from app.models.outbox import OutboxEvent
from app.events.notification_sink import deliver_notification
from app.core.db import init_db, close_db
from app.core.config import POLLING_INTERVAL, MAX_ATTEMPTS, BATCH_SIZE, LOG_LEVEL

log = logging.getLogger("outbox_poller")

NOTIFICATION_EVENTS = {
    "notification.low_stock.v1",
    "notification.expiry_warning.v1",
}

async def dispatch_event(event: OutboxEvent):
    """
    Routes an OutboxEvent to the delivery channel for its type.
    """
    event_type = event.event_type
    log.info(f"Poller DISPATCHING: {event_type} (ID: {event.id.hex[:8]}...)")

    if event_type in NOTIFICATION_EVENTS:
        await deliver_notification(event_type, event.payload)
    else:
        log.warning(f"No handler found for event type: {event_type}")

async def poll_outbox_for_new_events() -> int:
    """
    Queries the Outbox table for unpublished events and attempts to dispatch them.
    Returns the number of events delivered.
    """
    # Select events that haven't been published and haven't exceeded max attempts
    events = await OutboxEvent.filter(published=False, attempts__lt=MAX_ATTEMPTS).limit(BATCH_SIZE).order_by('created_at')

    delivered = 0
    for event in events:
        try:
            # 1. Dispatch the event to the delivery channel
            await dispatch_event(event)

            # 2. Mark the event as published on success
            event.published = True
            await event.save(update_fields=['published'])
            delivered += 1

        except Exception:
            # 3. Increment attempts on failure and save
            event.attempts += 1
            await event.save(update_fields=['attempts'])
            log.exception(f"Delivery failed for event {event.id} (attempt {event.attempts}/{MAX_ATTEMPTS}).")
    return delivered

async def start_outbox_poller():
    """Main loop for the poller service."""
    await init_db()
    log.info("--- Outbox Poller Service Started ---")

    try:
        while True:
            try:
                await poll_outbox_for_new_events()
            except Exception as e:
                log.error(f"Poller encountered a critical DB error: {e}.")

            await asyncio.sleep(POLLING_INTERVAL)
    finally:
        await close_db()

if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    try:
        asyncio.run(start_outbox_poller())
    except KeyboardInterrupt:
        log.info("Poller service stopped.")
