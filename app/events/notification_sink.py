import logging
from typing import Dict, Any

log = logging.getLogger("notification_sink")


async def deliver_notification(event_type: str, payload: Dict[str, Any]) -> None:
    """
    Delivery channel for recorded notifications (email/push in production).
    This build writes the alert to the log; swap this function for a real channel.
    """
    log.warning(
        f"[{payload.get('alert_type')}] {payload.get('item_name')} ({payload.get('item_code')}) "
        f"at {payload.get('location') or '-'}: {payload.get('details')}"
    )
