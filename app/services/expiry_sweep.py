import logging
import math
from dataclasses import dataclass, asdict
from datetime import date, timedelta
from typing import Dict, Optional

from tortoise.exceptions import IntegrityError
from tortoise.transactions import in_transaction

from app.core.config import EXPIRY_FINAL_WINDOW, EXPIRY_WARNING_DAY
from app.models.inventory import InventoryItem
from app.services.alert_service import record_expiry_warning

log = logging.getLogger(__name__)


@dataclass
class SweepStats:
    scanned: int = 0
    alerted: int = 0
    skipped_duplicates: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


def days_until(expiry_date: date, today: date) -> int:
    """Whole days remaining, rounded up."""
    return math.ceil((expiry_date - today) / timedelta(days=1))


def should_warn(
    days_left: int,
    warning_day: int = EXPIRY_WARNING_DAY,
    final_window: int = EXPIRY_FINAL_WINDOW,
) -> bool:
    """Advance warning on exactly `warning_day`, then daily for the last `final_window` days. Expired items never qualify."""
    return days_left == warning_day or 0 < days_left <= final_window


async def run_expiry_sweep(today: Optional[date] = None) -> SweepStats:
    """
    One sweep cycle over every item with an expiry date.
    Reads item state and inserts notifications only; stock quantities are never touched.
    Each newly recorded warning writes one outbox event for the delivery sink.
    """
    today = today or date.today()
    stats = SweepStats()

    items = await InventoryItem.filter(expiry_date__isnull=False).order_by("expiry_date", "id")
    for item in items:
        stats.scanned += 1
        days_left = days_until(item.expiry_date, today)
        if not should_warn(days_left):
            continue

        try:
            async with in_transaction() as conn:
                entry = await record_expiry_warning(item, days_left, today, conn)
        except IntegrityError:
            # A concurrent sweep recorded the same warning first
            entry = None

        if entry is None:
            stats.skipped_duplicates += 1
            continue
        stats.alerted += 1
        log.info(f"Expiry warning recorded for {item.item_code}: {days_left} day(s) left.")

    log.info(f"Expiry sweep for {today}: {stats.as_dict()}")
    return stats
