import asyncio
import logging
from app.services.expiry_sweep import run_expiry_sweep
from app.core.db import init_db, close_db
from app.core.config import EXPIRY_SWEEP_INTERVAL, LOG_LEVEL

log = logging.getLogger("expiry_sweeper")

async def start_expiry_sweeper(interval: int = EXPIRY_SWEEP_INTERVAL):
    """
    Main loop for the expiry sweep service. Each cycle is an independent unit of work;
    re-running within the same day records nothing new.
    """
    await init_db()
    log.info(f"--- Expiry Sweeper Started (every {interval}s) ---")

    try:
        while True:
            try:
                await run_expiry_sweep()
            except Exception as e:
                log.error(f"Expiry sweep cycle failed: {e}.")

            await asyncio.sleep(interval)
    finally:
        await close_db()

if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    try:
        asyncio.run(start_expiry_sweeper())
    except KeyboardInterrupt:
        log.info("Expiry sweeper stopped.")
