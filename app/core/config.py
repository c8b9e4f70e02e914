import os

# Database Configuration
# SQLite file by default; point at Postgres/MySQL in deployment for real row locks
DB_URL = os.getenv("DATABASE_URL", "sqlite://db.sqlite3")

# Application Metadata
PROJECT_NAME = "QMedic Inventory Ledger"
VERSION = "1.0.0"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Ledger Configuration
DEFAULT_USER = os.getenv("DEFAULT_USER", "Current User") # Recorded when a request carries no user
LEDGER_TX_TIMEOUT = float(os.getenv("LEDGER_TX_TIMEOUT", 10)) # Seconds before an action transaction is aborted

# Expiry Sweep Configuration
EXPIRY_WARNING_DAY = int(os.getenv("EXPIRY_WARNING_DAY", 15)) # Advance warning fired on exactly this day
EXPIRY_FINAL_WINDOW = int(os.getenv("EXPIRY_FINAL_WINDOW", 7)) # Daily warnings for the last N days
EXPIRY_SWEEP_INTERVAL = int(os.getenv("EXPIRY_SWEEP_INTERVAL", 3600)) # Seconds between sweep cycles

# Outbox Poller Configuration (delivers recorded notifications)
POLLING_INTERVAL = int(os.getenv("POLLING_INTERVAL", 1)) # Poller checks for new events every N seconds
MAX_ATTEMPTS = int(os.getenv("MAX_ATTEMPTS", 5)) # Max retries for an event
BATCH_SIZE = int(os.getenv("BATCH_SIZE", 50)) # How many events to fetch per poll
