import os

# --- Bot ---
TOKEN = os.getenv("TOKEN", "")

# --- Stats Web UI ---
STATS_HOST = os.getenv("STATS_HOST", "127.0.0.1")
STATS_PORT = int(os.getenv("STATS_PORT", "8000"))
AUTO_OPEN_STATS = os.getenv("AUTO_OPEN_STATS", "0") == "1"

# --- Dev seeding (/dev_seed) ---
DEBUG_DISCOVERY = os.getenv("DEBUG_DISCOVERY", "0") == "1"
try:
    ADMIN_ID = int(os.getenv("ADMIN_ID", "0"))
except ValueError:
    ADMIN_ID = 0

# Store settings (USE_POSTGRES, SQLITE_PATH, PG_DSN, ...) are read by swipe_engine.database
