"""Settings read from the environment."""
import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./tripsplit.db")

# Shared secret guarding destructive operations (delete trip / expense).
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "ok")

_origins_env = os.getenv("ALLOWED_ORIGINS", "")
ALLOWED_ORIGINS = [o.strip() for o in _origins_env.split(",") if o.strip()] if _origins_env else ["*"]

CURRENCY = os.getenv("CURRENCY", "VND")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))
