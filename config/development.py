import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "checkin_records"),
}

# "mysql" or "memory" (records vanish on restart)
RECORD_STORE = os.getenv("RECORD_STORE", "mysql")

DELETE_PAGE_SIZE = int(os.getenv("DELETE_PAGE_SIZE", "500"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Exposes /api/debug-env (credential presence only, never values)
EXPOSE_DEBUG_ENV = bool(int(os.getenv("EXPOSE_DEBUG_ENV", "1")))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo records on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
