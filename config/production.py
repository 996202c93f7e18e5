import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

# No DB_HOST means no credentials: the gateway answers every request with 500
# unless RECORDS_DB_CONFIG_BASE64 / RECORDS_DB_CONFIG_JSON is set.
DB_CONFIG = (
    {
        "host": os.getenv("DB_HOST"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", ""),
        "database": os.getenv("DB_NAME", "checkin_records"),
    }
    if os.getenv("DB_HOST")
    else None
)

RECORD_STORE = os.getenv("RECORD_STORE", "mysql")

DELETE_PAGE_SIZE = int(os.getenv("DELETE_PAGE_SIZE", "500"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

EXPOSE_DEBUG_ENV = bool(int(os.getenv("EXPOSE_DEBUG_ENV", "0")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
