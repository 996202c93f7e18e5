SECRET_KEY = "test-secret"

DB_CONFIG = None

RECORD_STORE = "memory"

DELETE_PAGE_SIZE = 500

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

EXPOSE_DEBUG_ENV = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
