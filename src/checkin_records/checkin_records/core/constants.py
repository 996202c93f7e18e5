"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DELETE_PAGE_SIZE = 500
DEFAULT_OWNER_ID = "user-1"
MAX_RECORD_ID_LENGTH = 128
HTTP_TIMEOUT_S = 15.0
