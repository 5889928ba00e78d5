"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_LIFETIME = "7d"
JWT_ALGORITHM = "HS256"
MIN_JWT_SECRET_LENGTH = 32
DEFAULT_PASSWORD_HASH_METHOD = "scrypt:32768:8:1"

MIN_PASSWORD_LENGTH = 8
MAX_NAME_LENGTH = 100
MAX_EMAIL_LENGTH = 255
MAX_TITLE_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 2000
MAX_NOTES_LENGTH = 500

MAX_PAGE_LIMIT = 100
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_TASK_LIMIT = 20
