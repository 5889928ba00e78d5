import os

JWT_SECRET = "test-secret-test-secret-test-secret-0000"
JWT_EXPIRES_IN = "7d"

# Cheap hashes keep the suite fast; production keeps the default work factor.
PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tasks_test"),
}

API_PREFIX = ""

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
