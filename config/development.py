import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tasks"),
    "pool_name": os.getenv("DB_POOL_NAME", "attendance_tasks"),
    "pool_size": int(os.getenv("DB_POOL_SIZE", "5")),
    "pool_timeout": float(os.getenv("DB_POOL_TIMEOUT", "5")),
}

# Dev-only placeholder; production refuses to start without a real one.
JWT_SECRET = os.getenv("JWT_SECRET", "dev-only-jwt-secret-change-me-0123456789")
JWT_EXPIRES_IN = os.getenv("JWT_EXPIRES_IN", "7d")

PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt:32768:8:1")

API_PREFIX = os.getenv("API_PREFIX", "")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, the app applies database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
