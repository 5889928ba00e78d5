import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tasks"),
    "pool_name": os.getenv("DB_POOL_NAME", "attendance_tasks"),
    "pool_size": int(os.getenv("DB_POOL_SIZE", "10")),
    "pool_timeout": float(os.getenv("DB_POOL_TIMEOUT", "5")),
}

# Required, at least 32 characters (checked in create_app).
JWT_SECRET = os.getenv("JWT_SECRET", "")
JWT_EXPIRES_IN = os.getenv("JWT_EXPIRES_IN", "7d")

PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt:32768:8:1")

API_PREFIX = os.getenv("API_PREFIX", "")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
