import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "staffdesk_test"),
    "pool_size": int(os.getenv("DB_POOL_SIZE", "0")),
}

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

SESSION_LIFETIME_HOURS = 24
SESSION_COOKIE_SECURE = False

LATE_GRACE_MINUTES = 5

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
