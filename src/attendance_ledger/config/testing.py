import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_ledger_test"),
}

STORAGE_BACKEND = "memory"
LEDGER_VARIANT = os.getenv("LEDGER_VARIANT", "admin_timeslot")

REGISTRY_OWNER = "owner"
REGISTRY_INITIAL_ADMIN = "admin"

CALLER_HEADER = "X-Caller-Identity"
EVENT_LOG_SIZE = 100
LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
