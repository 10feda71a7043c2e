import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_ledger"),
}

# "memory" keeps the ledger in-process (lost on restart); "mysql" persists it.
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")

# admin_timeslot | owner_dateonly
LEDGER_VARIANT = os.getenv("LEDGER_VARIANT", "admin_timeslot")

REGISTRY_OWNER = os.getenv("REGISTRY_OWNER", "")
REGISTRY_INITIAL_ADMIN = os.getenv("REGISTRY_INITIAL_ADMIN", "")

CALLER_HEADER = os.getenv("CALLER_HEADER", "X-Caller-Identity")
EVENT_LOG_SIZE = int(os.getenv("EVENT_LOG_SIZE", "500"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
