import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "class_attendance"),
}

# Single admin account guarding every page and API route
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "HC1986")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed the demo roster and time slots on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
