import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "messmate_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False

ADMIN_EMAILS = ["admin@messmate.local"]
ADMIN_DEFAULT_PASSWORD = "admin123"

MEAL_RATE = 80
BILLING_CYCLE_DAYS = 30
SESSION_LIFETIME_DAYS = 7
