import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "store_payroll_test"),
}

STORE_TIMEZONE = "Asia/Tokyo"
OVERTIME_THRESHOLD_HOURS = 8.0
EXPECTED_START_HOUR = 9
EXPECTED_END_HOUR = 18
STORE_HOLIDAYS = ""

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
