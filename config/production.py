import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "store_payroll"),
}

STORE_TIMEZONE = os.getenv("STORE_TIMEZONE", "Asia/Tokyo")
OVERTIME_THRESHOLD_HOURS = float(os.getenv("OVERTIME_THRESHOLD_HOURS", "8"))
EXPECTED_START_HOUR = int(os.getenv("EXPECTED_START_HOUR", "9"))
EXPECTED_END_HOUR = int(os.getenv("EXPECTED_END_HOUR", "18"))
STORE_HOLIDAYS = os.getenv("STORE_HOLIDAYS", "")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
