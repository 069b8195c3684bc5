import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "driver": "sqlite",
    "path": os.getenv("DB_PATH", "employee_tracker_test.db"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = True
AUTO_SEED_DB = True
