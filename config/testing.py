import os

from .config import Config

SECRET_KEY = "test-secret"
STORE_BACKEND = "file"
DATA_FILE = os.getenv("DATA_FILE", "data/test-store.json")
DB_CONFIG = Config.db_config()

SHIFT_START = "09:00"
LATE_GRACE_MINUTES = 15
SESSION_DAYS = 1
LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
