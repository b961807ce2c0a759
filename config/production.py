import os

from .config import Config, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")
DATA_FILE = Config.DATA_FILE
DB_CONFIG = Config.db_config()

SHIFT_START = Config.SHIFT_START
LATE_GRACE_MINUTES = Config.LATE_GRACE_MINUTES
SESSION_DAYS = Config.SESSION_DAYS
LOG_LEVEL = Config.LOG_LEVEL

DEBUG = False

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
ADMIN_EMAIL = Config.ADMIN_EMAIL
ADMIN_PASSWORD = Config.ADMIN_PASSWORD
