from .config import Config, env_flag

SECRET_KEY = Config.SECRET_KEY
STORE_BACKEND = Config.STORE_BACKEND
DATA_FILE = Config.DATA_FILE
DB_CONFIG = Config.db_config()

SHIFT_START = Config.SHIFT_START
LATE_GRACE_MINUTES = Config.LATE_GRACE_MINUTES
SESSION_DAYS = Config.SESSION_DAYS
LOG_LEVEL = "DEBUG"

DEBUG = True

# If enabled with the mysql backend, app applies database/schema.sql on startup (idempotent).
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Create the demo admin account on startup.
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "1")
ADMIN_EMAIL = Config.ADMIN_EMAIL
ADMIN_PASSWORD = Config.ADMIN_PASSWORD
