import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.environ.get(name, default)))


class Config:
    """Settings shared by every environment; modules below override."""

    SECRET_KEY = os.environ.get("SECRET_KEY") or "change-me"

    # "file" keeps everything in a JSON file (development), "mysql" uses DB_CONFIG.
    STORE_BACKEND = os.environ.get("STORE_BACKEND", "file")
    DATA_FILE = os.environ.get("DATA_FILE", "data/store.json")

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "intern_tracker")

    # Lateness policy: clock-in after SHIFT_START + LATE_GRACE_MINUTES is LATE.
    SHIFT_START = os.environ.get("SHIFT_START", "09:00")
    LATE_GRACE_MINUTES = int(os.environ.get("LATE_GRACE_MINUTES", "15"))

    SESSION_DAYS = int(os.environ.get("SESSION_DAYS", "7"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "admin@example.com")
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", "admin123")

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
