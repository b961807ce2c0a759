from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .admin.controller import register as register_admin
from .attendance.controller import register as register_attendance
from .common.datetime_utils import now_local
from .common.log import configure_logging
from .common.web import register_error_handlers
from .container import build_container
from .core.enums import StoreBackend
from .database.bootstrap import apply_schema, ensure_admin_user, list_tables
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SETTING_NAMES = (
    "SECRET_KEY",
    "DEBUG",
    "TESTING",
    "DB_CONFIG",
    "STORE_BACKEND",
    "DATA_FILE",
    "SHIFT_START",
    "LATE_GRACE_MINUTES",
    "SESSION_DAYS",
    "LOG_LEVEL",
    "AUTO_INIT_DB",
    "AUTO_SEED_DB",
    "ADMIN_EMAIL",
    "ADMIN_PASSWORD",
)


def load_settings(overrides: Optional[Mapping[str, Any]] = None) -> dict:
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    values = {name: getattr(settings, name) for name in SETTING_NAMES if hasattr(settings, name)}
    values["SETTINGS_MODULE"] = settings_module
    values.update(overrides or {})
    return values


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build the Flask app. `overrides` replace settings; tests also pass CLOCK,
    a zero-argument callable returning the current datetime."""
    load_dotenv(override=False)
    settings = load_settings(overrides)
    configure_logging(settings.get("LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = settings["SECRET_KEY"]
    app.config.update(
        DEBUG=bool(settings.get("DEBUG", False)),
        TESTING=bool(settings.get("TESTING", False)),
        SESSION_DAYS=int(settings.get("SESSION_DAYS", 7)),
    )

    backend = str(settings.get("STORE_BACKEND", StoreBackend.FILE.value)).lower()
    db_config = dict(settings.get("DB_CONFIG") or {})
    logger.info("settings=%s backend=%s", settings["SETTINGS_MODULE"], backend)

    if backend == StoreBackend.MYSQL.value and settings.get("AUTO_INIT_DB"):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        backend=backend,
        db_config=db_config,
        data_file=settings.get("DATA_FILE", "data/store.json"),
        shift_start=settings.get("SHIFT_START", "09:00"),
        grace_minutes=int(settings.get("LATE_GRACE_MINUTES", 15)),
        clock=settings.get("CLOCK") or now_local,
    )

    if settings.get("AUTO_SEED_DB"):
        ensure_admin_user(
            container.auth_service,
            email=settings.get("ADMIN_EMAIL", "admin@example.com"),
            password=settings.get("ADMIN_PASSWORD", "admin123"),
        )

    app.extensions["intern_tracker"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_reports(app, container)
    register_admin(app, container)

    return app
