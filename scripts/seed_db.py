"""Create a demo admin and a demo intern in the configured store."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.intern_tracker.intern_tracker.container import build_container
from src.intern_tracker.intern_tracker.core.exceptions import ConflictError
from src.intern_tracker.intern_tracker.database.bootstrap import ensure_admin_user


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        backend=settings.STORE_BACKEND,
        db_config=dict(settings.DB_CONFIG),
        data_file=settings.DATA_FILE,
    )

    admin_email = getattr(settings, "ADMIN_EMAIL", "admin@example.com")
    ensure_admin_user(
        container.auth_service,
        email=admin_email,
        password=getattr(settings, "ADMIN_PASSWORD", "admin123"),
    )
    try:
        container.auth_service.register(
            name="Demo Intern",
            email="intern@example.com",
            password="intern123",
            department="Engineering",
        )
    except ConflictError:
        pass

    print(f"OK: Seeded {settings.STORE_BACKEND} store (admin={admin_email}, intern=intern@example.com)")


if __name__ == "__main__":
    main()
