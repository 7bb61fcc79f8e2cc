from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .classes.controller import register as register_classes
from .common.http import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .personnel.controller import register as register_personnel
from .reports.controller import register as register_reports
from .timeslots.controller import register as register_time_slots

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def configure_logging(settings) -> None:
    default_level = "DEBUG" if getattr(settings, "DEBUG", False) else "INFO"
    level = str(getattr(settings, "LOG_LEVEL", default_level)).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    Tests pass a ``container`` wired to in-memory repositories; then no
    database bootstrap runs.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(settings)

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            logger.info("Demo roster and time slots ready")

        password = getattr(settings, "ADMIN_PASSWORD", "")
        if not password:
            raise RuntimeError("ADMIN_PASSWORD must be set")
        container = build_container(
            db_config=db_config,
            admin_username=getattr(settings, "ADMIN_USERNAME"),
            admin_password=password,
        )

    register_error_handlers(app)
    register_auth(app, container)
    register_personnel(app, container)
    register_time_slots(app, container)
    register_classes(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
