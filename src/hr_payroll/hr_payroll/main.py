from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .components.controller import register as register_components
from .container import Container, build_container
from .core.constants import DEFAULT_ACTOR_HEADER, DEFAULT_ROLE_HEADER
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .leave.controller import register as register_leave
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)

_DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Pass a prebuilt ``container`` to run against other repositories (tests use
    in-memory fakes); otherwise MySQL repositories are wired from DB_CONFIG.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["ACTOR_HEADER"] = getattr(settings, "ACTOR_HEADER", DEFAULT_ACTOR_HEADER)
    app.config["ROLE_HEADER"] = getattr(settings, "ROLE_HEADER", DEFAULT_ROLE_HEADER)

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
            apply_schema(db_config, schema_path=_DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=_DATABASE_DIR / "seed.sql")
            logger.info("demo seed ready")

        container = build_container(db_config=db_config, settings=settings)

    register_error_handlers(app)
    register_payroll(app, container)
    register_attendance(app, container)
    register_components(app, container)
    register_leave(app, container)

    return app
