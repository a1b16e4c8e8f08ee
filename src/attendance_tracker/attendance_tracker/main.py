from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .employees.controller import register as register_employees
from .metrics.controller import register as register_metrics

logger = logging.getLogger(__name__)

_DB_DIR = Path(__file__).resolve().parents[3] / "database"


def _configure_logging(settings) -> None:
    debug = bool(getattr(settings, "DEBUG", False))
    level = getattr(settings, "LOG_LEVEL", None) or ("DEBUG" if debug else "INFO")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Passing a container skips settings-driven DB wiring (used by tests).
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(settings)

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.ensure_ascii = False

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
            apply_schema(db_config, schema_path=_DB_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=_DB_DIR / "seed.sql")

        container = build_container(
            db_config=db_config,
            metrics_capacity=int(getattr(settings, "METRICS_CAPACITY", 1000)),
            clamp_negative_hours=bool(getattr(settings, "CLAMP_NEGATIVE_HOURS", False)),
            stats_lookback=int(getattr(settings, "STATS_LOOKBACK", 1000)),
        )

    app.extensions["attendance_container"] = container

    register_metrics(app, container)
    register_employees(app, container)
    register_attendance(app, container)

    @app.errorhandler(Exception)
    def _unhandled(e):
        if isinstance(e, HTTPException):
            return jsonify({"message": e.description}), e.code
        logger.exception("Unhandled error")
        return jsonify({"message": "Internal server error"}), 500

    return app
