from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .analytics.controller import register as register_analytics
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_LATE_THRESHOLD
from .core.exceptions import DomainError, NotFoundError, RangeError, StoreError, ValidationError
from .database.bootstrap import apply_schema
from .entries.controller import register as register_entries
from .logging_setup import setup_logging
from .propagation.controller import register as register_propagation
from .rollover.controller import register as register_rollover

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "database" / "schema.sql"

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (RangeError, 400),
    (NotFoundError, 404),
    (StoreError, 503),
)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                break
        else:
            status = 400
        if status >= 500:
            logger.error("Store failure on request: %s", exc, exc_info=True)
        return jsonify({"error": str(exc), "type": type(exc).__name__}), status


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["LATE_THRESHOLD"] = getattr(settings, "LATE_THRESHOLD", DEFAULT_LATE_THRESHOLD)

    setup_logging(level=getattr(settings, "LOG_LEVEL", "INFO"), log_dir=getattr(settings, "LOG_DIR", None))
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        container = build_container(db_config=db_config, late_threshold=app.config["LATE_THRESHOLD"])
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn, schema_path=SCHEMA_PATH)

    app.extensions["workday"] = container

    @app.cli.command("init-db")
    def init_db_command() -> None:
        if container.conn is None:
            raise click.ClickException("No database connection configured")
        count = apply_schema(container.conn, schema_path=SCHEMA_PATH)
        click.echo(f"schema ready ({count} statements)")

    _register_error_handlers(app)
    register_attendance(app, container)
    register_entries(app, container)
    register_propagation(app, container)
    register_rollover(app, container)
    register_analytics(app, container)

    return app
