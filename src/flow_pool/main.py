from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from .accounts.controller import register as register_accounts
from .assignments.controller import register as register_assignments
from .common.http import register_error_handlers
from .config import get_settings_module
from .container import build_container
from .database.bootstrap import apply_schema, list_tables

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    tenant_mode = getattr(settings, "TENANT_MODE", "direct")
    logger.info(
        "settings=%s tenant_mode=%s db=%s@%s:%s/%s",
        settings_module,
        tenant_mode,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[2] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        db_config=db_config,
        tenant_mode=tenant_mode,
        capacity=int(getattr(settings, "ACCOUNT_CAPACITY", 10)),
        registration_validity_days=int(getattr(settings, "REGISTRATION_VALIDITY_DAYS", 30)),
    )
    app.extensions["flow_pool"] = container

    register_error_handlers(app)
    register_accounts(app, container)
    register_assignments(app, container)

    return app
