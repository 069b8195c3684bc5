from __future__ import annotations

import importlib
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import build_container
from .core.exceptions import StorageError
from .database.bootstrap import apply_schema, ensure_default_admin, list_tables
from .web.admin_controller import register as register_admin
from .web.auth_controller import register as register_auth
from .web.employee_controller import register as register_employee
from .web.guards import register_error_handlers
from .web.messages_controller import register as register_messages

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(overrides: Optional[dict] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    overrides = overrides or {}

    def setting(name: str, default=None):
        return overrides.get(name, getattr(settings, name, default))

    app.secret_key = setting("SECRET_KEY")
    app.config["DEBUG"] = bool(setting("DEBUG", False))
    app.config["TESTING"] = bool(setting("TESTING", False))
    db_config = dict(setting("DB_CONFIG"))

    configure_logging(setting("LOG_LEVEL", "INFO"))
    logger.debug("settings=%s driver=%s", settings_module, db_config.get("driver"))

    container = build_container(db_config=db_config)

    if setting("AUTO_INIT_DB", False):
        try:
            apply_schema(container.conn)
            logger.debug("schema ready (tables=%d)", len(list_tables(container.conn)))
        except StorageError:
            logger.exception("Applying the database schema failed")
    if setting("AUTO_SEED_DB", False):
        ensure_default_admin(container.conn)

    app.extensions["employee_tracker"] = container

    register_error_handlers(app)
    register_auth(app, container)
    register_admin(app, container)
    register_employee(app, container)
    register_messages(app, container)

    return app


def main() -> None:
    app = create_app()
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "5000")))


if __name__ == "__main__":
    main()
