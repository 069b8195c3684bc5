from __future__ import annotations

import importlib

from dotenv import load_dotenv

from employee_tracker.config import get_settings_module
from employee_tracker.database.bootstrap import apply_schema, ensure_default_admin, list_tables
from employee_tracker.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(dict(settings.DB_CONFIG))
    conn = DatabaseConnection(config)

    apply_schema(conn)
    seeded = ensure_default_admin(conn)
    tables = list_tables(conn)

    target = config.path if config.driver == "sqlite" else f"{config.user}@{config.host}:{config.port}/{config.database}"
    print(f"OK: schema applied -> {config.driver}:{target} (tables={len(tables)}, admin_seeded={seeded})")


if __name__ == "__main__":
    main()
