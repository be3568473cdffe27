from __future__ import annotations

import importlib

from dotenv import load_dotenv

from shift_payroll.config import get_settings_module
from shift_payroll.database.bootstrap import apply_schema, list_tables
from shift_payroll.logging_config import configure_logging


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logger = configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    tables = list_tables(db_config)
    logger.info(
        "OK: applied schema.sql -> %s@%s:%s/%s (tables=%s)",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        len(tables),
    )


if __name__ == "__main__":
    main()
