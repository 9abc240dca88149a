from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv

from flow_pool.config import get_settings_module
from flow_pool.database.bootstrap import apply_sql_file


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    seed_path = Path(__file__).resolve().parents[1] / "database" / "seed.sql"
    executed = apply_sql_file(db_config, sql_path=seed_path)

    print(
        "OK: Seeded demo pool -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"({executed} statements)"
    )


if __name__ == "__main__":
    main()
