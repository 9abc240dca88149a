"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the assignment rules live in the services.
"""

import importlib

from dotenv import load_dotenv

from flow_pool.config import get_settings_module
from flow_pool.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, tenant_mode=settings.TENANT_MODE)

    result = container.assignment_service.assign("00000000-0000-0000-0000-000000000001")
    print(f"assigned {result.code} ({result.credentials.identity})")
    for account in container.account_service.list_accounts():
        print(account.code, f"{account.occupancy}/{account.capacity}", account.status.value)


if __name__ == "__main__":
    main()
