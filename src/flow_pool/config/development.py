import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "flow_pool"),
}

# 'direct' keeps the code on users.account_code, 'registration' on the latest registrations row.
TENANT_MODE = os.getenv("TENANT_MODE", "direct")

ACCOUNT_CAPACITY = int(os.getenv("ACCOUNT_CAPACITY", "10"))
REGISTRATION_VALIDITY_DAYS = int(os.getenv("REGISTRATION_VALIDITY_DAYS", "30"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
