import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Civil time used for billing cycle boundaries, due dates and the suspension gate
    TIMEZONE = data.get("TIMEZONE", "Asia/Jakarta")

    # Customer numbering: LTS0001, LTS0002, ...
    CUSTOMER_NUMBER_PREFIX = data.get("CUSTOMER_NUMBER_PREFIX", "LTS")

    # Monthly billing
    MONTHLY_BILLING_ENABLED = bool(data.get("MONTHLY_BILLING_ENABLED", True))
    MONTHLY_BILLING_RUN_DAY = data.get("MONTHLY_BILLING_RUN_DAY", 1)  # Day of month to run
    BILL_DUE_DAY = data.get("BILL_DUE_DAY", 5)  # Day of month bills fall due

    # Overdue suspension
    SUSPENSION_DAY = data.get("SUSPENSION_DAY", 6)  # Only day of month suspension runs
    SUSPENSION_WORKER_ENABLED = bool(data.get("SUSPENSION_WORKER_ENABLED", True))

    # Router-control (MikroTik API)
    ROUTER_CONTROL_ENABLED = bool(data.get("ROUTER_CONTROL_ENABLED", False))
    ROUTER_CONTROL_MAX_ATTEMPTS = data.get("ROUTER_CONTROL_MAX_ATTEMPTS", 3)
    ROUTER_CONTROL_BACKOFF_SECONDS = data.get("ROUTER_CONTROL_BACKOFF_SECONDS", 1.0)
    ROUTER_CONTROL_TIMEOUT_SECONDS = data.get("ROUTER_CONTROL_TIMEOUT_SECONDS", 10.0)

    # Slot reconciliation
    SLOT_RECONCILIATION_ENABLED = bool(data.get("SLOT_RECONCILIATION_ENABLED", True))
    SLOT_RECONCILIATION_INTERVAL_SECONDS = data.get("SLOT_RECONCILIATION_INTERVAL_SECONDS", 86400)  # Daily

    # Printed on bill PDFs
    COMPANY_NAME = data.get("COMPANY_NAME", "Lintas Net")
    COMPANY_ADDRESS = data.get("COMPANY_ADDRESS", "Jl. Merdeka No. 1, Jakarta")
