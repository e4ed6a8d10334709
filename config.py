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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./ledger.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Partition storage: "sql" (partition_blobs table) or "memory" (process-local)
    STORE_BACKEND = data.get("STORE_BACKEND", "sql")
    PARTITION_ENTITY_KIND = data.get("PARTITION_ENTITY_KIND", "unified_payment_ledger")
    LEGACY_PARTITION_PREFIXES = data.get("LEGACY_PARTITION_PREFIXES", ["payment_ledger", "payment"])

    # Currency conversion table (rate of 1 unit against the base currency)
    BASE_CURRENCY = data.get("BASE_CURRENCY", "LKR")
    EXCHANGE_RATES = data.get(
        "EXCHANGE_RATES",
        {
            "LKR": "1.00",
            "USD": "302.50",
            "EUR": "330.20",
            "GBP": "385.80",
            "TZS": "0.1251",
            "KES": "2.33",
            "THB": "8.50",
        },
    )

    # Mother views and the sibling partitions they aggregate
    FEDERATION_REGISTRY = data.get("FEDERATION_REGISTRY", [])

    # Payment alerts
    ALERT_HIGH_OUTSTANDING_THRESHOLD = data.get("ALERT_HIGH_OUTSTANDING_THRESHOLD", 100000)  # Base currency
    ALERT_UPCOMING_DAYS = data.get("ALERT_UPCOMING_DAYS", 7)
    ALERT_NOTIFICATION_WEBHOOK = data.get("ALERT_NOTIFICATION_WEBHOOK", None)
