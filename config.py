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
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 3000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENVIRONMENT = data.get("ENVIRONMENT", "development")
    SERVICE_NAME = data.get("SERVICE_NAME", "Firebase Multi-Account Server")
    TRUST_PROXY_HEADERS = bool(data.get("TRUST_PROXY_HEADERS", False))

    # Identity provider
    FIREBASE_PROJECT_ID = data.get("FIREBASE_PROJECT_ID")
    FIREBASE_SERVICE_ACCOUNT_KEY = data.get(
        "FIREBASE_SERVICE_ACCOUNT_KEY", os.environ.get("FIREBASE_SERVICE_ACCOUNT_KEY")
    )
    FIREBASE_SERVICE_ACCOUNT_FILE = data.get(
        "FIREBASE_SERVICE_ACCOUNT_FILE", os.path.join(ROOT_PATH, "serviceAccountKey.json")
    )
    PROVIDER_TIMEOUT_SECONDS = float(data.get("PROVIDER_TIMEOUT_SECONDS", 10))
    CUSTOM_TOKEN_EXPIRES_IN = data.get("CUSTOM_TOKEN_EXPIRES_IN", "1h")

    # Password reset
    TOKEN_STORE_BACKEND = data.get("TOKEN_STORE_BACKEND", "memory")
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./reset_tokens.db")
    RESET_TOKEN_TTL_MINUTES = int(data.get("RESET_TOKEN_TTL_MINUTES", 30))
    RESET_TOKEN_SWEEP_INTERVAL_SECONDS = float(data.get("RESET_TOKEN_SWEEP_INTERVAL_SECONDS", 300))
    APP_SCHEME = data.get("APP_SCHEME", "myapp")
    MIN_PASSWORD_LENGTH = int(data.get("MIN_PASSWORD_LENGTH", 6))

    # Rate limiting (per client IP)
    RATE_LIMIT_WINDOW_SECONDS = float(data.get("RATE_LIMIT_WINDOW_SECONDS", 15 * 60))
    RATE_LIMIT_MAX_REQUESTS = int(data.get("RATE_LIMIT_MAX_REQUESTS", 100))
    PASSWORD_RESET_RATE_LIMIT_MAX = int(data.get("PASSWORD_RESET_RATE_LIMIT_MAX", 5))

    # Outbound email; LoggingMailer is used when SMTP_HOST is unset
    SMTP_HOST = data.get("SMTP_HOST")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USERNAME = data.get("SMTP_USERNAME")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", os.environ.get("SMTP_PASSWORD"))
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))
    EMAIL_FROM = data.get("EMAIL_FROM")
    EMAIL_FROM_NAME = data.get("EMAIL_FROM_NAME")
    MAIL_TIMEOUT_SECONDS = float(data.get("MAIL_TIMEOUT_SECONDS", 10))
