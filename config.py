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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./auth.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENVIRONMENT = data.get("ENVIRONMENT", "development")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Token signing
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_REFRESH_SECRET = data.get(
        "JWT_REFRESH_SECRET", "dev-refresh-secret-key-change-in-production"
    )
    JWT_ISSUER = data.get("JWT_ISSUER", "auth-service")
    JWT_AUDIENCE = data.get("JWT_AUDIENCE", "auth-client")
    ACCESS_TOKEN_TTL_MINUTES = int(data.get("ACCESS_TOKEN_TTL_MINUTES", 15))
    REFRESH_TOKEN_TTL_DAYS = int(data.get("REFRESH_TOKEN_TTL_DAYS", 7))
    RESET_TOKEN_TTL_MINUTES = int(data.get("RESET_TOKEN_TTL_MINUTES", 60))
    RESET_TOKEN_PURPOSE = data.get("RESET_TOKEN_PURPOSE", "password-reset")
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))

    # Refresh cookie
    REFRESH_COOKIE_NAME = data.get("REFRESH_COOKIE_NAME", "refresh_token")
    COOKIE_DOMAIN = data.get("COOKIE_DOMAIN", None)

    # Password reset emails
    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:3000")
    FROM_EMAIL = data.get("FROM_EMAIL", "no-reply@localhost")

    # Rate limiting
    REDIS_URL = data.get("REDIS_URL", "redis://localhost:6379/0")
    CACHE_BACKEND = data.get("CACHE_BACKEND", "memory")
    RATE_LIMIT_ENABLED = bool(data.get("RATE_LIMIT_ENABLED", False))
    RATE_LIMIT_LOGIN = data.get("RATE_LIMIT_LOGIN", [5, 900])
    RATE_LIMIT_REGISTER = data.get("RATE_LIMIT_REGISTER", [3, 3600])
    RATE_LIMIT_REFRESH = data.get("RATE_LIMIT_REFRESH", [10, 900])
    RATE_LIMIT_FORGOT_PASSWORD = data.get("RATE_LIMIT_FORGOT_PASSWORD", [3, 3600])
    # Honour X-Forwarded-For only behind a proxy that sets it
    TRUST_PROXY_HEADERS = bool(data.get("TRUST_PROXY_HEADERS", False))

    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
