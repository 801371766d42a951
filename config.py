import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()

INSECURE_JWT_SECRET = "fallback-secret-key"


def _setting(key: str, default):
    # Environment variables win over env.yaml for secrets and deploy-specific URLs
    return os.environ.get(key, data.get(key, default))


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./campus_auth.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENVIRONMENT = _setting("ENVIRONMENT", "development")

    JWT_SECRET = _setting("JWT_SECRET", INSECURE_JWT_SECRET)
    BASE_URL = _setting("BASE_URL", "http://localhost:3000")

    SESSION_COOKIE_NAME = data.get("SESSION_COOKIE_NAME", "token")
    SESSION_TTL_DAYS = data.get("SESSION_TTL_DAYS", 7)
    RESET_TOKEN_TTL_MINUTES = data.get("RESET_TOKEN_TTL_MINUTES", 60)
    MIN_PASSWORD_LENGTH = data.get("MIN_PASSWORD_LENGTH", 6)
    PROTECTED_PATHS = data.get(
        "PROTECTED_PATHS", ["/dashboard", "/profile", "/admin", "/teacher", "/user"]
    )

    SMTP_HOST = _setting("SMTP_HOST", "")
    SMTP_PORT = int(_setting("SMTP_PORT", 587))
    SMTP_USER = _setting("SMTP_USER", "")
    SMTP_PASS = _setting("SMTP_PASS", "")
    SMTP_FROM = _setting("SMTP_FROM", "noreply@yourapp.com")
    SMTP_FROM_NAME = data.get("SMTP_FROM_NAME", "LMS App")
