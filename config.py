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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./tweeter.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 3000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", ["http://localhost:5173"])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENVIRONMENT = data.get("ENVIRONMENT", "development")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production-32chars")
    COOKIE_DOMAIN = data.get("COOKIE_DOMAIN", "localhost")
    APP_BASE_URL = data.get("APP_BASE_URL", "http://localhost:5173")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    EMAIL_BACKEND = data.get("EMAIL_BACKEND", "log")
    MAILGUN_API_KEY = data.get("MAILGUN_API_KEY", "")
    MAILGUN_DOMAIN = data.get("MAILGUN_DOMAIN", "")
    MAILGUN_FROM_EMAIL = data.get("MAILGUN_FROM_EMAIL", "noreply@tweeter.com")
    MAILGUN_FROM_NAME = data.get("MAILGUN_FROM_NAME", "Tweeter")
    MAILGUN_BASE_URL = data.get("MAILGUN_BASE_URL", "https://api.mailgun.net")

    @classmethod
    def is_production(cls) -> bool:
        return cls.ENVIRONMENT == "production"
