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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./session_gate.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENVIRONMENT = data.get("ENVIRONMENT", "development")
    CREATE_TABLES = bool(data.get("CREATE_TABLES", True))

    # Session tokens
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    SESSION_LIFETIME_SECONDS = int(data.get("SESSION_LIFETIME_SECONDS", 60 * 60 * 24))
    COOKIE_NAME = data.get("COOKIE_NAME", "token")

    # Password reset
    RESET_TOKEN_TTL_MINUTES = int(data.get("RESET_TOKEN_TTL_MINUTES", 60))
    RESET_TOKEN_BYTES = int(data.get("RESET_TOKEN_BYTES", 32))
    EXPOSE_RESET_TOKEN = bool(data.get("EXPOSE_RESET_TOKEN", False))

    # Password policy
    PASSWORD_MIN_LENGTH = int(data.get("PASSWORD_MIN_LENGTH", 8))
    PASSWORD_MAX_LENGTH = int(data.get("PASSWORD_MAX_LENGTH", 100))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
