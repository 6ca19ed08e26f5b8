"""
Auth Settings

Immutable security configuration built once at startup and passed to
every service that needs it. Tests construct their own instance with a
throwaway secret.
"""

from datetime import timedelta
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PASSWORD_DENYLIST = (
    "password123",
    "12345678",
    "qwerty123",
    "admin123",
    "letmein123",
)

DEFAULT_PUBLIC_PATHS = ("/login", "/register", "/request-reset", "/reset-password")


def open_paths_for(api_prefix: str) -> Tuple[str, ...]:
    """Paths the guard never blocks"""
    return (f"{api_prefix}/auth/", f"{api_prefix}/health", "/docs", "/openapi.json")


DEFAULT_OPEN_PATH_PREFIXES = open_paths_for("/api")


class AuthSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    jwt_secret: str = Field(..., min_length=1)
    jwt_algorithm: str = "HS256"
    session_lifetime: timedelta = timedelta(hours=24)

    reset_token_ttl: timedelta = timedelta(hours=1)
    reset_token_bytes: int = Field(default=32, ge=16)  # >= 128 bits
    expose_reset_token: bool = False

    password_min_length: int = 8
    password_max_length: int = 100
    password_denylist: Tuple[str, ...] = DEFAULT_PASSWORD_DENYLIST
    bcrypt_rounds: int = 12

    cookie_name: str = "token"
    cookie_path: str = "/"
    cookie_secure: bool = False
    cookie_samesite: str = "lax"

    login_path: str = "/login"
    dashboard_path: str = "/dashboard"
    api_prefix: str = "/api"
    public_paths: Tuple[str, ...] = DEFAULT_PUBLIC_PATHS
    open_path_prefixes: Tuple[str, ...] = DEFAULT_OPEN_PATH_PREFIXES

    @classmethod
    def from_config(cls, config) -> "AuthSettings":
        """Build settings from an ApplicationConfig-style class"""
        return cls(
            jwt_secret=config.JWT_SECRET,
            jwt_algorithm=config.JWT_ALGORITHM,
            session_lifetime=timedelta(seconds=config.SESSION_LIFETIME_SECONDS),
            reset_token_ttl=timedelta(minutes=config.RESET_TOKEN_TTL_MINUTES),
            reset_token_bytes=config.RESET_TOKEN_BYTES,
            expose_reset_token=config.EXPOSE_RESET_TOKEN,
            password_min_length=config.PASSWORD_MIN_LENGTH,
            password_max_length=config.PASSWORD_MAX_LENGTH,
            bcrypt_rounds=config.BCRYPT_ROUNDS,
            cookie_name=config.COOKIE_NAME,
            cookie_secure=config.ENVIRONMENT == "production",
            api_prefix=config.API_PREFIX,
            open_path_prefixes=open_paths_for(config.API_PREFIX),
        )
