"""
Runtime configuration.

Values come from environment variables, one per field, upper-cased
(DATABASE_URL, JWT_SECRET_KEY, ...). A .env file found from the working
directory upwards is loaded first.
"""
import os
import warnings
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, field_validator

INSECURE_JWT_SECRET = "neocoffee-insecure-default-change-me"


class Settings(BaseModel):
    database_url: str = "sqlite+aiosqlite:///./webaruhaz.db"
    database_echo: bool = False

    jwt_secret_key: str = INSECURE_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 24 * 60

    # Bootstrap admin, created or re-hashed on startup when both are set
    admin_username: Optional[str] = None
    admin_password: Optional[str] = None

    seed_catalog: bool = True

    cors_origins: List[str] = ["*"]
    login_rate_limit: str = "10/minute"
    rate_limit_enabled: bool = True
    metrics_enabled: bool = True
    otlp_endpoint: Optional[str] = None

    host: str = "0.0.0.0"
    port: int = 3000

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv(find_dotenv(usecwd=True))
        values = {
            name: os.environ[name.upper()]
            for name in cls.model_fields
            if os.environ.get(name.upper())
        }
        settings = cls(**values)

        if settings.jwt_secret_key == INSECURE_JWT_SECRET:
            warnings.warn(
                "JWT_SECRET_KEY is not set. Using an insecure default. "
                "Set this env var in production!",
                stacklevel=2,
            )
        return settings
