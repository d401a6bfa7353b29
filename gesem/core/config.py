# gesem/core/config.py
"""
Configuración de la aplicación cargada desde variables de entorno / .env.
"""

import os
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "..", "data")
DEFAULT_DATABASE_FILE = os.path.join(DATA_DIR, "db", "gesem.sqlite")


class Settings(BaseSettings):
    """
    Ajustes globales. Usar `get_settings()` para obtener la instancia cacheada.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "GESEM Manager"
    app_env: Literal["development", "production", "testing"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    secret_key: str | None = None
    access_token_lifetime: int = 28800  # 8 horas, una jornada
    database_url: str | None = Field(
        default=None,
        description="URL SQLAlchemy síncrona. Por defecto SQLite en data/db/",
    )

    # Perú: zona horaria y prefijo para enlaces de WhatsApp/SMS
    timezone: str = "America/Lima"
    phone_country_code: str = "51"
    company_signature: str = "GESEM"

    rate_limit: str = "120/minute"
    audit_log_dir: str = "logs"
    allowed_origins: str = "http://localhost:8000"
    allowed_hosts: str = "localhost,127.0.0.1"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def sync_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        os.makedirs(os.path.dirname(DEFAULT_DATABASE_FILE), exist_ok=True)
        return f"sqlite:///{DEFAULT_DATABASE_FILE}"

    @property
    def async_database_url(self) -> str:
        """Misma base de datos, con el driver async que necesita fastapi-users."""
        url = self.sync_database_url
        if url.startswith("sqlite:"):
            return url.replace("sqlite:", "sqlite+aiosqlite:", 1)
        if url.startswith("postgresql:"):
            return url.replace("postgresql:", "postgresql+asyncpg:", 1)
        return url

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @property
    def hosts(self) -> list[str]:
        return [h.strip() for h in self.allowed_hosts.split(",") if h.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Instancia única de Settings. En tests: get_settings.cache_clear()."""
    return Settings()
