"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./sh.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    # Seconds a SQLite writer waits on a held write lock before "database is locked".
    busy_timeout_seconds: float = Field(default=30.0, ge=0)


class SecuritySettings(BaseModel):
    # Empty token leaves the admin API unrestricted (a warning is logged at start-up).
    admin_token: str = ""
    token_sweep_interval_seconds: int = Field(default=600, ge=0)


class SiteSettings(BaseModel):
    hostname: str = "localhost:8000"
    scheme: Literal["http", "https"] = "https"


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "sh-server"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    site: SiteSettings = SiteSettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def admin_token(self) -> str:
        return self.security.admin_token

    @property
    def base_url(self) -> str:
        return f"{self.site.scheme}://{self.site.hostname}"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
