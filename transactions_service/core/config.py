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
    url: str = Field(default="sqlite+aiosqlite:///./transactions.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    # seconds a SQLite writer waits on the database lock
    sqlite_busy_timeout: float = 30.0


class SecuritySettings(BaseModel):
    access_secret: str = Field(default="change-me-access", min_length=8)
    refresh_secret: str = Field(default="change-me-refresh", min_length=8)
    algorithm: str = "HS256"
    admin_role: str = "admin"
    access_token_expire_minutes: int = 15
    refresh_token_expire_minutes: int = 60 * 24 * 7


class CorsSettings(BaseModel):
    origins: list[str] = Field(default_factory=lambda: ["*"])


class LedgerSettings(BaseModel):
    addressing: Literal["code", "id"] = "code"
    code_length: int = Field(default=12, ge=4, le=32)
    create_wallet_attempts: int = Field(default=5, ge=1)
    history_concurrency: int = Field(default=8, ge=1)
    history_timeout_seconds: Optional[float] = None
    partial_history_allowed: bool = True


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=(".env", "app.env"),
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Transactions Service"
    api_prefix: str = ""
    log_level: str = "INFO"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    cors: CorsSettings = CorsSettings()
    ledger: LedgerSettings = LedgerSettings()

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
    def access_secret(self) -> str:
        return self.security.access_secret

    @property
    def refresh_secret(self) -> str:
        return self.security.refresh_secret

    @property
    def algorithm(self) -> str:
        return self.security.algorithm


@lru_cache()
def get_settings() -> Settings:
    return Settings()
