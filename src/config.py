"""Configuration for the application."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseConfig(BaseSettings):
    """Configuration for database."""

    model_config = SettingsConfigDict(env_prefix="DATABASE_", env_file=".env", extra="ignore")

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    name: str = Field(default="alerting_db", description="Database name")
    user: str = Field(default="alerting_user", description="Database user")
    password: str = Field(default="alerting_password", description="Database password")
    dsn: str | None = Field(default=None, description="Full synchronous URL, overrides host/port/name")
    async_dsn: str | None = Field(default=None, description="Full asynchronous URL, overrides host/port/name")
    pool_size: int = Field(default=20, ge=1, description="Base connection pool size")
    max_overflow: int = Field(default=10, ge=0, description="Additional connections under load")

    @property
    def url(self) -> str:
        """Get synchronous database URL."""
        if self.dsn:
            return self.dsn
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"

    @property
    def async_url(self) -> str:
        """Get asynchronous database URL."""
        if self.async_dsn:
            return self.async_dsn
        return f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"


class LoggingConfig(BaseSettings):
    """Configuration for logging."""

    model_config = SettingsConfigDict(env_prefix="LOG_", env_file=".env", extra="ignore")

    level: str = Field(default="INFO", description="Console log level")
    file: str = Field(default="logs/app.log", description="Log file path (empty disables file logging)")
    rotation: str = Field(default="100 MB", description="Rotate the log file at this size")
    retention: str = Field(default="30 days", description="Keep rotated files this long")


class ServerConfig(BaseSettings):
    """Configuration for the HTTP server."""

    model_config = SettingsConfigDict(env_prefix="SERVER_", env_file=".env", extra="ignore")

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")


class AppConfig(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
