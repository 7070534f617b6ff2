"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        EMPLOYEES_DB_HOST: Database host (default: localhost)
        EMPLOYEES_DB_PORT: Database port (default: 5432)
        EMPLOYEES_DB_DATABASE: Database name (default: employees)
        EMPLOYEES_DB_USERNAME: Database user (default: employees)
        EMPLOYEES_DB_PASSWORD: Database password (required in production)
        EMPLOYEES_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        EMPLOYEES_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="EMPLOYEES_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="employees", description="Database name")
    username: str = Field(default="employees", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class EventSettings(BaseSettings):
    """Employee lifecycle event settings.

    Environment variables:
        EMPLOYEES_EVENTS_ENABLED: Publish lifecycle events (default: true)
        EMPLOYEES_EVENTS_PUBLISH_TIMEOUT_SECONDS: Upper bound on a single
            publish before it is abandoned (default: 2.0)
    """

    model_config = SettingsConfigDict(
        env_prefix="EMPLOYEES_EVENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = Field(default=True, description="Publish lifecycle events")
    publish_timeout_seconds: float = Field(
        default=2.0,
        description="Timeout applied to each event publish",
        gt=0,
        le=30,
    )


class NatsSettings(BaseSettings):
    """NATS broker settings used by the outbox relay.

    Environment variables:
        EMPLOYEES_NATS_URL: Comma-separated server URLs
            (default: nats://localhost:4222)
        EMPLOYEES_NATS_CLIENT_NAME: Connection name (default: employee-lifecycle)
        EMPLOYEES_NATS_CONNECT_TIMEOUT_SECONDS: Connection timeout (default: 2.0)
        EMPLOYEES_NATS_FLUSH_TIMEOUT_SECONDS: Publish acknowledgement timeout
            (default: 2.0)
    """

    model_config = SettingsConfigDict(
        env_prefix="EMPLOYEES_NATS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = Field(default="nats://localhost:4222", description="NATS server URLs")
    client_name: str = Field(
        default="employee-lifecycle", description="NATS connection name"
    )
    connect_timeout_seconds: float = Field(
        default=2.0, description="Connection timeout", gt=0, le=60
    )
    flush_timeout_seconds: float = Field(
        default=2.0, description="Publish acknowledgement timeout", gt=0, le=60
    )

    @property
    def servers(self) -> list[str]:
        """Server URLs parsed from the comma-separated url setting."""
        return [server.strip() for server in self.url.split(",") if server.strip()]


class OutboxRelaySettings(BaseSettings):
    """Outbox relay settings.

    Environment variables:
        EMPLOYEES_OUTBOX_POLL_INTERVAL_SECONDS: Pause between polls (default: 1.0)
        EMPLOYEES_OUTBOX_BATCH_SIZE: Entries relayed per poll (default: 100)
    """

    model_config = SettingsConfigDict(
        env_prefix="EMPLOYEES_OUTBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    poll_interval_seconds: float = Field(
        default=1.0, description="Pause between polls", gt=0, le=300
    )
    batch_size: int = Field(
        default=100, description="Entries relayed per poll", ge=1, le=1000
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Employee Service", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def events(self) -> EventSettings:
        """Get event settings."""
        return get_event_settings()

    @property
    def nats(self) -> NatsSettings:
        """Get NATS broker settings."""
        return get_nats_settings()

    @property
    def outbox(self) -> OutboxRelaySettings:
        """Get outbox relay settings."""
        return get_outbox_relay_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_event_settings() -> EventSettings:
    """Get cached event settings."""
    return EventSettings()


@lru_cache
def get_nats_settings() -> NatsSettings:
    """Get cached NATS broker settings."""
    return NatsSettings()


@lru_cache
def get_outbox_relay_settings() -> OutboxRelaySettings:
    """Get cached outbox relay settings."""
    return OutboxRelaySettings()
