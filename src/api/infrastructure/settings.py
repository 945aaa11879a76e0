"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        MEMBERSHIP_DB_HOST: Database host (default: localhost)
        MEMBERSHIP_DB_PORT: Database port (default: 5432)
        MEMBERSHIP_DB_DATABASE: Database name (default: membership)
        MEMBERSHIP_DB_USERNAME: Database user (default: membership)
        MEMBERSHIP_DB_PASSWORD: Database password (required in production)
        MEMBERSHIP_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        MEMBERSHIP_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        MEMBERSHIP_DB_CREATE_SCHEMA: Create missing tables at startup (default: true)
    """

    model_config = SettingsConfigDict(
        env_prefix="MEMBERSHIP_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="membership", description="Database name")
    username: str = Field(default="membership", description="Database username")
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
    create_schema: bool = Field(
        default=True,
        description="Create missing tables at application startup",
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


class SlackSettings(BaseSettings):
    """Slack workspace settings.

    Environment variables:
        MEMBERSHIP_SLACK_BASE_URL: Web API base URL
        MEMBERSHIP_SLACK_BOT_TOKEN: Bot token for channel and message calls
        MEMBERSHIP_SLACK_ADMIN_TOKEN: Org admin token for admin.users.* calls
        MEMBERSHIP_SLACK_TEAM_ID: Workspace id for admin calls
        MEMBERSHIP_SLACK_MEMBERSHIP_FIELD_ID: Custom profile field showing membership
        MEMBERSHIP_SLACK_RESTRICTED_CHANNELS: Channels kept by restricted accounts
    """

    model_config = SettingsConfigDict(
        env_prefix="MEMBERSHIP_SLACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(default="https://slack.com/api")
    bot_token: SecretStr = Field(default=SecretStr(""))
    admin_token: SecretStr = Field(default=SecretStr(""))
    team_id: str = Field(default="")
    membership_field_id: str = Field(default="")
    restricted_channels: list[str] = Field(
        default_factory=lambda: ["general", "public-365"],
        description="Channels a restricted (id check pending or lapsed) account keeps",
    )


class GoogleSettings(BaseSettings):
    """Google Workspace directory settings."""

    model_config = SettingsConfigDict(
        env_prefix="MEMBERSHIP_GOOGLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(default="https://admin.googleapis.com/admin/directory/v1")
    access_token: SecretStr = Field(default=SecretStr(""))
    domain: str = Field(default="denhac.org")


class WooCommerceSettings(BaseSettings):
    """WooCommerce REST API settings."""

    model_config = SettingsConfigDict(
        env_prefix="MEMBERSHIP_WOO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(default="https://denhac.org")
    consumer_key: SecretStr = Field(default=SecretStr(""))
    consumer_secret: SecretStr = Field(default=SecretStr(""))
    per_page: int = Field(default=100, ge=1, le=100)


class ReactorSettings(BaseSettings):
    """Targets of the side effects scheduled by reactors.

    Environment variables:
        MEMBERSHIP_REACTOR_GENERAL_GROUP: Group every customer joins
        MEMBERSHIP_REACTOR_MEMBERS_GROUP: Group active members join
        MEMBERSHIP_REACTOR_BOARD_GROUP: Group board members join
        MEMBERSHIP_REACTOR_BOARD_CHANNEL: Chat channel for the board
        MEMBERSHIP_REACTOR_BOARD_USER_GROUP: Chat user group handle for the board
        MEMBERSHIP_REACTOR_PRINTER_3D_PLAN_ID: Membership plan for 3D printer users
        MEMBERSHIP_REACTOR_LASER_CUTTER_PLAN_ID: Membership plan for laser cutter users
    """

    model_config = SettingsConfigDict(
        env_prefix="MEMBERSHIP_REACTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    general_group: str = Field(default="denhac@denhac.org")
    members_group: str = Field(default="members@denhac.org")
    board_group: str = Field(default="board@denhac.org")
    board_channel: str = Field(default="board")
    board_user_group: str = Field(default="theboard")
    printer_3d_plan_id: int | None = Field(default=None)
    printer_3d_channel: str = Field(default="3d-printing")
    laser_cutter_plan_id: int | None = Field(default=None)
    laser_cutter_channel: str = Field(default="laser")


class FeatureFlagSettings(BaseSettings):
    """Named toggles that alter reactor behavior."""

    model_config = SettingsConfigDict(
        env_prefix="MEMBERSHIP_FEATURE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    need_id_check_gets_added_to_slack_and_email: bool = Field(default=False)
    keep_members_in_slack_and_email: bool = Field(default=False)
    remove_deactivated_members_from_groups: bool = Field(default=False)


class AuditSettings(BaseSettings):
    """Issue auditor settings."""

    model_config = SettingsConfigDict(
        env_prefix="MEMBERSHIP_AUDIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    domain: str = Field(default="denhac.org")
    excluded_groups: list[str] = Field(
        default_factory=lambda: ["denhac@denhac.org", "lpfmerrors@denhac.org"]
    )
    members_group: str = Field(default="members@denhac.org")
    ignored_chat_ids: list[str] = Field(
        default_factory=lambda: ["UNEA0SKK3", "USLACKBOT"],
        description="System accounts that are never matched to members",
    )


class OutboxSettings(BaseSettings):
    """Reactor worker settings.

    Environment variables:
        MEMBERSHIP_OUTBOX_WORKER_ENABLED: Run the worker in this process
        MEMBERSHIP_OUTBOX_POLL_INTERVAL_SECONDS: Delay between polls
        MEMBERSHIP_OUTBOX_BATCH_SIZE: Entries claimed per poll
        MEMBERSHIP_OUTBOX_MAX_RETRIES: Attempts before an entry is dead-lettered
    """

    model_config = SettingsConfigDict(
        env_prefix="MEMBERSHIP_OUTBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    worker_enabled: bool = Field(default=True)
    poll_interval_seconds: int = Field(default=5, ge=1)
    batch_size: int = Field(default=50, ge=1, le=1000)
    max_retries: int = Field(default=5, ge=1)


class LoggingSettings(BaseSettings):
    """Structlog output settings.

    Environment variables:
        MEMBERSHIP_LOG_LEVEL: Minimum level name (DEBUG, INFO, ...)
        MEMBERSHIP_LOG_FORMAT: "console", "json", or "auto" to pick console
            output on a TTY (or when FORCE_COLOR is set) and JSON otherwise
    """

    model_config = SettingsConfigDict(
        env_prefix="MEMBERSHIP_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )
    format: Literal["auto", "console", "json"] = Field(default="auto")

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


@lru_cache
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings."""
    return LoggingSettings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings."""
    return DatabaseSettings()


@lru_cache
def get_slack_settings() -> SlackSettings:
    """Get cached Slack settings."""
    return SlackSettings()


@lru_cache
def get_google_settings() -> GoogleSettings:
    """Get cached Google directory settings."""
    return GoogleSettings()


@lru_cache
def get_woocommerce_settings() -> WooCommerceSettings:
    """Get cached WooCommerce settings."""
    return WooCommerceSettings()


@lru_cache
def get_reactor_settings() -> ReactorSettings:
    """Get cached reactor settings."""
    return ReactorSettings()


@lru_cache
def get_feature_flag_settings() -> FeatureFlagSettings:
    """Get cached feature flag settings."""
    return FeatureFlagSettings()


@lru_cache
def get_audit_settings() -> AuditSettings:
    """Get cached auditor settings."""
    return AuditSettings()


@lru_cache
def get_outbox_settings() -> OutboxSettings:
    """Get cached reactor worker settings."""
    return OutboxSettings()
