"""Environment-driven settings for the toolkit and demo app."""

from functools import cached_property
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from webtoolkit.core.settings import (
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_JSON_SIZE,
    AppConfig,
    ServerConfig,
    StorageConfig,
    ToolkitConfig,
)
from webtoolkit.core.settings.app_config import Environment


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Flat fields are loaded directly from environment variables.
    Domain properties provide grouped access (e.g. settings.toolkit.max_file_size).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = Field(
        default="webtoolkit",
        description="Application name",
    )
    app_env: Environment = Field(
        default="development",
        description="Application environment",
    )
    debug: bool = Field(
        default=True,
        description="Debug mode",
    )

    # Server
    host: str = Field(
        default="0.0.0.0",
        description="Server host",
    )
    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Server port",
    )

    # Uploads
    max_file_size: int = Field(
        default=DEFAULT_MAX_FILE_SIZE,
        ge=0,
        description="Maximum multipart request size in bytes (0 = default)",
    )
    allowed_file_types: str = Field(
        default="",
        description="Comma-separated list of allowed sniffed MIME types (empty = any)",
    )

    # JSON
    max_json_size: int = Field(
        default=DEFAULT_MAX_JSON_SIZE,
        ge=0,
        description="Maximum JSON body size in bytes (0 = default)",
    )
    allow_unknown_fields: bool = Field(
        default=False,
        description="Accept JSON keys the target model does not declare",
    )

    # Storage
    upload_dir: Path = Field(
        default=Path("./data/uploads"),
        description="Directory uploaded files are written to",
    )
    static_dir: Path = Field(
        default=Path("./data/static"),
        description="Directory static downloads are served from",
    )

    # --- Domain properties ---

    @cached_property
    def app(self) -> AppConfig:
        """Application environment configuration."""
        return AppConfig(
            name=self.app_name,
            env=self.app_env,
            debug=self.debug,
        )

    @cached_property
    def server(self) -> ServerConfig:
        """Server configuration."""
        return ServerConfig(
            host=self.host,
            port=self.port,
            reload=self.app.is_development,
        )

    @cached_property
    def toolkit(self) -> ToolkitConfig:
        """Upload and JSON helper configuration."""
        return ToolkitConfig(
            max_file_size=self.max_file_size,
            allowed_file_types=self.allowed_file_types,
            max_json_size=self.max_json_size,
            allow_unknown_fields=self.allow_unknown_fields,
        )

    @cached_property
    def storage(self) -> StorageConfig:
        """Upload and static directories."""
        return StorageConfig(
            upload_dir=self.upload_dir,
            static_dir=self.static_dir,
        )

    # --- Convenience properties (delegate to domain configs) ---

    @property
    def allowed_file_types_list(self) -> list[str]:
        """Get allowed MIME types as a list."""
        return list(self.toolkit.allowed_file_types)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app.is_development


# Global settings instance
settings = Settings()
