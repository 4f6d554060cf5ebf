"""Domain-specific configuration models."""

from webtoolkit.core.settings.app_config import AppConfig
from webtoolkit.core.settings.server_config import ServerConfig
from webtoolkit.core.settings.storage_config import StorageConfig
from webtoolkit.core.settings.toolkit_config import (
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_JSON_SIZE,
    ToolkitConfig,
)

__all__ = [
    "DEFAULT_MAX_FILE_SIZE",
    "DEFAULT_MAX_JSON_SIZE",
    "AppConfig",
    "ServerConfig",
    "StorageConfig",
    "ToolkitConfig",
]
