"""Tests for domain-specific configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from webtoolkit.core.config import Settings
from webtoolkit.core.settings import (
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_JSON_SIZE,
    AppConfig,
    ServerConfig,
    StorageConfig,
    ToolkitConfig,
)


class TestToolkitConfig:
    """ToolkitConfig defaults, immutability and allow-list tests."""

    def test_defaults(self) -> None:
        config = ToolkitConfig()
        assert config.max_file_size == 1024 * 1024 * 1024
        assert config.max_json_size == 1024 * 1024
        assert config.allowed_file_types == ()
        assert config.allow_unknown_fields is False

    def test_zero_sizes_use_defaults_at_construction(self) -> None:
        config = ToolkitConfig(max_file_size=0, max_json_size=0)
        assert config.max_file_size == DEFAULT_MAX_FILE_SIZE
        assert config.max_json_size == DEFAULT_MAX_JSON_SIZE

    def test_negative_size_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ToolkitConfig(max_file_size=-1)

    def test_frozen_immutability(self) -> None:
        config = ToolkitConfig()
        with pytest.raises(ValidationError):
            config.max_file_size = 10  # type: ignore[misc]

    def test_allowed_types_from_comma_string(self) -> None:
        config = ToolkitConfig(allowed_file_types="image/png, image/jpeg,,")  # type: ignore[arg-type]
        assert config.allowed_file_types == ("image/png", "image/jpeg")

    def test_allowed_types_from_list(self) -> None:
        config = ToolkitConfig(allowed_file_types=["image/gif", " "])  # type: ignore[arg-type]
        assert config.allowed_file_types == ("image/gif",)

    def test_empty_allow_list_allows_anything(self) -> None:
        assert ToolkitConfig().is_type_allowed("application/x-anything") is True

    def test_allow_list_is_case_insensitive(self) -> None:
        config = ToolkitConfig(allowed_file_types=("IMAGE/PNG",))
        assert config.is_type_allowed("image/png") is True
        assert config.is_type_allowed("image/jpeg") is False


class TestAppConfig:
    """AppConfig frozen immutability and property tests."""

    def test_frozen_immutability(self) -> None:
        config = AppConfig(name="test", env="development", debug=True)
        with pytest.raises(ValidationError):
            config.name = "changed"  # type: ignore[misc]

    def test_is_development(self) -> None:
        config = AppConfig(name="app", env="development", debug=True)
        assert config.is_development is True
        assert config.is_production is False

    def test_is_production(self) -> None:
        config = AppConfig(name="app", env="production", debug=False)
        assert config.is_production is True
        assert config.is_development is False


class TestServerAndStorageConfig:
    """ServerConfig and StorageConfig field tests."""

    def test_server_base_url(self) -> None:
        config = ServerConfig(host="127.0.0.1", port=3000)
        assert config.base_url == "http://127.0.0.1:3000"
        assert config.reload is False

    def test_storage_paths(self) -> None:
        config = StorageConfig(upload_dir=Path("/tmp/u"), static_dir=Path("/tmp/s"))
        assert config.upload_dir == Path("/tmp/u")
        with pytest.raises(ValidationError):
            config.static_dir = Path("/elsewhere")  # type: ignore[misc]


class TestSettingsDomainProperties:
    """Settings domain property access tests."""

    def test_toolkit_defaults(self) -> None:
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.toolkit.max_file_size == DEFAULT_MAX_FILE_SIZE
        assert s.toolkit.allowed_file_types == ()
        assert s.allowed_file_types_list == []

    def test_toolkit_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_FILE_SIZE", "2048")
        monkeypatch.setenv("ALLOWED_FILE_TYPES", "image/png,application/pdf")
        monkeypatch.setenv("MAX_JSON_SIZE", "0")
        monkeypatch.setenv("ALLOW_UNKNOWN_FIELDS", "true")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.toolkit.max_file_size == 2048
        assert s.toolkit.allowed_file_types == ("image/png", "application/pdf")
        assert s.toolkit.max_json_size == DEFAULT_MAX_JSON_SIZE
        assert s.toolkit.allow_unknown_fields is True

    def test_app_property(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_NAME", "my-app")
        monkeypatch.setenv("APP_ENV", "production")
        monkeypatch.setenv("DEBUG", "false")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.app.name == "my-app"
        assert s.app.is_production is True
        assert s.is_development is False
        assert s.server.reload is False

    def test_storage_property(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("UPLOAD_DIR", "/srv/uploads")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.storage.upload_dir == Path("/srv/uploads")
        assert s.storage.static_dir == Path("./data/static")

    def test_server_property(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOST", "127.0.0.1")
        monkeypatch.setenv("PORT", "9000")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.server.host == "127.0.0.1"
        assert s.server.port == 9000
