"""Application environment configuration."""

from typing import Literal

from pydantic import BaseModel

Environment = Literal["development", "staging", "production"]


class AppConfig(BaseModel, frozen=True):
    """Application environment settings."""

    name: str
    env: Environment
    debug: bool
    version: str = "0.1.0"

    @property
    def is_development(self) -> bool:
        return self.env == "development"

    @property
    def is_production(self) -> bool:
        return self.env == "production"
