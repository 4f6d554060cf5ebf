"""Server configuration."""

from pydantic import BaseModel


class ServerConfig(BaseModel, frozen=True):
    """Uvicorn bind settings for the demo application."""

    host: str
    port: int
    reload: bool = False

    @property
    def base_url(self) -> str:
        """URL the demo application is reachable at."""
        return f"http://{self.host}:{self.port}"
