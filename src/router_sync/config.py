from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # General
    config_path: Path = Field(default=Path("./config.yml"))
    log_level: str = Field(default="INFO")

    # mc-router
    mc_router_api_url: str = Field(default="http://localhost:5001")
    http_timeout: Optional[float] = Field(default=None)

    # Docker
    docker_socket_path: str = Field(default="/var/run/docker.sock")
    docker_host_ip: str = Field(default="127.0.0.1")
    slug_label: str = Field(default="router.slug")

    # Scheduling
    poll_interval: float = Field(default=5.0)
    config_watch_interval: float = Field(default=1.0)
    exclusive_cycles: bool = Field(default=False)

    model_config = {"env_file": ".env", "extra": "ignore"}


def load_settings() -> Settings:
    return Settings()
