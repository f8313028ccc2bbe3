from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from router_sync.utils.errors import ConfigError


class ManualEntry(BaseModel):
    host: str
    port: int = Field(..., ge=1, le=65535)
    override_suffix: Optional[List[str]] = None

    model_config = {"frozen": True}

    @property
    def backend(self) -> str:
        return f"{self.host}:{self.port}"


class RouteConfig(BaseModel):
    default_domain_suffix: List[str] = Field(default_factory=list)
    manual: Dict[str, ManualEntry] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @field_validator("default_domain_suffix", "manual", mode="before")
    @classmethod
    def none_as_empty(cls, v: object, info: ValidationInfo) -> object:
        # An empty YAML section ("manual:") parses as None
        if v is None:
            return [] if info.field_name == "default_domain_suffix" else {}
        return v


def load_route_config(path: Path) -> RouteConfig:
    """
    Read and validate the route config file.

    Raises ConfigError for any problem so callers only need to handle one type.
    """
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level, got {type(raw).__name__}")

    try:
        return RouteConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e
