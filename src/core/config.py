"""Runtime settings: where the move oracle lives and how the clocks run."""

import os
from typing import Mapping, Optional, Self

from pydantic import BaseModel, Field, ValidationError, field_validator

from src.core.exceptions import ConfigError

ORACLE_URL = "http://localhost:8080/api/chess"

# environment variable -> Settings field
ENV_VARIABLES: dict[str, str] = {
    "CHESS_ORACLE_URL": "oracle_url",
    "CHESS_ORACLE_TIMEOUT": "oracle_timeout",
    "CHESS_CLOCK_START": "clock_start",
    "CHESS_CLOCK_INTERVAL": "clock_interval",
}


class Settings(BaseModel):
    oracle_url: str = ORACLE_URL
    oracle_timeout: float = Field(default=5.0, gt=0)
    clock_start: int = Field(default=600, gt=0)
    clock_interval: float = Field(default=1.0, gt=0)

    @field_validator("oracle_url")
    @classmethod
    def validate_oracle_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"Oracle URL must be http(s), got {value!r}")
        return value.rstrip("/")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Build settings from CHESS_* environment variables. Unset variables keep their defaults."""
        environ = os.environ if environ is None else environ
        values = {
            field_name: environ[variable]
            for variable, field_name in ENV_VARIABLES.items()
            if variable in environ
        }
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigError(f"Invalid chess settings in environment: {exc}") from exc
