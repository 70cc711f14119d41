"""Configuration models and loading."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field, PrivateAttr, ValidationError, model_validator

from core.exceptions import ConfigurationError
from core.retry import RetryPolicy
from core.target import TargetDescriptor, parse_target

VERSION = "0.1.0"


class ProxySettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=8080, gt=0, lt=65536)
    debug: bool = False


class RetrySettings(BaseModel):
    max_attempts: int = Field(default=3, ge=1)
    base_delay: float = Field(default=0.1, ge=0)
    timeout: float = Field(default=10.0, gt=0)

    def to_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.max_attempts,
            base_delay=self.base_delay,
            timeout=self.timeout,
        )


class Config(BaseModel):
    target: str
    version: str = VERSION
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)

    _target_descriptor: TargetDescriptor = PrivateAttr()

    @model_validator(mode="after")
    def parse_target_descriptor(self) -> "Config":
        # Parsed once; ConfigurationError propagates unwrapped.
        self._target_descriptor = parse_target(self.target)
        return self

    @property
    def target_descriptor(self) -> TargetDescriptor:
        return self._target_descriptor


# Environment variable -> (section, field); section None means top level.
ENV_FIELDS: dict[str, tuple[str | None, str]] = {
    "TARGET": (None, "target"),
    "APP_VERSION": (None, "version"),
    "HOST": ("proxy", "host"),
    "PORT": ("proxy", "port"),
    "DEBUG_LOGS": ("proxy", "debug"),
    "RETRY_ATTEMPTS": ("retry", "max_attempts"),
    "RETRY_BASE_DELAY": ("retry", "base_delay"),
    "FORWARD_TIMEOUT": ("retry", "timeout"),
}


def load_config(environ: Mapping[str, str] | None = None) -> Config:
    """Load configuration from environment variables.

    Raises:
        ConfigurationError: if TARGET is missing or any value is invalid
    """
    environ = os.environ if environ is None else environ

    data: dict[str, object] = {}
    for env_name, (section, field) in ENV_FIELDS.items():
        value = environ.get(env_name)
        if value is None or value == "":
            continue
        if section is None:
            data[field] = value
        else:
            data.setdefault(section, {})[field] = value

    if "target" not in data:
        raise ConfigurationError("TARGET environment variable is not set")

    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    return config
