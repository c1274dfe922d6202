"""Provider configuration and environment loading."""

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from hostingde.challenges.dns01 import DEFAULT_TTL, un_fqdn
from hostingde.exceptions import ConfigError
from hostingde.transport import DEFAULT_TIMEOUT

ENV_API_KEY = "HOSTINGDE_API_KEY"
ENV_ZONE_NAME = "HOSTINGDE_ZONE_NAME"

# Optional overrides: config field -> environment variable
_OPTIONAL_ENV = {
    "ttl": "HOSTINGDE_TTL",
    "propagation_timeout": "HOSTINGDE_PROPAGATION_TIMEOUT",
    "polling_interval": "HOSTINGDE_POLLING_INTERVAL",
    "http_timeout": "HOSTINGDE_HTTP_TIMEOUT",
}

DEFAULT_PROPAGATION_TIMEOUT = 120.0
DEFAULT_POLLING_INTERVAL = 2.0


class HostingdeConfig(BaseModel):
    """Validated hosting.de provider configuration.

    The API key and zone name are fixed for the lifetime of a provider.
    Use ``create()`` or ``from_env()`` to get ConfigError instead of a
    pydantic ValidationError on bad input.
    """

    api_key: str = Field(min_length=1, repr=False)
    zone_name: str = Field(min_length=1)
    ttl: int = Field(default=DEFAULT_TTL, ge=1)
    propagation_timeout: float = Field(default=DEFAULT_PROPAGATION_TIMEOUT, gt=0)
    polling_interval: float = Field(default=DEFAULT_POLLING_INTERVAL, gt=0)
    http_timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    model_config = {"frozen": True, "str_strip_whitespace": True}

    @field_validator("zone_name", mode="before")
    @classmethod
    def _normalize_zone_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return un_fqdn(value.strip())
        return value

    @classmethod
    def create(cls, **values: Any) -> "HostingdeConfig":
        """Validate configuration values.

        Raises:
            ConfigError: If a value is missing or invalid.
        """
        try:
            return cls(**values)
        except ValidationError as exc:
            fields = sorted({".".join(str(part) for part in err["loc"]) for err in exc.errors()})
            raise ConfigError(
                f"hosting.de: invalid or missing configuration: {', '.join(fields)}"
            ) from exc

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "HostingdeConfig":
        """Load configuration from environment variables.

        Requires HOSTINGDE_API_KEY and HOSTINGDE_ZONE_NAME. HOSTINGDE_TTL,
        HOSTINGDE_PROPAGATION_TIMEOUT, HOSTINGDE_POLLING_INTERVAL and
        HOSTINGDE_HTTP_TIMEOUT are optional.

        Args:
            environ: Mapping to read from (defaults to os.environ).

        Raises:
            ConfigError: If a required variable is unset or a value is invalid.
        """
        env = os.environ if environ is None else environ

        missing = [name for name in (ENV_API_KEY, ENV_ZONE_NAME) if not env.get(name)]
        if missing:
            raise ConfigError(
                f"hosting.de: some credentials information are missing: {', '.join(missing)}"
            )

        values: dict[str, Any] = {
            "api_key": env[ENV_API_KEY],
            "zone_name": env[ENV_ZONE_NAME],
        }
        for field, name in _OPTIONAL_ENV.items():
            if env.get(name):
                values[field] = env[name]

        return cls.create(**values)
