"""Kong adapter configuration models."""

from __future__ import annotations

import os
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator

# Kong version the adapter is built and tested against
EXPECTED_KONG_VERSION = "3.4"


class KongConnectionConfig(BaseModel):
    """Kong Admin API connection and retry configuration."""

    model_config = ConfigDict(extra="forbid")

    base_url: str | None = None
    timeout_ms: int = 5000
    retry_delay_ms: int = 2000
    max_attempts: int = 10
    page_size: int = 100000
    verify_ssl: bool = True

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str | None) -> str | None:
        """Validate base URL format."""
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("timeout_ms", "page_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @field_validator("retry_delay_ms", "max_attempts")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("value must be non-negative")
        return v

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @property
    def retry_delay_seconds(self) -> float:
        return self.retry_delay_ms / 1000


class KongAuthConfig(BaseModel):
    """Kong Admin API authentication configuration."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["none", "api_key", "mtls"] = "none"
    api_key: str | None = None
    header_name: str = "Kong-Admin-Token"
    cert_path: str | None = None
    key_path: str | None = None
    ca_path: str | None = None


class KongAdapterConfig(BaseModel):
    """Complete adapter configuration."""

    model_config = ConfigDict(extra="forbid")

    connection: KongConnectionConfig = KongConnectionConfig()
    auth: KongAuthConfig = KongAuthConfig()
    my_url: str | None = None
    debug_curl: bool = False

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> KongAdapterConfig:
        """Create configuration with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            KONG_ADAPTER_KONG_URL: Kong Admin API base URL
            KONG_ADAPTER_API_KEY: API key for authentication
            KONG_ADAPTER_AUTH_TYPE: Authentication type (none, api_key, mtls)
            KONG_ADAPTER_MY_URL: Externally visible URL of this adapter
            KONG_CURL: Echo every Kong call as a curl command on stderr
        """
        config_dict = base_config.copy() if base_config else {}
        config_dict.setdefault("connection", {})
        config_dict.setdefault("auth", {})

        if base_url := os.environ.get("KONG_ADAPTER_KONG_URL"):
            config_dict["connection"]["base_url"] = base_url

        if api_key := os.environ.get("KONG_ADAPTER_API_KEY"):
            config_dict["auth"]["api_key"] = api_key
            if config_dict["auth"].get("type", "none") == "none":
                config_dict["auth"]["type"] = "api_key"

        if auth_type := os.environ.get("KONG_ADAPTER_AUTH_TYPE"):
            config_dict["auth"]["type"] = auth_type

        if my_url := os.environ.get("KONG_ADAPTER_MY_URL"):
            config_dict["my_url"] = my_url

        if os.environ.get("KONG_CURL"):
            config_dict["debug_curl"] = True

        return cls.model_validate(config_dict)


def kong_version_matches(kong_globals: dict[str, Any]) -> bool:
    """Check the ``version`` reported by the Kong root endpoint against the expected one.

    Only the major.minor prefix is compared; Kong Enterprise suffixes are ignored.
    """
    version = str(kong_globals.get("version") or "")
    return version == EXPECTED_KONG_VERSION or version.startswith(f"{EXPECTED_KONG_VERSION}.")
