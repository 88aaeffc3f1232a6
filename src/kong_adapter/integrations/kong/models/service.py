"""Pydantic model for Kong Services.

A Service is the upstream Kong proxies to. It must exist before any Route
can reference it.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field, field_validator

from kong_adapter.integrations.kong.models.base import KongEntityBase


class Service(KongEntityBase):
    """Kong Service entity model.

    Attributes:
        name: Service name (unique).
        protocol: Protocol used to talk to the upstream.
        host: Hostname or IP of the upstream server.
        port: Upstream port.
        path: Path prefix prepended to proxied requests.
        retries: Number of retries on upstream failure.
        connect_timeout: Connection timeout in milliseconds.
        write_timeout: Write timeout in milliseconds.
        read_timeout: Read timeout in milliseconds.
    """

    _entity_name: ClassVar[str] = "service"

    name: str | None = Field(default=None, description="Service name (unique)")
    protocol: str | None = Field(default=None, description="Upstream protocol")
    host: str | None = Field(default=None, description="Upstream host")
    port: int | None = Field(default=None, ge=1, le=65535, description="Upstream port")
    path: str | None = Field(default=None, description="Upstream path prefix")
    retries: int | None = Field(default=None, ge=0, description="Number of retries")
    connect_timeout: int | None = Field(default=None, ge=0, description="Connect timeout (ms)")
    write_timeout: int | None = Field(default=None, ge=0, description="Write timeout (ms)")
    read_timeout: int | None = Field(default=None, ge=0, description="Read timeout (ms)")

    @field_validator("protocol", mode="before")
    @classmethod
    def lowercase_protocol(cls, v: str | None) -> str | None:
        if v is not None:
            return v.lower()
        return v
