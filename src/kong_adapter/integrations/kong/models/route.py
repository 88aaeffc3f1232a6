"""Pydantic model for Kong Routes.

A Route matches client requests (paths, hosts, methods) and forwards them
to the Service it references by id. Routes are deleted before their Service.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field, field_validator

from kong_adapter.integrations.kong.models.base import KongEntityBase, KongEntityReference


class Route(KongEntityBase):
    """Kong Route entity model.

    Attributes:
        name: Route name (unique).
        service: Reference to the Service this route forwards to.
        protocols: Accepted client protocols.
        methods: HTTP methods to match.
        hosts: Host headers to match.
        paths: Path prefixes to match.
        strip_path: Whether to strip the matched prefix before proxying.
        preserve_host: Whether to forward the client's Host header.
    """

    _entity_name: ClassVar[str] = "route"

    name: str | None = Field(default=None, description="Route name (unique)")
    service: KongEntityReference | None = Field(default=None, description="Associated service")
    protocols: list[str] | None = Field(default=None, description="Accepted protocols")
    methods: list[str] | None = Field(default=None, description="HTTP methods")
    hosts: list[str] | None = Field(default=None, description="Host headers to match")
    paths: list[str] | None = Field(default=None, description="Path prefixes to match")
    strip_path: bool | None = Field(default=None, description="Strip matched path prefix")
    preserve_host: bool | None = Field(default=None, description="Preserve host header")

    @field_validator("methods", mode="before")
    @classmethod
    def uppercase_methods(cls, v: list[str] | None) -> list[str] | None:
        if v is not None:
            return [m.upper() for m in v]
        return v

    @property
    def service_id(self) -> str | None:
        return self.service.id if self.service else None

    def to_create_payload(self) -> dict[str, Any]:
        """Create payload with the service reference reduced to id or name."""
        payload = super().to_create_payload()
        if self.service is not None:
            payload["service"] = self.service.to_payload()
        return payload
