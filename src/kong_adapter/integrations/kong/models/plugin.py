"""Pydantic model for Kong Plugins.

Plugins attach policy either to a Service (per-API policy), to a Consumer
(per-application policy), or globally when no scope is set.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from kong_adapter.integrations.kong.models.base import KongEntityBase, KongEntityReference


class KongPlugin(KongEntityBase):
    """Kong Plugin entity model.

    Attributes:
        name: Plugin name (e.g. 'rate-limiting', 'key-auth').
        service: Service scope (optional).
        route: Route scope (optional).
        consumer: Consumer scope (optional).
        config: Plugin-specific configuration.
        protocols: Protocols the plugin runs on.
        enabled: Whether the plugin is active.
    """

    _entity_name: ClassVar[str] = "plugin"

    name: str = Field(description="Plugin name")
    service: KongEntityReference | None = Field(default=None, description="Service scope")
    route: KongEntityReference | None = Field(default=None, description="Route scope")
    consumer: KongEntityReference | None = Field(default=None, description="Consumer scope")
    config: dict[str, Any] | None = Field(default=None, description="Plugin configuration")
    protocols: list[str] | None = Field(default=None, description="Protocols")
    enabled: bool | None = Field(default=None, description="Whether plugin is active")

    def to_create_payload(self) -> dict[str, Any]:
        """Create payload with scope references reduced to id or name."""
        payload = super().to_create_payload()
        for scope in ("service", "route", "consumer"):
            ref = getattr(self, scope)
            if ref is not None:
                payload[scope] = ref.to_payload()
        return payload
