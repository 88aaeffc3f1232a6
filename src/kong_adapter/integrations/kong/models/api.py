"""Pydantic model for the composite API entity.

Kong has no single "API" entity any more; an API exposed through the portal
is backed by exactly one Service and one Route. ``KongApi`` is the logical
view of that pair. A service without a route is not an API.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from kong_adapter.integrations.kong.models.route import Route
from kong_adapter.integrations.kong.models.service import Service


class KongApi(BaseModel):
    """Composite API entity.

    Attributes:
        id: Identifier, equal to the backing Service's id.
        name: API name, used for both the Service and the Route.
        upstream_url: Full upstream URL (protocol://host[:port][/path]).
        uris: Exposed path prefixes.
        hosts: Exposed host names.
        methods: HTTP methods to match.
        strip_uri: Strip the matched prefix before proxying.
        preserve_host: Forward the client's Host header.
        https_only: Accept HTTPS only.
        retries: Upstream retries.
        upstream_connect_timeout: Connect timeout (ms).
        upstream_send_timeout: Write timeout (ms).
        upstream_read_timeout: Read timeout (ms).
        created_at: Creation timestamp of the Service.
        kong_service: Observed Service this API was read from (not serialized).
        kong_route: Observed Route this API was read from (not serialized).
    """

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str | None = None
    upstream_url: str | None = None
    uris: list[str] | None = None
    hosts: list[str] | None = None
    methods: list[str] | None = None
    strip_uri: bool | None = None
    preserve_host: bool | None = None
    https_only: bool | None = None
    retries: int | None = None
    upstream_connect_timeout: int | None = None
    upstream_send_timeout: int | None = None
    upstream_read_timeout: int | None = None
    created_at: int | None = None

    kong_service: Service | None = Field(default=None, exclude=True, repr=False)
    kong_route: Route | None = Field(default=None, exclude=True, repr=False)
