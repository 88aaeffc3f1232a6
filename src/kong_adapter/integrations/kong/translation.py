"""Translation between the composite API entity and Kong's Service/Route pair."""

from __future__ import annotations

import warnings
from collections.abc import Sequence
from typing import Any, TypeVar
from urllib.parse import urlsplit

import structlog

from kong_adapter.integrations.kong.exceptions import TranslationAmbiguityWarning
from kong_adapter.integrations.kong.models.api import KongApi
from kong_adapter.integrations.kong.models.route import Route
from kong_adapter.integrations.kong.models.service import Service

logger = structlog.get_logger()

DEFAULT_PORTS: dict[str, int] = {
    "http": 80,
    "https": 443,
    "grpc": 80,
    "grpcs": 443,
}

HTTPS_ONLY_PROTOCOLS = ["https"]
DEFAULT_PROTOCOLS = ["http", "https"]


def split_upstream_url(upstream_url: str) -> dict[str, Any]:
    """Split an upstream URL into Service protocol, host, port and path.

    A Service has no place for credentials, a query string or a fragment.

    Raises:
        ValueError: If the URL has no host, or carries any of those parts.
    """
    parts = urlsplit(upstream_url)
    if not parts.hostname:
        raise ValueError(f"Upstream URL has no host: {upstream_url}")
    if parts.username is not None or parts.password is not None:
        raise ValueError(f"Upstream URL must not contain credentials: {parts.hostname}")
    if parts.query or parts.fragment:
        raise ValueError(f"Upstream URL must not contain a query or fragment: {upstream_url}")
    protocol = parts.scheme.lower() or "http"
    return {
        "protocol": protocol,
        "host": parts.hostname,
        "port": parts.port or DEFAULT_PORTS.get(protocol),
        "path": parts.path or None,
    }


def build_upstream_url(service: Service) -> str | None:
    """Rebuild the upstream URL of a Service; default ports are left out."""
    if not service.host:
        return None
    protocol = service.protocol or "http"
    host = f"[{service.host}]" if ":" in service.host else service.host
    url = f"{protocol}://{host}"
    if service.port and service.port != DEFAULT_PORTS.get(protocol):
        url += f":{service.port}"
    return url + (service.path or "")


M = TypeVar("M", bound=Service | Route)


def _overlay(base: M, values: dict[str, Any]) -> M:
    # Revalidate so the model normalizers and range checks apply
    overlaid = {k: v for k, v in values.items() if v is not None}
    return type(base).model_validate({**base.model_dump(), **overlaid})


def api_to_service_route(api: KongApi) -> tuple[Service, Route]:
    """Split a composite API into the Service and Route that back it.

    If the API was read from Kong, the observed Service and Route are used as
    the starting point so fields the composite does not model survive.
    The Route's service reference is left for the caller to set.
    """
    service_values: dict[str, Any] = {
        "id": api.id,
        "name": api.name,
        "retries": api.retries,
        "connect_timeout": api.upstream_connect_timeout,
        "write_timeout": api.upstream_send_timeout,
        "read_timeout": api.upstream_read_timeout,
    }
    if api.upstream_url:
        service_values.update(split_upstream_url(api.upstream_url))

    protocols: list[str] | None = None
    if api.https_only is not None:
        protocols = list(HTTPS_ONLY_PROTOCOLS if api.https_only else DEFAULT_PROTOCOLS)

    route_values: dict[str, Any] = {
        "name": api.name,
        "paths": api.uris,
        "hosts": api.hosts,
        "methods": api.methods,
        "strip_path": api.strip_uri,
        "preserve_host": api.preserve_host,
        "protocols": protocols,
    }

    base_service = api.kong_service.model_copy(deep=True) if api.kong_service else Service()
    base_route = api.kong_route.model_copy(deep=True) if api.kong_route else Route()
    return _overlay(base_service, service_values), _overlay(base_route, route_values)


def service_route_to_api(service: Service, route: Route) -> KongApi:
    """Combine a Service and its Route into a composite API."""
    https_only: bool | None = None
    if route.protocols is not None:
        https_only = route.protocols == HTTPS_ONLY_PROTOCOLS

    return KongApi(
        id=service.id,
        name=service.name or route.name,
        upstream_url=build_upstream_url(service),
        uris=route.paths,
        hosts=route.hosts,
        methods=route.methods,
        strip_uri=route.strip_path,
        preserve_host=route.preserve_host,
        https_only=https_only,
        retries=service.retries,
        upstream_connect_timeout=service.connect_timeout,
        upstream_send_timeout=service.write_timeout,
        upstream_read_timeout=service.read_timeout,
        created_at=service.created_at,
        kong_service=service,
        kong_route=route,
    )


def pick_route(routes: Sequence[Route], service_id: str) -> Route | None:
    """Pick the route backing a service's composite API.

    The composite model supports one route per service. Kong does not
    enforce that, so with several routes the first one wins and a
    :class:`TranslationAmbiguityWarning` is emitted.
    """
    if not routes:
        return None
    if len(routes) > 1:
        logger.warning(
            "multiple_routes_for_service",
            service_id=service_id,
            route_ids=[r.id for r in routes],
        )
        warnings.warn(
            f"Multiple routes found for service {service_id}, using the first one",
            TranslationAmbiguityWarning,
            stacklevel=2,
        )
    return routes[0]
