"""Manager for composite APIs backed by a Kong Service and Route.

Kong has no transactions spanning several entities, so every composite
operation is a strict sequence of single calls: the Service is created
before the Route that references it and deleted after it. A failure in the
middle leaves the earlier steps applied; a later full resync is expected to
find and clean up such leftovers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from kong_adapter.integrations.kong.exceptions import (
    KongNotFoundError,
    KongUnknownReferenceError,
)
from kong_adapter.integrations.kong.models.base import KongEntityReference
from kong_adapter.integrations.kong.models.route import Route
from kong_adapter.integrations.kong.models.service import Service
from kong_adapter.integrations.kong.translation import (
    api_to_service_route,
    service_route_to_api,
)
from kong_adapter.services.kong.base import run_concurrently
from kong_adapter.services.kong.route_manager import RouteManager
from kong_adapter.services.kong.service_manager import ServiceManager

if TYPE_CHECKING:
    from kong_adapter.integrations.kong.client import KongAdminClient
    from kong_adapter.integrations.kong.models.api import KongApi

logger = structlog.get_logger()


class ApiManager:
    """Lifecycle operations for composite APIs.

    Example:
        >>> manager = ApiManager(client)
        >>> api = KongApi(name="pets", upstream_url="http://pets:8080", uris=["/pets"])
        >>> created = await manager.create(api)
        >>> await manager.delete(created.id)
    """

    def __init__(self, client: KongAdminClient) -> None:
        self._client = client
        self.services = ServiceManager(client)
        self.routes = RouteManager(client)
        self._log = logger.bind(entity="api")

    async def list_all(self) -> list[KongApi]:
        """List every composite API.

        Services and routes are fetched concurrently; one API is built per
        route whose service exists. Routes pointing at unknown services are
        skipped with a warning.
        """
        self._log.debug("listing_all_apis")
        services, routes = await run_concurrently(
            self.services.list_all(),
            self.routes.list_all(),
        )
        services_by_id: dict[str, Service] = {s.id: s for s in services if s.id is not None}

        apis: list[KongApi] = []
        for route in routes:
            service = services_by_id.get(route.service_id) if route.service_id else None
            if service is None:
                self._log.warning(
                    "route_with_unknown_service",
                    route_id=route.id,
                    paths=route.paths,
                    service_id=route.service_id,
                )
                continue
            apis.append(service_route_to_api(service, route))

        self._log.debug("listed_all_apis", count=len(apis))
        return apis

    async def get(self, api_id: str) -> KongApi:
        """Get one composite API by its service id.

        Raises:
            KongNotFoundError: If the service does not exist or has no route.
        """
        service, route = await run_concurrently(
            self.services.get(api_id),
            self.routes.get_for_service(api_id),
        )
        if route is None:
            raise KongNotFoundError(resource_type="api", resource_id=api_id)
        return service_route_to_api(service, route)

    async def _find_route(self, api_id: str) -> Route:
        route = await self.routes.get_for_service(api_id)
        if route is None or route.id is None:
            raise KongUnknownReferenceError(
                f"Could not retrieve route for service {api_id}",
                resource_type="route",
                resource_id=api_id,
            )
        return route

    async def create(self, api: KongApi) -> KongApi:
        """Create the Service, then the Route pointing at it.

        There is no rollback: if the Route cannot be created the Service
        stays in Kong and the error is raised.
        """
        self._log.info("creating_api", name=api.name)
        service, route = api_to_service_route(api)

        persisted_service = await self.services.create(service)
        route.service = KongEntityReference.from_id(persisted_service.id or "")
        try:
            persisted_route = await self.routes.create(route)
        except Exception:
            self._log.error(
                "api_route_creation_failed",
                name=api.name,
                orphaned_service_id=persisted_service.id,
            )
            raise

        self._log.info("created_api", id=persisted_service.id)
        return service_route_to_api(persisted_service, persisted_route)

    async def update(self, api_id: str, api: KongApi) -> KongApi:
        """Patch the Service, then the Route of an existing API.

        Raises:
            KongUnknownReferenceError: If the service has no route.
        """
        self._log.info("updating_api", id=api_id)
        service, route = api_to_service_route(api)
        service.id = api_id

        existing_route = await self._find_route(api_id)
        route.id = existing_route.id
        route.service = KongEntityReference.from_id(existing_route.service_id or api_id)

        persisted_service = await self.services.update(api_id, service)
        persisted_route = await self.routes.update(existing_route.id or "", route)

        self._log.info("updated_api", id=api_id)
        return service_route_to_api(persisted_service, persisted_route)

    async def delete(self, api_id: str) -> None:
        """Delete the Route, then the Service of an API.

        Raises:
            KongUnknownReferenceError: If the service has no route.
        """
        self._log.info("deleting_api", id=api_id)
        route = await self._find_route(api_id)
        await self.routes.delete(route.id or "")
        await self.services.delete(api_id)
        self._log.info("deleted_api", id=api_id)
