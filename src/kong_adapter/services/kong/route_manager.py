"""Route manager for Kong Routes.

This module provides the RouteManager class for managing Kong Route
entities through the Admin API.
"""

from __future__ import annotations

from typing import Any

from kong_adapter.integrations.kong.models.route import Route
from kong_adapter.integrations.kong.translation import pick_route
from kong_adapter.services.kong.base import BaseEntityManager


class RouteManager(BaseEntityManager[Route]):
    """Manager for Kong Route entities.

    Extends BaseEntityManager with service-scoped lookups.
    """

    _endpoint = "routes"
    _entity_name = "route"
    _model_class = Route

    async def list_by_service(
        self,
        service_id_or_name: str,
        *,
        size: int | None = None,
        offset: str | None = None,
    ) -> tuple[list[Route], str | None]:
        """List one page of routes for a specific service.

        Returns:
            Tuple of (list of Route entities, next offset).
        """
        params: dict[str, Any] = {}
        if size:
            params["size"] = size
        if offset:
            params["offset"] = offset

        self._log.debug("listing_service_routes", service=service_id_or_name, **params)
        items, next_offset = await self._get_page(f"services/{service_id_or_name}/routes", params)
        routes = self._validate_all(items)
        self._log.debug(
            "listed_service_routes",
            service=service_id_or_name,
            count=len(routes),
            has_more=bool(next_offset),
        )
        return routes, next_offset

    async def get_for_service(self, service_id: str) -> Route | None:
        """Get the single route of a service.

        Returns:
            The route, or None if the service has none. With several routes
            the first one is returned and a TranslationAmbiguityWarning is
            emitted.
        """
        routes = self._validate_all(await self._get_all(f"services/{service_id}/routes"))
        return pick_route(routes, service_id)
