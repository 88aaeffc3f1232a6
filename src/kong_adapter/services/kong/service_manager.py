"""Service manager for Kong Services."""

from __future__ import annotations

from kong_adapter.integrations.kong.models.plugin import KongPlugin
from kong_adapter.integrations.kong.models.route import Route
from kong_adapter.integrations.kong.models.service import Service
from kong_adapter.services.kong.base import BaseEntityManager


class ServiceManager(BaseEntityManager[Service]):
    """Manager for Kong Service entities.

    Example:
        >>> manager = ServiceManager(client)
        >>> created = await manager.create(Service(name="my-api", host="api.example.com"))
        >>> routes = await manager.get_routes(created.id)
    """

    _endpoint = "services"
    _entity_name = "service"
    _model_class = Service

    async def get_routes(self, service_id_or_name: str) -> list[Route]:
        """Get all routes associated with a service."""
        self._log.debug("getting_service_routes", service=service_id_or_name)
        items = await self._get_all(f"services/{service_id_or_name}/routes")
        routes = [Route.model_validate(r) for r in items]
        self._log.debug("got_service_routes", service=service_id_or_name, count=len(routes))
        return routes

    async def get_plugins(self, service_id_or_name: str) -> list[KongPlugin]:
        """Get all plugins associated with a service."""
        self._log.debug("getting_service_plugins", service=service_id_or_name)
        items = await self._get_all(f"services/{service_id_or_name}/plugins")
        plugins = [KongPlugin.model_validate(p) for p in items]
        self._log.debug("got_service_plugins", service=service_id_or_name, count=len(plugins))
        return plugins
