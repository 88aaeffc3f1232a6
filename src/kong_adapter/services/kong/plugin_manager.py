"""Plugin manager for Kong Plugins.

API-level plugins hang off the Service backing a composite API; global
plugins have no scope at all. Plugins are updated and deleted through the
top-level ``plugins`` endpoint by their own id.
"""

from __future__ import annotations

from kong_adapter.integrations.kong.models.base import KongEntityReference
from kong_adapter.integrations.kong.models.plugin import KongPlugin
from kong_adapter.services.kong.base import BaseEntityManager


class KongPluginManager(BaseEntityManager[KongPlugin]):
    """Manager for Kong Plugin entities.

    Example:
        >>> manager = KongPluginManager(client)
        >>> plugin = KongPlugin(name="rate-limiting", config={"minute": 100})
        >>> await manager.create_for_api(api_id, plugin)
    """

    _endpoint = "plugins"
    _entity_name = "plugin"
    _model_class = KongPlugin

    async def list_for_api(self, api_id: str) -> list[KongPlugin]:
        """List all plugins scoped to an API's service."""
        self._log.debug("listing_api_plugins", api=api_id)
        plugins = self._validate_all(await self._get_all(f"services/{api_id}/plugins"))
        self._log.debug("listed_api_plugins", api=api_id, count=len(plugins))
        return plugins

    async def list_for_api_and_consumer(self, api_id: str, consumer_id: str) -> list[KongPlugin]:
        """List the plugins of an API that are scoped to one consumer."""
        self._log.debug("listing_api_consumer_plugins", api=api_id, consumer=consumer_id)
        items = await self._get_all(f"services/{api_id}/plugins", consumer_id=consumer_id)
        return self._validate_all(items)

    async def list_by_name(self, plugin_name: str) -> list[KongPlugin]:
        """List all plugin instances with the given name, whatever their scope."""
        self._log.debug("listing_plugins_by_name", plugin=plugin_name)
        return await self.list_all(name=plugin_name)

    async def create_for_api(self, api_id: str, plugin: KongPlugin) -> KongPlugin:
        """Attach a plugin to an API's service."""
        payload = plugin.to_create_payload()
        payload.pop("service", None)
        self._log.info("creating_api_plugin", api=api_id, plugin=plugin.name)
        response = await self._client.post(f"services/{api_id}/plugins", json=payload)
        created = self._model_class.model_validate(response)
        self._log.info("created_api_plugin", api=api_id, id=created.id)
        return created

    async def update_for_api(self, api_id: str, plugin_id: str, plugin: KongPlugin) -> KongPlugin:
        """Patch an API-scoped plugin, pinning it to the API's service."""
        scoped = plugin.model_copy(
            update={"id": plugin_id, "service": KongEntityReference.from_id(api_id)}
        )
        self._log.debug("updating_api_plugin", api=api_id, plugin=plugin.name)
        return await self.update(plugin_id, scoped)

    async def delete_for_api(self, api_id: str, plugin_id: str) -> None:
        self._log.debug("deleting_api_plugin", api=api_id, id=plugin_id)
        await self.delete(plugin_id)

    async def create_global(self, plugin: KongPlugin) -> KongPlugin:
        """Create a plugin without service, route or consumer scope."""
        return await self.create(plugin)
