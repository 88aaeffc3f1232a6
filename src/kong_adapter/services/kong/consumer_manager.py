"""Consumer manager for Kong Consumers.

This module provides the ConsumerManager class for managing Kong Consumer
entities and the plugin data (credentials, ACL groups) stored below them.
"""

from __future__ import annotations

from typing import Any

from kong_adapter.integrations.kong.models.consumer import Consumer, ConsumerPlugin
from kong_adapter.services.kong.base import BaseEntityManager


class ConsumerManager(BaseEntityManager[Consumer]):
    """Manager for Kong Consumer entities.

    Example:
        >>> manager = ConsumerManager(client)
        >>> created = await manager.create(Consumer.for_application("my-app", "petstore"))
        >>> await manager.create_plugin(created.id, "key-auth", {"key": "secret"})
    """

    _endpoint = "consumers"
    _entity_name = "consumer"
    _model_class = Consumer

    async def list_by_custom_id(self, custom_id: str) -> list[Consumer]:
        """List the consumers carrying a portal application id."""
        consumers, _ = await self.list(custom_id=custom_id)
        return consumers

    async def get_by_username(self, username: str) -> Consumer:
        """Get a consumer by its username.

        Raises:
            KongNotFoundError: If no consumer has that username.
        """
        return await self.get(username)

    async def get_plugin_data(
        self,
        consumer_id: str,
        plugin_name: str,
    ) -> list[ConsumerPlugin]:
        """List the plugin data of one kind stored for a consumer."""
        self._log.debug("getting_consumer_plugin_data", consumer=consumer_id, plugin=plugin_name)
        response = await self._client.get(f"consumers/{consumer_id}/{plugin_name}")
        return [ConsumerPlugin.model_validate(item) for item in response.get("data", [])]

    async def create_plugin(
        self,
        consumer_id: str,
        plugin_name: str,
        data: dict[str, Any] | ConsumerPlugin,
    ) -> ConsumerPlugin:
        """Store plugin data (e.g. a key-auth key) for a consumer."""
        payload = data.to_create_payload() if isinstance(data, ConsumerPlugin) else data
        self._log.info("creating_consumer_plugin", consumer=consumer_id, plugin=plugin_name)
        response = await self._client.post(f"consumers/{consumer_id}/{plugin_name}", json=payload)
        created = ConsumerPlugin.model_validate(response)
        self._log.info(
            "created_consumer_plugin",
            consumer=consumer_id,
            plugin=plugin_name,
            id=created.id,
        )
        return created

    async def delete_plugin(self, consumer_id: str, plugin_name: str, plugin_id: str) -> None:
        self._log.info(
            "deleting_consumer_plugin",
            consumer=consumer_id,
            plugin=plugin_name,
            id=plugin_id,
        )
        await self._client.delete(f"consumers/{consumer_id}/{plugin_name}/{plugin_id}")
