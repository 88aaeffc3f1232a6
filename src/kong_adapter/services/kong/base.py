"""Base entity manager for Kong entities.

This module provides an abstract base class implementing the Repository pattern
for Kong entities. All entity-specific managers inherit from BaseEntityManager
and extend it with entity-specific operations.
"""

from __future__ import annotations

import asyncio
import builtins
from abc import ABC
from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import structlog

from kong_adapter.integrations.kong.exceptions import KongNotFoundError
from kong_adapter.integrations.kong.models.base import KongEntityBase

if TYPE_CHECKING:
    from kong_adapter.integrations.kong.client import KongAdminClient

logger = structlog.get_logger()


async def run_concurrently(*aws: Awaitable[Any]) -> builtins.list[Any]:
    """Await independent calls concurrently and return their results in order.

    If any call fails, the others are cancelled and the first error is
    raised as is (not wrapped in an ExceptionGroup).
    """
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(_as_coroutine(aw)) for aw in aws]
    except ExceptionGroup as eg:
        first = eg.exceptions[0]
        while isinstance(first, ExceptionGroup):
            first = first.exceptions[0]
        raise first
    return [task.result() for task in tasks]


async def _as_coroutine(aw: Awaitable[Any]) -> Any:
    return await aw


T = TypeVar("T", bound=KongEntityBase)


class BaseEntityManager(ABC, Generic[T]):
    """Abstract base class for Kong entity managers.

    Type Parameters:
        T: The Pydantic model class for this entity type.

    Class Attributes:
        _endpoint: API endpoint path (e.g., "services", "routes").
        _entity_name: Human-readable entity name for logging.
        _model_class: Pydantic model class for deserializing responses.

    Example:
        >>> class ServiceManager(BaseEntityManager[Service]):
        ...     _endpoint = "services"
        ...     _entity_name = "service"
        ...     _model_class = Service
    """

    _endpoint: str = ""
    _entity_name: str = ""
    _model_class: type[T]

    def __init__(self, client: KongAdminClient) -> None:
        self._client = client
        self._page_size = client.connection_config.page_size
        self._log = logger.bind(entity=self._entity_name)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def _validate_all(self, items: builtins.list[dict[str, Any]]) -> builtins.list[T]:
        return [self._model_class.model_validate(item) for item in items]

    async def _get_page(
        self,
        endpoint: str,
        params: dict[str, Any],
    ) -> tuple[builtins.list[dict[str, Any]], str | None]:
        response = await self._client.get(endpoint, params=params)
        return response.get("data", []), response.get("offset")

    async def _get_all(
        self,
        endpoint: str,
        **filters: Any,
    ) -> builtins.list[dict[str, Any]]:
        """Fetch every page of a collection using the maximum page size."""
        items: builtins.list[dict[str, Any]] = []
        offset: str | None = None
        while True:
            params: dict[str, Any] = {"size": self._page_size, **filters}
            if offset:
                params["offset"] = offset
            page, offset = await self._get_page(endpoint, params)
            items.extend(page)
            if not offset:
                return items

    async def list(
        self,
        *,
        size: int | None = None,
        offset: str | None = None,
        **filters: Any,
    ) -> tuple[builtins.list[T], str | None]:
        """List one page of entities.

        Args:
            size: Page size (Kong default: 100).
            offset: Pagination offset token from a previous page.
            **filters: Entity-specific query parameters.

        Returns:
            Tuple of (entity models, next offset or None).
        """
        params: dict[str, Any] = dict(filters)
        if size:
            params["size"] = size
        if offset:
            params["offset"] = offset

        self._log.debug("listing_entities", **params)
        items, next_offset = await self._get_page(self._endpoint, params)
        entities = self._validate_all(items)
        self._log.debug("listed_entities", count=len(entities), has_more=bool(next_offset))
        return entities, next_offset

    async def list_all(self, **filters: Any) -> builtins.list[T]:
        """List every entity, following pagination offsets."""
        self._log.debug("listing_all_entities", **filters)
        entities = self._validate_all(await self._get_all(self._endpoint, **filters))
        self._log.debug("listed_all_entities", count=len(entities))
        return entities

    async def get(self, id_or_name: str) -> T:
        """Get a single entity by ID or name.

        Raises:
            KongNotFoundError: If entity doesn't exist.
        """
        self._log.debug("getting_entity", id_or_name=id_or_name)
        try:
            response = await self._client.get(f"{self._endpoint}/{id_or_name}")
        except KongNotFoundError as e:
            raise KongNotFoundError(
                resource_type=self._entity_name,
                resource_id=id_or_name,
                expected_status=e.expected_status,
                response_body=e.response_body,
                endpoint=e.endpoint,
            ) from e
        return self._model_class.model_validate(response)

    async def create(self, entity: T) -> T:
        """Create a new entity.

        Returns:
            The created entity with server-assigned fields populated.
        """
        payload = entity.to_create_payload()
        self._log.info("creating_entity", **payload)
        response = await self._client.post(self._endpoint, json=payload)
        created = self._model_class.model_validate(response)
        self._log.info("created_entity", id=created.id)
        return created

    async def update(self, id_or_name: str, entity: T) -> T:
        """Update an existing entity with PATCH semantics."""
        payload = entity.to_update_payload()
        self._log.info("updating_entity", id_or_name=id_or_name, **payload)
        response = await self._client.patch(f"{self._endpoint}/{id_or_name}", json=payload)
        updated = self._model_class.model_validate(response)
        self._log.info("updated_entity", id=updated.id)
        return updated

    async def delete(self, id_or_name: str) -> None:
        self._log.info("deleting_entity", id_or_name=id_or_name)
        await self._client.delete(f"{self._endpoint}/{id_or_name}")
        self._log.info("deleted_entity", id_or_name=id_or_name)

    async def exists(self, id_or_name: str) -> bool:
        try:
            await self.get(id_or_name)
            return True
        except KongNotFoundError:
            return False
