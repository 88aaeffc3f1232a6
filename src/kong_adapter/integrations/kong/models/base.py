"""Base models for Kong entities.

All Kong entities share id, created_at, updated_at and tags. Fields the
models do not declare are kept as extras, so an entity fetched from Kong and
sent back (or compared) does not lose server-side data.
"""

from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class KongEntityBase(BaseModel):
    """Base class for all Kong entity models.

    Attributes:
        id: Unique identifier (UUID string).
        created_at: Unix timestamp of creation.
        updated_at: Unix timestamp of last update.
        tags: Entity tags for filtering and organization.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
    )

    id: str | None = Field(default=None, description="Unique identifier")
    created_at: int | None = Field(default=None, description="Unix timestamp of creation")
    updated_at: int | None = Field(default=None, description="Unix timestamp of last update")
    tags: list[str] | None = Field(default=None, description="Entity tags for filtering")

    _entity_name: ClassVar[str] = "entity"

    _server_fields: ClassVar[frozenset[str]] = frozenset({"id", "created_at", "updated_at"})

    def to_create_payload(self) -> dict[str, Any]:
        """Payload for POST: server-assigned fields and None values dropped."""
        return {
            k: v
            for k, v in self.model_dump(mode="json", exclude=set(self._server_fields)).items()
            if v is not None
        }

    def to_update_payload(self) -> dict[str, Any]:
        """Payload for PATCH; same shape as for creation."""
        return self.to_create_payload()


class KongEntityReference(BaseModel):
    """Reference to another Kong entity, by id or by name."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str | None = None

    @classmethod
    def from_id(cls, entity_id: str) -> KongEntityReference:
        return cls(id=entity_id)

    def to_payload(self) -> dict[str, str]:
        """Keep only the id if present, otherwise the name."""
        if self.id:
            return {"id": self.id}
        if self.name:
            return {"name": self.name}
        return {}


T = TypeVar("T", bound=BaseModel)


class KongCollection(BaseModel, Generic[T]):
    """A page of entities as returned by Kong list endpoints.

    Kong uses cursor-based pagination with an offset token.
    """

    model_config = ConfigDict(extra="allow")

    data: list[T] = Field(default_factory=list)
    next: str | None = None
    offset: str | None = None

    @property
    def has_more(self) -> bool:
        return self.offset is not None
