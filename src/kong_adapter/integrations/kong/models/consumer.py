"""Pydantic models for Kong Consumers and their per-consumer plugin data.

A Consumer stands for one application subscribed to one API. Its username
is ``<applicationId>$<apiId>`` and its custom_id carries the portal's
application id so consumers can be found again from the portal side.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from kong_adapter.integrations.kong.models.base import KongEntityBase
from kong_adapter.utils.payload import make_user_name


class Consumer(KongEntityBase):
    """Kong Consumer entity model.

    Attributes:
        username: Consumer username (unique).
        custom_id: Custom identifier (unique), the portal application id.
    """

    _entity_name: ClassVar[str] = "consumer"

    username: str | None = Field(default=None, description="Consumer username (unique)")
    custom_id: str | None = Field(default=None, description="Custom identifier (unique)")

    @classmethod
    def for_application(cls, app_id: str, api_id: str) -> Consumer:
        """Build the consumer representing ``app_id``'s subscription to ``api_id``."""
        return cls(username=make_user_name(app_id, api_id), custom_id=app_id)


class ConsumerPlugin(KongEntityBase):
    """Plugin data stored below a consumer, e.g. a key-auth key or an ACL group.

    Posted to ``consumers/{consumer}/{plugin_name}``; the fields depend on
    the plugin, so everything besides the common ones is kept as extras.
    """

    _entity_name: ClassVar[str] = "consumer_plugin"

    consumer: dict[str, str] | None = Field(default=None, description="Associated consumer")
