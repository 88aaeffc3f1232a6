"""Kong API entity models.

This package contains Pydantic models for the Kong Admin API entities the
adapter works with, plus the composite API entity.
"""

from kong_adapter.integrations.kong.models.api import KongApi
from kong_adapter.integrations.kong.models.base import (
    KongCollection,
    KongEntityBase,
    KongEntityReference,
)
from kong_adapter.integrations.kong.models.consumer import Consumer, ConsumerPlugin
from kong_adapter.integrations.kong.models.plugin import KongPlugin
from kong_adapter.integrations.kong.models.route import Route
from kong_adapter.integrations.kong.models.service import Service

__all__ = [
    "Consumer",
    "ConsumerPlugin",
    "KongApi",
    "KongCollection",
    "KongEntityBase",
    "KongEntityReference",
    "KongPlugin",
    "Route",
    "Service",
]
