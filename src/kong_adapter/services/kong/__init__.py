"""Kong service layer - typed resource accessors for Kong entities.

Managers implement the Repository pattern on top of the Kong Admin client.
``ApiManager`` drives the composite API lifecycle across Services and Routes.
"""

from kong_adapter.services.kong.api_manager import ApiManager
from kong_adapter.services.kong.base import BaseEntityManager, run_concurrently
from kong_adapter.services.kong.consumer_manager import ConsumerManager
from kong_adapter.services.kong.plugin_manager import KongPluginManager
from kong_adapter.services.kong.route_manager import RouteManager
from kong_adapter.services.kong.service_manager import ServiceManager

__all__ = [
    "ApiManager",
    "BaseEntityManager",
    "ConsumerManager",
    "KongPluginManager",
    "RouteManager",
    "ServiceManager",
    "run_concurrently",
]
