"""Kong Gateway integration - HTTP client, models and reconciliation helpers."""

from kong_adapter.integrations.kong.availability import (
    AvailabilityGate,
    get_availability_gate,
    get_kong_cluster_status,
    is_kong_available,
    mark_kong_available,
    reset_availability,
)
from kong_adapter.integrations.kong.client import KongAdminClient
from kong_adapter.integrations.kong.config import (
    KongAdapterConfig,
    KongAuthConfig,
    KongConnectionConfig,
)
from kong_adapter.integrations.kong.exceptions import (
    KongAPIError,
    KongAuthError,
    KongConnectionError,
    KongNotFoundError,
    KongUnavailableError,
    KongUnexpectedStatusError,
    KongUnknownReferenceError,
    KongValidationError,
    TranslationAmbiguityWarning,
)
from kong_adapter.integrations.kong.matching import match_objects
from kong_adapter.integrations.kong.statistics import (
    StatisticsRecorder,
    SyncStatistics,
    get_statistics,
    reset_statistics,
)

__all__ = [
    "AvailabilityGate",
    "KongAPIError",
    "KongAdapterConfig",
    "KongAdminClient",
    "KongAuthConfig",
    "KongAuthError",
    "KongConnectionConfig",
    "KongConnectionError",
    "KongNotFoundError",
    "KongUnavailableError",
    "KongUnexpectedStatusError",
    "KongUnknownReferenceError",
    "KongValidationError",
    "StatisticsRecorder",
    "SyncStatistics",
    "TranslationAmbiguityWarning",
    "get_availability_gate",
    "get_kong_cluster_status",
    "get_statistics",
    "is_kong_available",
    "mark_kong_available",
    "match_objects",
    "reset_availability",
    "reset_statistics",
]
