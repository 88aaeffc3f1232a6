"""Cached plan and group catalogs of the API portal.

The portal backend is reached through loader coroutines supplied by the
caller (usually thin wrappers around the portal SDK). Plans are fetched on
first use; groups must be loaded once with ``init_groups`` so that
``get_groups`` can answer synchronously. Both stay cached for the life of
the process unless ``invalidate`` is called.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field

logger = structlog.get_logger()


class ApiPlan(BaseModel):
    """A subscription plan offered for portal APIs."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    name: str | None = None
    description: str | None = None
    needs_approval: bool = Field(default=False, alias="needsApproval")
    required_group: str | None = Field(default=None, alias="requiredGroup")
    config: dict[str, Any] = Field(default_factory=dict)


class PlanCollection(BaseModel):
    model_config = ConfigDict(extra="allow")

    plans: list[ApiPlan] = Field(default_factory=list)


class Group(BaseModel):
    """A portal user group."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    name: str | None = None
    alt_ids: list[str] = Field(default_factory=list)
    admin_group: bool = Field(default=False, alias="adminGroup")


class GroupCollection(BaseModel):
    model_config = ConfigDict(extra="allow")

    groups: list[Group] = Field(default_factory=list)


class UnknownPlanError(LookupError):
    """Raised when a plan id is not part of the portal's plan catalog."""

    def __init__(self, plan_id: str) -> None:
        super().__init__(f"Unknown plan ID: {plan_id}")
        self.plan_id = plan_id


PlansLoader = Callable[[], Awaitable[Any]]
GroupsLoader = Callable[[], Awaitable[Any]]


class PortalCatalog:
    """Process-lifetime cache of the portal's plans and groups."""

    def __init__(self, plans_loader: PlansLoader, groups_loader: GroupsLoader) -> None:
        self._plans_loader = plans_loader
        self._groups_loader = groups_loader
        self._plans: PlanCollection | None = None
        self._groups: GroupCollection | None = None
        self._plans_lock = asyncio.Lock()
        self._log = logger.bind(component="portal_catalog")

    async def get_plans(self) -> PlanCollection:
        """Return the plan catalog, loading it on first use."""
        async with self._plans_lock:
            if self._plans is None:
                self._log.debug("loading_plans")
                self._plans = PlanCollection.model_validate(await self._plans_loader())
                self._log.info("loaded_plans", count=len(self._plans.plans))
            return self._plans

    async def get_plan(self, plan_id: str) -> ApiPlan:
        """Look up one plan.

        Raises:
            UnknownPlanError: If the catalog has no plan with this id.
        """
        plans = await self.get_plans()
        for plan in plans.plans:
            if plan.id == plan_id:
                return plan
        raise UnknownPlanError(plan_id)

    async def init_groups(self) -> GroupCollection:
        """Load the group catalog; must be awaited before ``get_groups``."""
        self._log.debug("loading_groups")
        self._groups = GroupCollection.model_validate(await self._groups_loader())
        self._log.info("loaded_groups", count=len(self._groups.groups))
        return self._groups

    def get_groups(self) -> GroupCollection:
        """Return the cached group catalog.

        Raises:
            RuntimeError: If ``init_groups`` has not completed yet.
        """
        if self._groups is None:
            raise RuntimeError(
                "Portal groups are not initialized; await init_groups() before get_groups()"
            )
        return self._groups

    def invalidate(self) -> None:
        """Drop both caches so the next access reloads them."""
        self._plans = None
        self._groups = None
        self._log.debug("portal_catalog_invalidated")
