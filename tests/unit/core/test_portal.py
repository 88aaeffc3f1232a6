"""Unit tests for the portal plan and group catalog."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest

from kong_adapter.core.portal import PortalCatalog, UnknownPlanError

PLANS: dict[str, Any] = {
    "plans": [
        {"id": "basic", "name": "Basic", "config": {"rate-limiting": {"minute": 100}}},
        {"id": "gold", "name": "Gold", "needsApproval": True, "requiredGroup": "partners"},
    ]
}

GROUPS: dict[str, Any] = {
    "groups": [
        {"id": "admins", "name": "Admins", "adminGroup": True},
        {"id": "partners", "name": "Partners", "alt_ids": ["ext-partners"]},
    ]
}


@pytest.fixture
def plans_loader() -> AsyncMock:
    return AsyncMock(return_value=PLANS)


@pytest.fixture
def groups_loader() -> AsyncMock:
    return AsyncMock(return_value=GROUPS)


@pytest.fixture
def catalog(plans_loader: AsyncMock, groups_loader: AsyncMock) -> PortalCatalog:
    return PortalCatalog(plans_loader, groups_loader)


@pytest.mark.unit
class TestPlans:
    """Tests for plan lookup."""

    @pytest.mark.asyncio
    async def test_plans_are_loaded_once(
        self, catalog: PortalCatalog, plans_loader: AsyncMock
    ) -> None:
        first = await catalog.get_plans()
        second = await catalog.get_plans()

        assert first is second
        assert [p.id for p in first.plans] == ["basic", "gold"]
        plans_loader.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_plan(self, catalog: PortalCatalog) -> None:
        plan = await catalog.get_plan("gold")

        assert plan.needs_approval is True
        assert plan.required_group == "partners"

    @pytest.mark.asyncio
    async def test_unknown_plan(self, catalog: PortalCatalog) -> None:
        with pytest.raises(UnknownPlanError, match="Unknown plan ID: platinum"):
            await catalog.get_plan("platinum")

    @pytest.mark.asyncio
    async def test_invalidate_reloads(
        self, catalog: PortalCatalog, plans_loader: AsyncMock
    ) -> None:
        await catalog.get_plans()
        catalog.invalidate()
        await catalog.get_plans()

        assert plans_loader.await_count == 2


@pytest.mark.unit
class TestGroups:
    """Tests for the group catalog."""

    def test_groups_require_init(self, catalog: PortalCatalog) -> None:
        with pytest.raises(RuntimeError, match="init_groups"):
            catalog.get_groups()

    @pytest.mark.asyncio
    async def test_init_groups(self, catalog: PortalCatalog) -> None:
        await catalog.init_groups()

        groups = catalog.get_groups().groups
        assert groups[0].admin_group is True
        assert groups[1].alt_ids == ["ext-partners"]
