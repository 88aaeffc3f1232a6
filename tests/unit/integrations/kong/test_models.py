"""Unit tests for Kong entity models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from kong_adapter.integrations.kong.models import (
    Consumer,
    ConsumerPlugin,
    KongCollection,
    KongEntityReference,
    KongPlugin,
    Route,
    Service,
)


@pytest.mark.unit
class TestService:
    """Tests for the Service model."""

    def test_protocol_lowercased(self) -> None:
        assert Service(protocol="HTTPS").protocol == "https"

    @pytest.mark.parametrize("port", [0, 65536])
    def test_port_range(self, port: int) -> None:
        with pytest.raises(ValidationError):
            Service(port=port)

    def test_create_payload_drops_server_fields_and_nones(self) -> None:
        service = Service.model_validate(
            {
                "id": "s-1",
                "created_at": 1,
                "updated_at": 2,
                "name": "pets",
                "host": "pets.internal",
                "path": None,
                "tls_verify_depth": 2,
            }
        )

        assert service.to_create_payload() == {
            "name": "pets",
            "host": "pets.internal",
            "tls_verify_depth": 2,
        }


@pytest.mark.unit
class TestRoute:
    """Tests for the Route model."""

    def test_methods_uppercased(self) -> None:
        assert Route(methods=["get", "Post"]).methods == ["GET", "POST"]

    def test_service_reference_reduced_to_id(self) -> None:
        route = Route.model_validate(
            {"name": "pets", "service": {"id": "s-1", "name": "pets"}, "paths": ["/pets"]}
        )

        assert route.service_id == "s-1"
        assert route.to_create_payload() == {
            "name": "pets",
            "service": {"id": "s-1"},
            "paths": ["/pets"],
        }

    def test_service_reference_by_name(self) -> None:
        route = Route(service=KongEntityReference(name="pets"))

        assert route.service_id is None
        assert route.to_create_payload() == {"service": {"name": "pets"}}


@pytest.mark.unit
class TestPluginAndConsumer:
    """Tests for plugin and consumer models."""

    def test_plugin_name_required(self) -> None:
        with pytest.raises(ValidationError):
            KongPlugin()  # type: ignore[call-arg]

    def test_plugin_scope_references(self) -> None:
        plugin = KongPlugin(
            name="rate-limiting",
            service=KongEntityReference.from_id("s-1"),
            consumer=KongEntityReference.from_id("c-1"),
            config={"minute": 10},
        )

        assert plugin.to_create_payload() == {
            "name": "rate-limiting",
            "service": {"id": "s-1"},
            "consumer": {"id": "c-1"},
            "config": {"minute": 10},
        }

    def test_consumer_for_application(self) -> None:
        consumer = Consumer.for_application("my-app", "petstore")

        assert consumer.username == "my-app$petstore"
        assert consumer.custom_id == "my-app"

    def test_consumer_plugin_keeps_plugin_fields(self) -> None:
        data = ConsumerPlugin.model_validate(
            {"id": "k-1", "key": "secret", "consumer": {"id": "c-1"}, "created_at": 1}
        )

        assert data.consumer == {"id": "c-1"}
        assert data.model_extra == {"key": "secret"}
        assert data.to_create_payload() == {"key": "secret", "consumer": {"id": "c-1"}}


@pytest.mark.unit
class TestKongCollection:
    """Tests for paged collections."""

    def test_has_more(self) -> None:
        page = KongCollection[Service].model_validate(
            {
                "data": [{"id": "s-1", "name": "pets"}],
                "offset": "abc",
                "next": "/services?offset=abc",
            }
        )

        assert page.has_more
        assert isinstance(page.data[0], Service)

    def test_last_page(self) -> None:
        assert not KongCollection[Route].model_validate({"data": []}).has_more
