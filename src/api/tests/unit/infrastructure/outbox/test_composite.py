"""Unit tests for CompositeReactor and CompositeSerializer."""

from unittest.mock import Mock

import pytest

from infrastructure.outbox.composite import CompositeReactor, CompositeSerializer
from shared_kernel.outbox.observability import OutboxWorkerProbe


class Ping:
    pass


class Pong:
    pass


class RecordingReactor:
    def __init__(self, event_types: frozenset[str], action: str):
        self._event_types = event_types
        self._action = action

    def supported_event_types(self) -> frozenset[str]:
        return self._event_types

    def react(self, event) -> list:
        return [f"{self._action}:{type(event).__name__}"]


class StubSerializer:
    def __init__(self, event_types: frozenset[str]):
        self._event_types = event_types

    def supported_event_types(self) -> frozenset[str]:
        return self._event_types

    def serialize(self, event) -> dict:
        return {"type": type(event).__name__}

    def deserialize(self, event_type: str, payload: dict):
        return {"Ping": Ping, "Pong": Pong}[event_type]()


class TestCompositeReactor:
    def test_register_calls_probe_with_context_name(self):
        probe = Mock(spec=OutboxWorkerProbe)
        composite = CompositeReactor(probe=probe)

        composite.register(
            RecordingReactor(frozenset({"Ping"}), "chat"), context_name="membership"
        )

        probe.reactor_registered.assert_called_once_with(
            "membership", frozenset({"Ping"})
        )

    def test_register_defaults_to_class_name(self):
        probe = Mock(spec=OutboxWorkerProbe)
        composite = CompositeReactor(probe=probe)

        composite.register(RecordingReactor(frozenset({"Ping"}), "chat"))

        probe.reactor_registered.assert_called_once_with(
            "RecordingReactor", frozenset({"Ping"})
        )

    def test_actions_are_collected_in_registration_order(self):
        composite = CompositeReactor()
        composite.register(RecordingReactor(frozenset({"Ping"}), "chat"))
        composite.register(RecordingReactor(frozenset({"Ping", "Pong"}), "groups"))

        assert composite.react(Ping()) == ["chat:Ping", "groups:Ping"]
        assert composite.react(Pong()) == ["groups:Pong"]
        assert composite.supported_event_types() == frozenset({"Ping", "Pong"})

    def test_unsubscribed_event_yields_no_actions(self):
        assert CompositeReactor().react(Ping()) == []


class TestCompositeSerializer:
    def test_routes_by_event_type(self):
        composite = CompositeSerializer()
        composite.register(StubSerializer(frozenset({"Ping"})))
        composite.register(StubSerializer(frozenset({"Pong"})))

        assert composite.serialize(Pong()) == {"type": "Pong"}
        assert isinstance(composite.deserialize("Ping", {}), Ping)

    def test_duplicate_event_type_is_rejected(self):
        composite = CompositeSerializer()
        composite.register(StubSerializer(frozenset({"Ping"})))

        with pytest.raises(ValueError, match="already has a registered serializer"):
            composite.register(StubSerializer(frozenset({"Ping", "Pong"})))

        assert composite.supported_event_types() == frozenset({"Ping"})

    def test_unknown_event_type_raises(self):
        with pytest.raises(ValueError, match="No serializer registered"):
            CompositeSerializer().deserialize("Ping", {})
