import asyncio
import json

from signage.services.realtime import RealtimeHub


class FakeWebSocket:
    def __init__(self, fail: bool = False) -> None:
        self.accepted = False
        self.fail = fail
        self.sent: list[dict] = []

    async def accept(self) -> None:
        self.accepted = True

    async def send_text(self, text: str) -> None:
        if self.fail and self.accepted and self.sent:
            raise RuntimeError("socket closed")
        self.sent.append(json.loads(text))


class TestRealtimeHub:
    """Event fan-out filtered by display."""

    def test_connect_sends_hello(self):
        hub = RealtimeHub()
        socket = FakeWebSocket()
        asyncio.run(hub.connect(socket, display_id="lobby"))
        assert socket.accepted
        assert socket.sent[0]["type"] == "hello"
        assert socket.sent[0]["display_id"] == "lobby"
        assert hub.client_count == 1

    def test_display_clients_only_get_their_events(self):
        async def scenario():
            hub = RealtimeHub()
            dashboard, lobby, cafeteria = FakeWebSocket(), FakeWebSocket(), FakeWebSocket()
            await hub.connect(dashboard)
            await hub.connect(lobby, display_id="lobby")
            await hub.connect(cafeteria, display_id="cafeteria")
            await hub.schedule_changed("lobby", "s1", "created")
            await hub.publish("config_changed", {"path": "/settings/display-runtime"})
            return hub, dashboard, lobby, cafeteria

        hub, dashboard, lobby, cafeteria = asyncio.run(scenario())
        assert [msg["type"] for msg in dashboard.sent[1:]] == ["schedule_changed", "config_changed"]
        assert [msg["type"] for msg in lobby.sent[1:]] == ["schedule_changed", "config_changed"]
        assert [msg["type"] for msg in cafeteria.sent[1:]] == ["config_changed"]
        assert lobby.sent[1]["payload"] == {"display_id": "lobby", "schedule_id": "s1", "action": "created"}
        assert hub.revision == 2

    def test_stale_clients_are_dropped(self):
        async def scenario():
            hub = RealtimeHub()
            await hub.connect(FakeWebSocket(fail=True))
            await hub.publish("config_changed")
            return hub

        assert asyncio.run(scenario()).client_count == 0
