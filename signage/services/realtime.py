import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class RealtimeHub:
    """
    Fan-out of change notifications to connected dashboards and displays.

    A client connected with a ``display_id`` only receives events that are
    global or carry the same ``display_id`` in their payload.
    """

    def __init__(self) -> None:
        self._clients: dict[WebSocket, str | None] = {}
        self._lock = asyncio.Lock()
        self._revision = 0

    async def connect(self, websocket: WebSocket, display_id: str | None = None) -> None:
        await websocket.accept()
        async with self._lock:
            self._clients[websocket] = display_id
        await websocket.send_text(
            json.dumps(
                {
                    "type": "hello",
                    "revision": self._revision,
                    "display_id": display_id,
                    "ts": datetime.now(timezone.utc).isoformat(),
                }
            )
        )

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._lock:
            self._clients.pop(websocket, None)

    async def publish(self, event_type: str, payload: dict[str, Any] | None = None) -> int:
        self._revision += 1
        body = payload or {}
        target_display = body.get("display_id")
        message = json.dumps(
            {
                "type": event_type,
                "revision": self._revision,
                "payload": body,
                "ts": datetime.now(timezone.utc).isoformat(),
            }
        )
        async with self._lock:
            clients = [
                client
                for client, display_id in self._clients.items()
                if display_id is None or target_display is None or display_id == target_display
            ]

        stale: list[WebSocket] = []
        for client in clients:
            try:
                await client.send_text(message)
            except Exception:
                stale.append(client)

        if stale:
            logger.debug("Dropping %d stale realtime clients", len(stale))
            async with self._lock:
                for client in stale:
                    self._clients.pop(client, None)
        return self._revision

    async def schedule_changed(self, display_id: str, schedule_id: str, action: str) -> int:
        return await self.publish(
            "schedule_changed",
            {"display_id": display_id, "schedule_id": schedule_id, "action": action},
        )

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def client_count(self) -> int:
        return len(self._clients)


hub = RealtimeHub()
