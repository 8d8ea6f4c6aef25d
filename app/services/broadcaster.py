"""Fan-out of evidence change events to connected WebSocket clients."""

from typing import Any

from fastapi import WebSocket

from app.utils.logging import get_logger

logger = get_logger(__name__)

EVENT_EVIDENCE_UPDATED = "evidence_updated"


class EvidenceBroadcaster:
    """Tracks live WebSocket connections and publishes events to all of them."""

    def __init__(self) -> None:
        self._connections: set[WebSocket] = set()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections.add(websocket)
        logger.info("Client connected (%d open)", len(self._connections))

    def disconnect(self, websocket: WebSocket) -> None:
        self._connections.discard(websocket)
        logger.info("Client disconnected (%d open)", len(self._connections))

    async def publish(self, change_type: str, evidence_id: str, **fields: Any) -> dict[str, Any]:
        """Send one event to every client. Failed sends drop that client."""
        event = {
            "event": EVENT_EVIDENCE_UPDATED,
            "type": change_type,
            "evidence_id": evidence_id,
            **fields,
        }
        for websocket in list(self._connections):
            try:
                await websocket.send_json(event)
            except Exception:
                logger.warning("Dropping client after failed send", exc_info=True)
                self._connections.discard(websocket)
        return event

    async def close(self) -> None:
        for websocket in list(self._connections):
            try:
                await websocket.close()
            except Exception:
                logger.warning("Failed to close WebSocket", exc_info=True)
        self._connections.clear()
