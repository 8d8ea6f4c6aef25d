"""WebSocket channel for live evidence updates."""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from app.exceptions import ServiceError
from app.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def evidence_updates(websocket: WebSocket, token: str = "") -> None:
    """Stream ``evidence_updated`` events to an authenticated client."""
    authority = websocket.app.state.authority
    broadcaster = websocket.app.state.broadcaster

    try:
        identity = authority.verify_token(token)
    except ServiceError as err:
        logger.info("Rejected WebSocket connection: %s", err.detail)
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await broadcaster.connect(websocket)
    logger.info("WebSocket subscribed for user=%s", identity.username)
    try:
        while True:
            # Inbound messages are ignored; the loop only detects disconnects.
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        broadcaster.disconnect(websocket)
