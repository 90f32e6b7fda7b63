from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from chat_hub.api.deps import registry, signal_router
from chat_hub.config import settings

logger = logging.getLogger(__name__)
router = APIRouter(tags=["websocket"])


@router.websocket(settings.WS_PATH)
async def ws_hub(websocket: WebSocket) -> None:
    """Anonymous realtime channel: every client receives every event."""
    await registry.admit(websocket)
    try:
        while True:
            raw = await websocket.receive_text()
            await signal_router.on_frame(websocket, raw)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("WS connection failed")
    finally:
        registry.remove(websocket)
