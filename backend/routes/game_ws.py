from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket

from services.registry import SessionRegistry

logger = logging.getLogger(__name__)


async def ws_game(websocket: WebSocket) -> None:
    """
    One player's connection. Inbound frames are JSON:
      {"type": "JOIN_GAME"}
      {"type": "MOVE", "bigIndex": 0-8, "smallIndex": 0-8}
    """
    registry: SessionRegistry = websocket.app.state.registry
    try:
        await websocket.accept()
    except Exception as e:
        logger.warning("[game_ws] accept() failed: %s", e)
        return
    session = registry.connect(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes") or b""
            await registry.handle_message(session, raw)
    finally:
        await registry.disconnect(session)


def build_router(path: str) -> APIRouter:
    router = APIRouter(tags=["game"])
    router.add_api_websocket_route(path, ws_game)
    return router
