"""Outbound delivery to a session's connection. Fire-and-forget: a failed send
is logged and dropped; the connection's close event tears the session down."""

from __future__ import annotations

import logging

from models import ServerMessage, Session

logger = logging.getLogger(__name__)


async def send(session: Session, message: ServerMessage) -> bool:
    payload = message.to_wire()
    try:
        await session.connection.send_json(payload)
    except Exception as e:
        logger.warning(
            "[transport] send failed session=%s type=%s: %s",
            session.id,
            payload.get("type"),
            e,
        )
        return False
    return True
