from __future__ import annotations

import asyncio
import logging
import secrets
from collections.abc import Callable

from models import Session, WaitingMessage
from services.room import GameRoom
from services.transport import send

logger = logging.getLogger(__name__)


def _generate_room_id() -> str:
    return f"room_{secrets.token_hex(4)}"


class MatchmakingQueue:
    """
    Holds at most one waiting session and pairs it with the next joiner.

    enqueue/remove are serialized by a single lock so that two simultaneous
    joiners are paired with each other exactly once.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._waiting: Session | None = None

    @property
    def waiting(self) -> Session | None:
        return self._waiting

    async def enqueue(
        self,
        session: Session,
        *,
        on_room: Callable[[GameRoom], None] | None = None,
    ) -> GameRoom | None:
        """
        Queue ``session``. Returns the new room when it completes a pair.

        ``on_room`` is called with a freshly paired room before either player
        hears about it, so the room is routable by the time moves can arrive.
        """
        async with self._lock:
            if session.room_id is not None:
                raise ValueError(f"session {session.id} is already in room {session.room_id}")
            waiting = self._waiting
            if waiting is None or waiting is session:
                self._waiting = session
                logger.info("[matchmaking] session %s waiting", session.id)
                await send(session, WaitingMessage())
                return None

            self._waiting = None
            room = GameRoom(_generate_room_id(), player_x=waiting, player_o=session)
            logger.info("[matchmaking] paired %s (X) with %s (O) in %s", waiting.id, session.id, room.id)
            if on_room is not None:
                on_room(room)
        await room.start()
        return room

    async def remove(self, session: Session) -> bool:
        async with self._lock:
            if self._waiting is not session:
                return False
            self._waiting = None
        logger.info("[matchmaking] session %s left the queue", session.id)
        return True
