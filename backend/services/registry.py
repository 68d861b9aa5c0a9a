"""Live sessions and rooms, and routing of inbound client messages."""

from __future__ import annotations

import json
import logging
import secrets
from collections.abc import Mapping

from pydantic import ValidationError

from models import (
    Connection,
    ErrorMessage,
    JoinGameMessage,
    Move,
    MoveMessage,
    RoomStatus,
    Session,
    client_message_adapter,
)
from services.matchmaking import MatchmakingQueue
from services.room import GameRoom
from services.transport import send

logger = logging.getLogger(__name__)

_UNKNOWN_TAG_ERRORS = {"union_tag_invalid", "union_tag_not_found"}


class SessionRegistry:
    def __init__(self, queue: MatchmakingQueue) -> None:
        self._queue = queue
        self._sessions: dict[str, Session] = {}
        self._rooms: dict[str, GameRoom] = {}

    @property
    def queue(self) -> MatchmakingQueue:
        return self._queue

    @property
    def sessions(self) -> Mapping[str, Session]:
        return self._sessions

    @property
    def rooms(self) -> Mapping[str, GameRoom]:
        return self._rooms

    def connect(self, connection: Connection) -> Session:
        session = Session(id=secrets.token_urlsafe(8), connection=connection)
        self._sessions[session.id] = session
        logger.info("[registry] session %s connected (%d live)", session.id, len(self._sessions))
        return session

    def room_for(self, session: Session) -> GameRoom | None:
        if session.room_id is None:
            return None
        return self._rooms.get(session.room_id)

    async def handle_message(self, session: Session, raw: str | bytes) -> None:
        message = await self._parse(session, raw)
        if isinstance(message, JoinGameMessage):
            await self._join(session)
        elif isinstance(message, MoveMessage):
            await self._move(session, Move(message.big_index, message.small_index))

    async def disconnect(self, session: Session) -> None:
        self._sessions.pop(session.id, None)
        await self._queue.remove(session)
        room = self.room_for(session)
        if room is not None:
            self._rooms.pop(room.id, None)
            await room.close(session)
        logger.info("[registry] session %s disconnected (%d live)", session.id, len(self._sessions))

    async def _parse(self, session: Session, raw: str | bytes) -> JoinGameMessage | MoveMessage | None:
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
            logger.warning("[registry] malformed JSON from %s: %s", session.id, e)
            return None
        if not isinstance(data, dict):
            logger.warning("[registry] non-object message from %s: %.60r", session.id, data)
            return None
        try:
            return client_message_adapter.validate_python(data)
        except ValidationError as e:
            if any(err["type"] in _UNKNOWN_TAG_ERRORS for err in e.errors()):
                logger.warning("[registry] unknown message type from %s: %r", session.id, data.get("type"))
                return None
            logger.info("[registry] invalid %s from %s: %s", data.get("type"), session.id, e.errors())
            await send(session, ErrorMessage(message="invalid message"))
            return None

    def _register_room(self, room: GameRoom) -> None:
        self._rooms[room.id] = room

    async def _join(self, session: Session) -> None:
        room = self.room_for(session)
        if room is not None:
            if room.status is not RoomStatus.CONCLUDED:
                await send(session, ErrorMessage(message="already in a game"))
                return
            if await room.leave(session):
                self._rooms.pop(room.id, None)
        await self._queue.enqueue(session, on_room=self._register_room)

    async def _move(self, session: Session, move: Move) -> None:
        room = self.room_for(session)
        if room is None:
            logger.debug("[registry] move from %s without a room ignored", session.id)
            return
        await room.apply_move(session, move)
