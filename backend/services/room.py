from __future__ import annotations

import asyncio
import logging

from models import (
    BOARD_SIZE,
    Cell,
    ErrorMessage,
    GameStartMessage,
    GameStateMessage,
    LastMove,
    Mark,
    Move,
    OpponentDisconnectMessage,
    Outcome,
    RoomStatus,
    Session,
    TurnState,
)
from services import rules
from services.transport import send

logger = logging.getLogger(__name__)


class GameError(Exception):
    pass


class GameRoom:
    """
    One match between two sessions.

    All mutations (moves, teardown, players leaving) run under the room's lock,
    so concurrent commands apply one at a time in the order they arrive and
    each is validated against the state left by the previous one.
    """

    def __init__(self, room_id: str, player_x: Session, player_o: Session) -> None:
        if player_x is player_o:
            raise GameError("a room needs two distinct sessions")
        for session in (player_x, player_o):
            if session.room_id is not None:
                raise GameError(f"session {session.id} is already in room {session.room_id}")

        self.id = room_id
        self.boards: list[list[Cell]] = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self.outcomes: list[Outcome | None] = [None] * BOARD_SIZE
        self.turn = TurnState()
        self.last_move: Move | None = None
        self.winner: Outcome | None = None
        self.status = RoomStatus.ACTIVE
        self.closed = False
        self._players: dict[Mark, Session] = {Mark.X: player_x, Mark.O: player_o}
        self._lock = asyncio.Lock()

        for mark, session in self._players.items():
            session.symbol = mark
            session.room_id = room_id

    @property
    def players(self) -> tuple[Session, Session]:
        return self._players[Mark.X], self._players[Mark.O]

    def opponent_of(self, session: Session) -> Session | None:
        if session is self._players[Mark.X]:
            return self._players[Mark.O]
        if session is self._players[Mark.O]:
            return self._players[Mark.X]
        return None

    def _attached(self) -> list[Session]:
        return [s for s in self.players if s.room_id == self.id]

    def snapshot(self) -> GameStateMessage:
        last = self.last_move
        return GameStateMessage(
            small_boards=[list(board) for board in self.boards],
            big_board_winners=list(self.outcomes),
            current_player=self.turn.current_player,
            active_board=self.turn.active_board,
            last_move=LastMove(big_index=last.big_index, small_index=last.small_index) if last else None,
            winner=self.winner,
        )

    async def _broadcast(self) -> None:
        state = self.snapshot()
        for session in self._attached():
            await send(session, state)

    async def start(self) -> None:
        """Tell both players their mark, then send the opening position."""
        async with self._lock:
            for mark, session in self._players.items():
                await send(session, GameStartMessage(symbol=mark, room_id=self.id))
            await self._broadcast()
        logger.info(
            "[room] %s started X=%s O=%s",
            self.id,
            self._players[Mark.X].id,
            self._players[Mark.O].id,
        )

    async def apply_move(self, session: Session, move: Move) -> bool:
        """
        Play ``move`` as ``session``'s mark. Returns True when the move was accepted.

        Moves against a closed or concluded room are stale and dropped without
        a reply. Illegal moves get an ERROR sent to the mover only.
        """
        async with self._lock:
            if self.closed or session.room_id != self.id:
                logger.debug("[room] %s dropped move from detached session %s", self.id, session.id)
                return False
            if self.status is RoomStatus.CONCLUDED:
                logger.debug("[room] %s dropped move after game over from %s", self.id, session.id)
                return False

            reason = rules.validate_move(self.boards, self.outcomes, self.turn, move, session.symbol)
            if reason is not None:
                logger.info(
                    "[room] %s rejected move %s/%s from %s: %s",
                    self.id,
                    move.big_index,
                    move.small_index,
                    session.id,
                    reason,
                )
                await send(session, ErrorMessage(message=reason.value))
                return False

            mark = self.turn.current_player
            board = self.boards[move.big_index]
            board[move.small_index] = mark
            self.last_move = move
            self.outcomes[move.big_index] = rules.sub_board_outcome(board)
            logger.debug(
                "[room] %s %s played %s/%s", self.id, mark, move.big_index, move.small_index
            )

            result = rules.game_outcome(self.outcomes)
            if result is not None:
                self.winner = result
                self.status = RoomStatus.CONCLUDED
                logger.info("[room] %s concluded winner=%s", self.id, result)
                await self._broadcast()
                return True

            # Outcomes above already include this move.
            self.turn.active_board = rules.next_active_board(
                move.small_index, self.outcomes, self.boards
            )
            self.turn.current_player = mark.opponent
            await self._broadcast()
            return True

    async def close(self, departing: Session) -> Session | None:
        """
        Tear the room down because ``departing`` went away.

        Detaches both players and notifies the remaining one, if it is still
        attached. Returns the notified session.
        """
        async with self._lock:
            if self.closed:
                return None
            self.closed = True
            remaining = self.opponent_of(departing)
            notify = remaining is not None and remaining.room_id == self.id
            for session in self.players:
                if session.room_id == self.id:
                    session.room_id = None
                    session.symbol = None
            if notify:
                await send(remaining, OpponentDisconnectMessage())
        logger.info("[room] %s closed, %s disconnected", self.id, departing.id)
        return remaining if notify else None

    async def leave(self, session: Session) -> bool:
        """
        Detach ``session`` from a concluded room so it can queue again.

        Returns True once no player is left attached and the room can be dropped.
        Leaving an active room is not allowed.
        """
        async with self._lock:
            if self.status is not RoomStatus.CONCLUDED and not self.closed:
                raise GameError(f"room {self.id} is still in play")
            if session.room_id == self.id:
                session.room_id = None
                session.symbol = None
            empty = not self._attached()
            if empty:
                self.closed = True
        logger.info("[room] %s left by %s (empty=%s)", self.id, session.id, empty)
        return empty
