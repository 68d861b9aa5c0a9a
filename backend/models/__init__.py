from .game import BOARD_SIZE, Cell, Mark, Move, Outcome, RejectReason, RoomStatus, TurnState
from .messages import (
    ClientMessage,
    ErrorMessage,
    GameStartMessage,
    GameStateMessage,
    JoinGameMessage,
    LastMove,
    MoveMessage,
    OpponentDisconnectMessage,
    ServerMessage,
    WaitingMessage,
    client_message_adapter,
)
from .session import Connection, Session

__all__ = [
    "BOARD_SIZE",
    "Cell",
    "Mark",
    "Move",
    "Outcome",
    "RejectReason",
    "RoomStatus",
    "TurnState",
    "ClientMessage",
    "JoinGameMessage",
    "MoveMessage",
    "client_message_adapter",
    "ServerMessage",
    "WaitingMessage",
    "GameStartMessage",
    "GameStateMessage",
    "LastMove",
    "ErrorMessage",
    "OpponentDisconnectMessage",
    "Connection",
    "Session",
]
