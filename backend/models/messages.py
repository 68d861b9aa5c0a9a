"""Wire messages exchanged with game clients.

Every frame is a JSON object tagged by ``type``. Field names are camelCase on
the wire and snake_case in Python.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from .game import BOARD_SIZE, Mark, Outcome

BoardIndex = Annotated[int, Field(ge=0, lt=BOARD_SIZE, strict=True)]


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# --- client -> server ---


class JoinGameMessage(WireModel):
    type: Literal["JOIN_GAME"]


class MoveMessage(WireModel):
    type: Literal["MOVE"]
    big_index: BoardIndex
    small_index: BoardIndex


ClientMessage = Annotated[JoinGameMessage | MoveMessage, Field(discriminator="type")]
client_message_adapter: TypeAdapter[ClientMessage] = TypeAdapter(ClientMessage)


# --- server -> client ---


class LastMove(WireModel):
    big_index: int
    small_index: int


class WaitingMessage(WireModel):
    type: Literal["WAITING"] = "WAITING"
    message: str = "Waiting for an opponent..."


class GameStartMessage(WireModel):
    type: Literal["GAME_START"] = "GAME_START"
    symbol: Mark
    room_id: str


class GameStateMessage(WireModel):
    type: Literal["GAME_STATE"] = "GAME_STATE"
    small_boards: list[list[Mark | None]]
    big_board_winners: list[Outcome | None]
    current_player: Mark
    active_board: int | None
    last_move: LastMove | None
    winner: Outcome | None


class ErrorMessage(WireModel):
    type: Literal["ERROR"] = "ERROR"
    message: str


class OpponentDisconnectMessage(WireModel):
    type: Literal["OPPONENT_DISCONNECT"] = "OPPONENT_DISCONNECT"
    message: str = "Opponent disconnected"


ServerMessage = (
    WaitingMessage
    | GameStartMessage
    | GameStateMessage
    | ErrorMessage
    | OpponentDisconnectMessage
)
