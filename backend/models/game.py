from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

BOARD_SIZE = 9


class Mark(StrEnum):
    X = "X"
    O = "O"

    @property
    def opponent(self) -> Mark:
        return Mark.O if self is Mark.X else Mark.X


class Outcome(StrEnum):
    """Resolved state of a sub-board or of the whole game. Undecided is None."""

    X = "X"
    O = "O"
    DRAW = "DRAW"


class RoomStatus(StrEnum):
    ACTIVE = "active"
    CONCLUDED = "concluded"


class RejectReason(StrEnum):
    NOT_YOUR_TURN = "not your turn"
    WRONG_SUB_BOARD = "wrong sub-board"
    SUB_BOARD_DECIDED = "sub-board already decided"
    CELL_OCCUPIED = "cell occupied"


# A cell is empty (None) or holds a mark.
Cell = Mark | None


@dataclass(frozen=True)
class Move:
    big_index: int      # sub-board, 0..8 row-major
    small_index: int    # cell inside the sub-board, 0..8 row-major


@dataclass
class TurnState:
    current_player: Mark = Mark.X
    active_board: int | None = None   # None = any undecided sub-board
