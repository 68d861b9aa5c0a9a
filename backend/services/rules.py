"""Pure Ultimate Tic-Tac-Toe rules: line detection, outcomes, move legality.

The same ``check_line`` is applied to a sub-board's cells and to the big
board's outcomes.
"""

from __future__ import annotations

from collections.abc import Sequence

from models import BOARD_SIZE, Cell, Mark, Move, Outcome, RejectReason, TurnState

# Rows, then columns, then diagonals. The first match wins.
LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

Board = Sequence[Cell]
Outcomes = Sequence[Outcome | None]


def check_line(marks: Sequence[str | None]) -> Mark | None:
    """Return the mark owning a full row, column or diagonal, else None.

    Works over any 9-long sequence of marks. ``Outcome.DRAW`` is not a winning
    mark: three drawn sub-boards in a line do not win the game.
    """
    for a, b, c in LINES:
        first = marks[a]
        if first is None or first == Outcome.DRAW:
            continue
        if first == marks[b] and first == marks[c]:
            return Mark(first)
    return None


def is_full(cells: Sequence[object]) -> bool:
    return all(cell is not None for cell in cells)


def sub_board_outcome(cells: Board) -> Outcome | None:
    winner = check_line(cells)
    if winner is not None:
        return Outcome(winner)
    if is_full(cells):
        return Outcome.DRAW
    return None


def game_outcome(outcomes: Outcomes) -> Outcome | None:
    """Big-board outcome: a line of won sub-boards, else a draw once every
    sub-board is decided."""
    winner = check_line(outcomes)
    if winner is not None:
        return Outcome(winner)
    if is_full(outcomes):
        return Outcome.DRAW
    return None


def next_active_board(
    played_cell: int,
    outcomes: Outcomes,
    boards: Sequence[Board] | None = None,
) -> int | None:
    """Sub-board the opponent must play in, or None when any board is allowed.

    ``outcomes`` must already include the result of the move just played.
    """
    if outcomes[played_cell] is not None:
        return None
    if boards is not None and is_full(boards[played_cell]):
        return None
    return played_cell


def validate_move(
    boards: Sequence[Board],
    outcomes: Outcomes,
    turn: TurnState,
    move: Move,
    moving_player: Mark | None,
) -> RejectReason | None:
    """Check ``move`` against the current position. None means the move is legal.

    Violations are reported in a fixed precedence: turn, active board,
    decided sub-board, occupied cell.

    Raises ValueError if either index of ``move`` is outside 0..8; wire
    messages are range-checked before they get here.
    """
    if not (0 <= move.big_index < BOARD_SIZE and 0 <= move.small_index < BOARD_SIZE):
        raise ValueError(f"move out of range: {move!r}")
    if moving_player != turn.current_player:
        return RejectReason.NOT_YOUR_TURN
    if turn.active_board is not None and move.big_index != turn.active_board:
        return RejectReason.WRONG_SUB_BOARD
    if outcomes[move.big_index] is not None:
        return RejectReason.SUB_BOARD_DECIDED
    if boards[move.big_index][move.small_index] is not None:
        return RejectReason.CELL_OCCUPIED
    return None
