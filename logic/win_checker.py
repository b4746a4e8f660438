"""
Win checker for Tic Tac Toe.
Checks if a player has won or if the board is full (tie).
"""

from dataclasses import dataclass
from typing import Optional, List, Sequence, Tuple

from .game_state import BOARD_CELLS, GameState, Mark


WinLine = Tuple[int, int, int]

# All possible winning lines, in the order they are checked.
# The first complete line wins.
WIN_LINES: Tuple[WinLine, ...] = (
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
)


@dataclass(frozen=True)
class Outcome:
    """Result of evaluating a board."""
    winner: Optional[Mark] = None
    line: Optional[WinLine] = None
    tied: bool = False

    @property
    def is_over(self) -> bool:
        return self.winner is not None or self.tied


def _check_board(board: Sequence[Optional[Mark]]):
    if len(board) != BOARD_CELLS:
        raise ValueError(
            f"Board must have exactly {BOARD_CELLS} cells, got {len(board)}"
        )


def evaluate(board: Sequence[Optional[Mark]]) -> Outcome:
    """
    Check the board for a winner or a tie.

    Args:
        board: 9 cells, each None, Mark.X or Mark.O.

    Returns:
        Outcome with the winner and winning line, or tied=True if the
        board is full with no winner.
    """
    _check_board(board)

    for line in WIN_LINES:
        a, b, c = line
        mark = board[a]
        if mark is not None and mark == board[b] == board[c]:
            return Outcome(winner=mark, line=line)

    return Outcome(tied=is_board_full(board))


def available_moves(board: Sequence[Optional[Mark]]) -> List[int]:
    """Indices of all empty cells, in ascending order."""
    _check_board(board)
    return [i for i, cell in enumerate(board) if cell is None]


def is_board_full(board: Sequence[Optional[Mark]]) -> bool:
    """True if every cell is taken."""
    return all(cell is not None for cell in board)


def update_game_state(game_state: GameState) -> Outcome:
    """
    Update the game state with winner/draw information.

    Args:
        game_state: The game state to update.

    Returns:
        The outcome of the current board.
    """
    outcome = evaluate(game_state.board)

    if outcome.winner is not None:
        game_state.winner = outcome.winner
        game_state.winning_line = outcome.line
        game_state.is_game_over = True
    elif outcome.tied:
        game_state.is_draw = True
        game_state.is_game_over = True

    return outcome
