"""
Game state management for Tic Tac Toe.
Tracks the board, current player, and move history.
"""

from enum import Enum
from typing import Optional, List, Tuple
from dataclasses import dataclass, field


BOARD_CELLS = 9


class Mark(Enum):
    """The two marks a player can put on the board."""
    X = "X"
    O = "O"

    def opposite(self) -> "Mark":
        """Get the other player's mark."""
        return Mark.O if self == Mark.X else Mark.X

    def __str__(self) -> str:
        return self.value


# A board is 9 cells, row-major; None means empty
Board = List[Optional[Mark]]


def empty_board() -> Board:
    """Create a fresh, empty board."""
    return [None] * BOARD_CELLS


def index_to_row_col(index: int) -> Tuple[int, int]:
    """Convert a cell index (0-8) to a 0-based (row, col)."""
    return index // 3, index % 3


@dataclass
class Move:
    """
    A move in the game.
    """
    player: Mark            # Who made the move
    index: int              # Cell index (0-8)
    move_number: int        # Which move of the game this is (0-8)


@dataclass
class GameState:
    """
    The complete state of the Tic Tac Toe game.

    Tracks:
    - The 9-cell board
    - Current player (X always moves first)
    - Move history
    - Game status (ongoing, won, draw)
    """

    board: Board = field(default_factory=empty_board)

    current_player: Mark = Mark.X

    moves: List[Move] = field(default_factory=list)

    # Game result, filled in by win_checker.update_game_state()
    winner: Optional[Mark] = None
    winning_line: Optional[Tuple[int, int, int]] = None
    is_draw: bool = False
    is_game_over: bool = False

    def make_move(self, index: int) -> bool:
        """
        Place the current player's mark and pass the turn.

        Args:
            index: Cell index (0-8).

        Returns:
            True if the move was applied, False otherwise.
        """
        if self.is_game_over:
            return False

        if self.board[index] is not None:
            return False

        self.board[index] = self.current_player
        self.moves.append(Move(
            player=self.current_player,
            index=index,
            move_number=len(self.moves),
        ))

        # Winner detection is done by win_checker; just switch turns here
        self.current_player = self.current_player.opposite()

        return True

    def get_empty_cells(self) -> List[int]:
        """Get the indices of all empty cells, in ascending order."""
        return [i for i, cell in enumerate(self.board) if cell is None]

    @property
    def last_move(self) -> Optional[Move]:
        return self.moves[-1] if self.moves else None

    def render(self) -> str:
        """Render the board as text, with 1-based row and column labels."""
        lines = ["    1   2   3"]
        for row in range(3):
            cells = [self.board[row * 3 + col] for col in range(3)]
            lines.append(f"{row + 1}   " + " | ".join(
                str(cell) if cell is not None else " " for cell in cells
            ))
            if row < 2:
                lines.append("   ---+---+---")
        return "\n".join(lines)

    def print_board(self):
        """Print the board to console."""
        print()
        print(self.render())

        if self.is_game_over:
            if self.winner:
                print(f"\n{self.winner} WINS!")
            else:
                print("\nIt's a DRAW!")
        else:
            print(f"\nCurrent turn: {self.current_player}")
