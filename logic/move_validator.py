"""
Move validator for Tic Tac Toe.
Validates that a requested move follows the rules.
"""

from typing import Optional
from dataclasses import dataclass

from .game_state import BOARD_CELLS, GameState, Mark


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates Tic Tac Toe moves.

    Rules:
    1. Game must not be over
    2. Index must be on the board (0-8)
    3. Can only place on empty cells
    4. Must be the player's turn
    """

    def validate_move(
        self,
        game_state: GameState,
        index: int,
        player: Optional[Mark] = None
    ) -> ValidationResult:
        """
        Validate a move.

        Args:
            game_state: Current game state.
            index: Cell to place the mark in (0-8).
            player: Who is moving. If given, it must be their turn.

        Returns:
            ValidationResult with is_valid and error_message.
        """
        if game_state.is_game_over:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        if not 0 <= index < BOARD_CELLS:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid cell {index}. Must be 0-{BOARD_CELLS - 1}."
            )

        occupant = game_state.board[index]
        if occupant is not None:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by {occupant}"
            )

        if player is not None and player != game_state.current_player:
            return ValidationResult(
                is_valid=False,
                error_message=f"It's not {player}'s turn!"
            )

        return ValidationResult(is_valid=True)
