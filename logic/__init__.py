"""
Logic module for Tic Tac Toe.
Handles game state, rules, and the AI opponent.
"""

__version__ = "1.0.0"

from .game_state import GameState, Mark, Move, Board, empty_board
from .move_validator import MoveValidator, ValidationResult
from .win_checker import (
    WIN_LINES,
    Outcome,
    evaluate,
    available_moves,
    is_board_full,
    update_game_state,
)
from .ai_player import AIPlayer, best_move
from .game_session import GameSession
