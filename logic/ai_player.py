"""
AI player for Tic Tac Toe.
Uses the Minimax algorithm to choose the best move.
"""

import logging
from functools import lru_cache
from typing import Optional, Sequence, Tuple

from .game_state import Mark
from .win_checker import evaluate, available_moves

logger = logging.getLogger(__name__)

TIE_SCORE = 0

# (chosen index, score); index is None at terminal positions
SearchResult = Tuple[Optional[int], int]


@lru_cache(maxsize=None)
def _minimax(
    board: Tuple[Optional[Mark], ...],
    current: Mark,
    ai_mark: Mark,
    opponent_mark: Mark,
) -> SearchResult:
    """
    Plain minimax, no depth weighting.

    Scores are +1 for an ai_mark win, -1 for an opponent_mark win, 0 for
    a tie. Candidates are tried in ascending index order and only a
    strictly better score replaces the running best, so the lowest index
    wins among equal scores.
    """
    outcome = evaluate(board)
    if outcome.winner is not None:
        return None, 1 if outcome.winner == ai_mark else -1

    moves = available_moves(board)
    if not moves:
        return None, TIE_SCORE

    maximizing = current == ai_mark
    next_mark = opponent_mark if maximizing else ai_mark

    best_index: Optional[int] = None
    best_score = float('-inf') if maximizing else float('inf')

    for index in moves:
        child = board[:index] + (current,) + board[index + 1:]
        _, score = _minimax(child, next_mark, ai_mark, opponent_mark)

        if maximizing:
            if score > best_score:
                best_index, best_score = index, score
        else:
            if score < best_score:
                best_index, best_score = index, score

    return best_index, int(best_score)


def best_move(
    board: Sequence[Optional[Mark]],
    ai_mark: Mark,
    opponent_mark: Mark,
) -> int:
    """
    Get the optimal move for ai_mark, which is the side to move.

    Args:
        board: 9 cells; must have an empty cell and no winner.
        ai_mark: The mark the search plays for.
        opponent_mark: The other mark.

    Returns:
        The chosen cell index (0-8).

    Raises:
        ValueError: If the marks are equal or the game is already decided.
    """
    if ai_mark == opponent_mark:
        raise ValueError("ai_mark and opponent_mark must differ")

    board = tuple(board)
    if evaluate(board).is_over:
        raise ValueError("Game is already finished")

    index, _ = _minimax(board, ai_mark, ai_mark, opponent_mark)
    return index


def clear_cache():
    """Clear the minimax cache."""
    _minimax.cache_clear()


class AIPlayer:
    """
    An AI that plays Tic Tac Toe using the Minimax algorithm.

    The AI will always play optimally - it will win if possible,
    block the opponent if needed, and never lose (at worst, draw).
    """

    def __init__(self, mark: Mark = Mark.O, opponent: Optional[Mark] = None):
        """
        Initialize the AI player.

        Args:
            mark: Which mark the AI plays (default: O)
            opponent: The human's mark (default: the other mark)
        """
        self.mark = mark
        self.opponent = opponent if opponent is not None else mark.opposite()

    def get_best_move(self, board: Sequence[Optional[Mark]]) -> Optional[int]:
        """
        Get the best move for the current position.

        Returns:
            Cell index of the best move, or None if the game is decided.
        """
        if evaluate(board).is_over:
            return None

        move = best_move(board, self.mark, self.opponent)
        logger.debug("AI (%s) chose cell %d", self.mark, move)
        return move
