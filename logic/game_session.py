"""
Game session for Tic Tac Toe.

Ties together the game state, move validation, and the AI opponent.
Front ends (Tkinter UI, console) drive a session:

1. Human picks a cell -> human_move()
2. Computer replies -> computer_move()
3. Repeat until someone wins or it's a tie

After every applied move the session hands the new board to the
banter channel, if one is attached. Banter never changes the game.
"""

import logging
from typing import Optional

from .game_state import GameState, Mark
from .move_validator import MoveValidator, ValidationResult
from .win_checker import update_game_state, Outcome
from .ai_player import AIPlayer

logger = logging.getLogger(__name__)


class GameSession:
    """
    One human vs. computer game, restartable.

    X always moves first. By default the human is X.
    """

    def __init__(
        self,
        ai_player: Optional[AIPlayer] = None,
        human_mark: Mark = Mark.X,
        banter=None
    ):
        """
        Args:
            ai_player: The computer opponent (default: minimax on the other mark).
            human_mark: Which mark the human plays.
            banter: Optional channel with a trigger(board, mark, index, outcome)
                method, called after every move.
        """
        self.human_mark = human_mark
        self.ai = ai_player or AIPlayer(human_mark.opposite(), human_mark)
        if self.ai.mark == human_mark:
            raise ValueError("Human and computer must play different marks")

        self.banter = banter
        self.validator = MoveValidator()
        self.state = GameState()

    @property
    def computer_mark(self) -> Mark:
        return self.ai.mark

    @property
    def is_computer_turn(self) -> bool:
        return (not self.state.is_game_over
                and self.state.current_player == self.computer_mark)

    def human_move(self, index: int) -> ValidationResult:
        """
        Apply the human's move if it is legal.

        Returns:
            ValidationResult; invalid moves leave the game untouched.
        """
        result = self.validator.validate_move(self.state, index, self.human_mark)
        if not result.is_valid:
            logger.debug("Rejected human move %s: %s", index, result.error_message)
            return result

        self._apply(index)
        return result

    def computer_move(self) -> Optional[int]:
        """
        Let the computer pick and play its move.

        Returns:
            The cell played, or None if it isn't the computer's turn.
        """
        if not self.is_computer_turn:
            return None

        index = self.ai.get_best_move(self.state.board)
        if index is None:
            return None

        self._apply(index)
        return index

    def _apply(self, index: int) -> Outcome:
        mark = self.state.current_player
        self.state.make_move(index)
        outcome = update_game_state(self.state)
        logger.info("%s played cell %d", mark, index)

        if self.banter is not None:
            self.banter.trigger(list(self.state.board), mark, index, outcome)

        return outcome

    def restart(self):
        """Start a fresh game and clear the banter transcript."""
        self.state = GameState()
        if self.banter is not None:
            self.banter.clear()

    def status_text(self, thinking: bool = False) -> str:
        """Short status line for the current game."""
        if self.state.winner is not None:
            return f"{self.state.winner} wins!"
        if self.state.is_draw:
            return "It's a tie."
        if thinking:
            return "AI is thinking..."
        return f"Current Turn: {self.state.current_player}"
