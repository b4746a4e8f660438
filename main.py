"""
Main entry point for Tic Tac Toe.

This script ties together:
- Logic (game state, move validation, AI)
- Banter (trash-talk chatbot)
- The Tkinter UI, or a console game with --no-ui

Run this script to play Tic Tac Toe against the computer!
"""

import logging
from typing import Optional

from logic.game_state import Mark
from logic.ai_player import AIPlayer
from logic.game_session import GameSession
from banter import BanterChannel, TrashTalkClient


class TicTacToeConsole:
    """
    Console front end for Tic Tac Toe.

    Game flow:
    1. Human types a cell number (1-9, left to right, top to bottom)
    2. Computer calculates its reply
    3. Repeat until someone wins or it's a draw
    """

    def __init__(self, human_mark: Mark = Mark.X, banter_enabled: bool = True):
        """
        Initialize the console game.

        Args:
            human_mark: Which mark the human plays. X moves first.
            banter_enabled: If False, never contact the chatbot.
        """
        self.human_mark = human_mark
        self.banter = BanterChannel(TrashTalkClient(), on_update=self._print_banter)
        use_banter = banter_enabled and self.banter.enabled

        self.session = GameSession(
            ai_player=AIPlayer(human_mark.opposite(), human_mark),
            human_mark=human_mark,
            banter=self.banter if use_banter else None,
        )
        self.is_running = False

        print("\n" + "="*60)
        print("   Tic Tac Toe")
        print(f"   Human plays: {human_mark}")
        print(f"   Computer plays: {self.session.computer_mark}")
        print(f"   Banter: {'on' if use_banter else 'off'}")
        print("="*60 + "\n")

    def start(self):
        """Start the game."""
        print("Enter a cell 1-9, 'r' to restart, 'q' to quit\n")
        self.is_running = True
        self._game_loop()

    def _game_loop(self):
        """Main game loop."""
        while self.is_running:
            state = self.session.state

            if state.is_game_over:
                self._show_game_result()
                if not self._ask_play_again():
                    break
                continue

            if self.session.is_computer_turn:
                self._computer_move()
                continue

            state.print_board()
            command = input("\nYour move: ").strip().lower()
            self._handle_command(command)

    def _handle_command(self, command: str):
        if command == 'q':
            print("\nGame quit by user.")
            self.is_running = False
        elif command == 'r':
            self._reset_game()
        else:
            self._process_human_move(command)

    def _process_human_move(self, command: str):
        """
        Process the human's typed move.

        Args:
            command: Cell number as typed, 1-9.
        """
        try:
            index = int(command) - 1
        except ValueError:
            print(f"'{command}' is not a cell. Type a number from 1 to 9.")
            return

        result = self.session.human_move(index)
        if not result.is_valid:
            print(f"WARNING: {result.error_message}")
            return

        print(f"\n>>> Human placed {self.human_mark} at cell {index + 1}")

    def _computer_move(self):
        """Play the computer's move."""
        print("\n>>> Computer is thinking...")

        index = self.session.computer_move()
        if index is None:
            print("ERROR: Computer could not find a move!")
            self.is_running = False
            return

        print(f">>> Computer placed {self.session.computer_mark} at cell {index + 1}")

    def _print_banter(self, channel: BanterChannel):
        if channel.loading:
            return
        if channel.error:
            print(f"  [banter] {channel.error}")
        elif channel.messages:
            print(f"  [banter] {channel.messages[0].content}")

    def _show_game_result(self):
        """Show the final game result."""
        print("\n" + "="*60)
        print("   GAME OVER!")
        print("="*60)

        self.session.state.print_board()

        winner = self.session.state.winner
        if winner is None:
            print("\nIt's a draw! Good game!")
        elif winner == self.human_mark:
            print("\nCongratulations! You won!")
        else:
            print("\nComputer wins! Better luck next time!")

        print("\n" + "="*60)

    def _ask_play_again(self) -> bool:
        answer = input("\nPlay again? [y/N] ").strip().lower()
        if answer == 'y':
            self._reset_game()
            return True
        return False

    def _reset_game(self):
        """Reset the game for a new round."""
        print("\nResetting game...")
        self.session.restart()


def main(argv: Optional[list] = None):
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Tic Tac Toe vs. the computer")
    parser.add_argument(
        "--no-ui",
        action="store_true",
        help="Run without UI (console mode)"
    )
    parser.add_argument(
        "--computer-first",
        action="store_true",
        help="Let the computer play first (as X)"
    )
    parser.add_argument(
        "--no-banter",
        action="store_true",
        help="Never contact the trash-talk chatbot"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(name)s - %(levelname)s - %(message)s'
    )

    human_mark = Mark.O if args.computer_first else Mark.X
    banter_enabled = not args.no_banter

    # Launch UI by default
    if not args.no_ui:
        from ui import TicTacToeUI
        print("\n" + "="*60)
        print("   Tic Tac Toe UI")
        print("="*60 + "\n")
        ui = TicTacToeUI(human_mark=human_mark, banter_enabled=banter_enabled)
        ui.run()
        return

    game = TicTacToeConsole(human_mark=human_mark, banter_enabled=banter_enabled)

    try:
        game.start()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")
    finally:
        print("Goodbye!")


if __name__ == "__main__":
    main()
