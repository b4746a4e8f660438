"""
Tic Tac Toe UI
A graphical interface for playing Tic Tac Toe against the computer, using Tkinter.

Shows:
- The 3x3 board (click a cell to play)
- Game status (current turn, AI thinking, win or tie)
- Reset button
- Chatbot banter panel (needs OPENAI_API_KEY)
"""

import logging
import tkinter as tk
from tkinter import ttk
from typing import Optional

from logic.game_state import Mark
from logic.ai_player import AIPlayer
from logic.game_session import GameSession
from banter import BanterChannel, TrashTalkClient, BanterConfig

logger = logging.getLogger(__name__)

# Pause before the computer moves, so the human sees it "think"
AI_DELAY_MS = 400

BG = '#f8fafc'
CELL_BG = '#ffffff'
WIN_BG = '#bbf7d0'
MARK_COLORS = {Mark.X: '#2563eb', Mark.O: '#dc2626'}


class TicTacToeUI:
    """
    Main UI class for Tic Tac Toe.
    """

    def __init__(
        self,
        human_mark: Mark = Mark.X,
        banter_enabled: bool = True,
        config: Optional[BanterConfig] = None
    ):
        """Initialize the UI."""
        self.is_ai_thinking = False
        self._ai_job: Optional[str] = None
        self._closing = False

        self._create_ui()

        client = TrashTalkClient(config)
        self.banter = BanterChannel(client, on_update=self._on_banter_update)
        self.banter_enabled = banter_enabled and self.banter.enabled

        self.session = GameSession(
            ai_player=AIPlayer(human_mark.opposite(), human_mark),
            human_mark=human_mark,
            banter=self.banter if self.banter_enabled else None,
        )

        self._refresh_board()
        self._refresh_chat()
        self._schedule_computer_move()

    def _create_ui(self):
        """Create the Tkinter UI."""
        self.root = tk.Tk()
        self.root.title("Tic Tac Toe")
        self.root.configure(bg=BG)
        self.root.minsize(360, 560)

        style = ttk.Style()
        style.theme_use('clam')
        style.configure('TFrame', background=BG)
        style.configure('TLabel', background=BG, foreground='#0f172a', font=('Segoe UI', 11))
        style.configure('Title.TLabel', font=('Segoe UI', 20, 'bold'))
        style.configure('Subtitle.TLabel', foreground='#64748b')
        style.configure('Status.TLabel', font=('Segoe UI', 14, 'bold'))
        style.configure('Hint.TLabel', foreground='#94a3b8', font=('Segoe UI', 9))
        style.configure('Error.TLabel', foreground='#dc2626')

        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=16, pady=16)

        ttk.Label(main_frame, text="Tic Tac Toe", style='Title.TLabel').pack()
        ttk.Label(main_frame, text="Minimal, responsive, and smart.", style='Subtitle.TLabel').pack()

        self.status_label = ttk.Label(main_frame, text="", style='Status.TLabel')
        self.status_label.pack(pady=10)

        # Board grid
        board_frame = ttk.Frame(main_frame)
        board_frame.pack(pady=5)

        self.board_cells = []
        for index in range(9):
            row, col = divmod(index, 3)
            cell = tk.Button(
                board_frame,
                text="",
                font=('Segoe UI', 24, 'bold'),
                width=3,
                height=1,
                bg=CELL_BG,
                relief='ridge',
                borderwidth=2,
                command=lambda i=index: self._on_cell_click(i)
            )
            cell.grid(row=row, column=col, padx=2, pady=2)
            self.board_cells.append(cell)

        tk.Button(
            main_frame,
            text="Reset",
            font=('Segoe UI', 11, 'bold'),
            bg='#6366f1',
            fg='white',
            width=12,
            command=self._reset_game
        ).pack(pady=10)

        # Chat panel
        ttk.Separator(main_frame, orient='horizontal').pack(fill=tk.X, pady=10)
        ttk.Label(main_frame, text="Chatbot Banter", style='Status.TLabel').pack()

        self.chat_hint = ttk.Label(main_frame, text="", style='Hint.TLabel')
        self.chat_hint.pack()
        self.chat_error = ttk.Label(main_frame, text="", style='Error.TLabel', wraplength=320)
        self.chat_error.pack()
        self.chat_loading = ttk.Label(main_frame, text="")
        self.chat_loading.pack()

        self.chat_list = tk.Listbox(main_frame, height=8, activestyle='none',
                                    font=('Segoe UI', 10), relief='flat')
        self.chat_list.pack(fill=tk.BOTH, expand=True, pady=5)

        self.root.protocol("WM_DELETE_WINDOW", self._quit)

    def _on_cell_click(self, index: int):
        """Handle a click on a board cell."""
        if self.is_ai_thinking:
            return

        result = self.session.human_move(index)
        if not result.is_valid:
            logger.debug("Ignored click on %d: %s", index, result.error_message)
            return

        self._refresh_board()
        self._schedule_computer_move()

    def _schedule_computer_move(self):
        """Give the computer its turn after a short pause."""
        if not self.session.is_computer_turn:
            return

        self.is_ai_thinking = True
        self._refresh_board()
        self._ai_job = self.root.after(AI_DELAY_MS, self._computer_move)

    def _computer_move(self):
        """Play the computer's move (runs on the UI thread)."""
        self._ai_job = None
        self.session.computer_move()
        self.is_ai_thinking = False
        self._refresh_board()

    def _refresh_board(self):
        """Update the board grid and status line."""
        state = self.session.state
        winning_line = state.winning_line or ()
        locked = state.is_game_over or self.is_ai_thinking

        for index, cell in enumerate(self.board_cells):
            mark = state.board[index]
            cell.configure(
                text=str(mark) if mark is not None else "",
                fg=MARK_COLORS.get(mark, 'black'),
                bg=WIN_BG if index in winning_line else CELL_BG,
                state='disabled' if locked or mark is not None else 'normal',
                disabledforeground=MARK_COLORS.get(mark, 'black'),
            )

        self.status_label.configure(text=self.session.status_text(self.is_ai_thinking))

    def _on_banter_update(self, channel: BanterChannel):
        # May be called from a worker thread; hop back to the UI thread
        if self._closing:
            return
        self.root.after(0, self._refresh_chat)

    def _refresh_chat(self):
        """Update the chat panel from the banter channel."""
        if not self.banter_enabled:
            self.chat_hint.configure(
                text=f"Disabled - set {BanterConfig.API_KEY_ENV} to enable"
            )
        else:
            self.chat_hint.configure(text="")

        self.chat_error.configure(text=self.banter.error or "")
        self.chat_loading.configure(
            text="Crafting a comeback..." if self.banter.loading else ""
        )

        self.chat_list.delete(0, tk.END)
        if not self.banter.messages and not self.banter.loading:
            self.chat_list.insert(tk.END, "Make a move to hear some friendly banter!")
        for message in self.banter.messages:
            self.chat_list.insert(tk.END, message.content)

    def _reset_game(self):
        """Reset the game."""
        print("Resetting game...")
        if self._ai_job is not None:
            self.root.after_cancel(self._ai_job)
            self._ai_job = None
        self.is_ai_thinking = False

        self.session.restart()

        self._refresh_board()
        self._schedule_computer_move()

    def _quit(self):
        """Quit the application."""
        print("Quitting...")
        self._closing = True
        self.root.quit()
        self.root.destroy()

    def run(self):
        """Run the UI main loop."""
        self.root.mainloop()
