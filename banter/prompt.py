"""
Prompt building for the banter chatbot.

The board is sent as three compact rows, e.g.

    R1: X|O|.
    R2: .|X|.
    R3: O|.|.
"""

from typing import Optional, Sequence, Tuple

from logic.game_state import Mark, index_to_row_col
from logic.win_checker import Outcome


SYSTEM_PROMPT = (
    "You are a witty, PG-rated trash-talker for a Tic Tac Toe game. "
    "Be playful and positive. One or two very short lines, family-friendly, "
    "no profanity, no harassment, and avoid personal insults."
)

FALLBACK_MESSAGE = "I got nothing... but I'm still watching your moves!"


def format_board(board: Sequence[Optional[Mark]]) -> str:
    def cell(value):
        return "." if value is None else str(value)

    rows = []
    for row in range(3):
        cells = board[row * 3:row * 3 + 3]
        rows.append(f"R{row + 1}: " + "|".join(cell(c) for c in cells))
    return "\n".join(rows)


def display_row_col(index: int) -> Tuple[int, int]:
    """1-based (row, col) of a cell index, as shown to players."""
    row, col = index_to_row_col(index)
    return row + 1, col + 1


def describe_outcome(outcome: Outcome) -> str:
    if outcome.winner is not None:
        return f"{outcome.winner} just won"
    if outcome.tied:
        return "The board is full (tie)"
    return "Game continues"


def build_user_message(
    board: Sequence[Optional[Mark]],
    player: Mark,
    index: int,
    outcome: Outcome,
) -> str:
    """Describe the latest move and ask for one line of banter."""
    row, col = display_row_col(index)
    return "\n".join([
        "Tic Tac Toe current board:",
        format_board(board),
        "",
        f"Latest move: Player {player} to row {row}, col {col} (index {index}).",
        f"Outcome: {describe_outcome(outcome)}.",
        "",
        "Please respond with a single playful, witty, family-friendly trash-talk line (<= 20 words).",
        "No profanity, no personal insults - keep it about the move or the board.",
    ])


def build_messages(board, player, index, outcome) -> list:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_user_message(board, player, index, outcome)},
    ]


def extract_message(data) -> str:
    """Pull the assistant's text out of a chat-completions response."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    choice = choices[0]
    if not isinstance(choice, dict):
        return ""
    message = choice.get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    if not isinstance(content, str):
        return ""
    return content.strip()
