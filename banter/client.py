"""
Trash-talk client for Tic Tac Toe.

Sends the board after a move to an OpenAI-compatible chat-completions
endpoint and returns one short line of banter.

Failures are raised as BanterError subclasses so the caller can show
them in the chat panel; they never touch the game itself.
"""

import logging
from typing import Optional, Sequence

import requests

from logic.game_state import Mark
from logic.win_checker import Outcome

from .config import BanterConfig
from .prompt import build_messages, extract_message, FALLBACK_MESSAGE

logger = logging.getLogger(__name__)

TEST_MODE_MESSAGE = "Test mode banter: nice move... or was it?"


class BanterError(RuntimeError):
    """Raised when the chatbot can't produce a line."""


class MissingCredentialError(BanterError):
    """Raised when no API key is configured."""


class RateLimitedError(BanterError):
    """Raised on HTTP 429."""


class UnauthorizedError(BanterError):
    """Raised on HTTP 401."""


class BanterTimeoutError(BanterError):
    """Raised when the request takes longer than the configured timeout."""


class TrashTalkClient:
    """
    Client for the banter chatbot.

    Example usage::

        client = TrashTalkClient()
        if client.enabled:
            line = client.send(board, Mark.X, 4, outcome)
    """

    def __init__(self, config: Optional[BanterConfig] = None, session=None):
        """
        Args:
            config: Banter settings (default: read from environment).
            session: Object with a requests-style post() (default: requests).
        """
        self.config = config or BanterConfig()
        self.http = session if session is not None else requests

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def send(
        self,
        board: Sequence[Optional[Mark]],
        player: Mark,
        index: int,
        outcome: Outcome,
    ) -> str:
        """
        Ask the chatbot for a line about the latest move.

        Args:
            board: Board after the move.
            player: Who made the move.
            index: Cell that was played.
            outcome: Evaluation of the board after the move.

        Returns:
            One line of banter.

        Raises:
            MissingCredentialError: No API key configured.
            RateLimitedError: HTTP 429.
            UnauthorizedError: HTTP 401.
            BanterTimeoutError: The request timed out.
            BanterError: Any other failure.
        """
        if not self.config.has_api_key:
            raise MissingCredentialError(
                f"API key not configured. Set {self.config.API_KEY_ENV} in the environment."
            )
        if self.config.is_test:
            return TEST_MODE_MESSAGE

        payload = {
            "model": self.config.MODEL,
            "messages": build_messages(board, player, index, outcome),
            "max_tokens": self.config.MAX_TOKENS,
            "temperature": self.config.TEMPERATURE,
        }

        try:
            response = self.http.post(
                self.config.API_URL,
                json=payload,
                timeout=self.config.TIMEOUT_SECONDS,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.config.api_key}",
                },
            )
        except requests.Timeout as exc:
            raise BanterTimeoutError(
                "Chatbot took too long to respond. Try another move!"
            ) from exc
        except requests.RequestException as exc:
            raise BanterError(f"Chatbot request failed: {exc}") from exc

        if not response.ok:
            self._raise_for_status(response)

        try:
            data = response.json()
        except ValueError as exc:
            raise BanterError("Chatbot returned an unreadable response.") from exc

        return extract_message(data) or FALLBACK_MESSAGE

    def _raise_for_status(self, response):
        status = response.status_code
        logger.warning("Banter request failed with status %s", status)

        if status == 429:
            raise RateLimitedError(
                "Rate limited by the chatbot API. Please wait a moment and try again."
            )
        if status == 401:
            raise UnauthorizedError("Unauthorized: invalid API key.")

        detail = ""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict):
                detail = error.get("message") or ""

        raise BanterError(detail or f"Chatbot request failed with status {status}.")
