"""
Banter channel: fire-and-forget chatbot requests plus the chat transcript.

The game session calls trigger() after every move. Requests run on a
background thread; errors are recorded for display, never raised.
"""

import logging
import threading
from dataclasses import dataclass, field
from itertools import count
from typing import Callable, List, Optional

from .client import BanterError, TrashTalkClient

logger = logging.getLogger(__name__)

_message_ids = count(1)

GENERIC_ERROR = "Chatbot failed to respond."


@dataclass
class ChatMessage:
    """One line in the chat panel."""
    content: str
    role: str = "assistant"
    id: int = field(default_factory=lambda: next(_message_ids))


class BanterChannel:
    """
    Keeps the chat panel state: messages (newest first), loading flag,
    and the last error.
    """

    def __init__(
        self,
        client: Optional[TrashTalkClient] = None,
        on_update: Optional[Callable[["BanterChannel"], None]] = None,
        max_messages: Optional[int] = None
    ):
        """
        Args:
            client: Chatbot client (default: configured from environment).
            on_update: Called after every state change. Runs on the worker
                thread for triggered requests.
            max_messages: Transcript cap (default: BanterConfig.MAX_MESSAGES).
        """
        self.client = client or TrashTalkClient()
        self.on_update = on_update
        if max_messages is None:
            max_messages = self.client.config.MAX_MESSAGES
        self.max_messages = max_messages

        self.messages: List[ChatMessage] = []
        self.loading = False
        self.error: Optional[str] = None

        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.client.enabled

    def trigger(self, board, player, index, outcome) -> Optional[threading.Thread]:
        """Request banter in the background. Does nothing when disabled."""
        if not self.enabled:
            return None

        worker = threading.Thread(
            target=self.request,
            args=(board, player, index, outcome),
            daemon=True,
        )
        worker.start()
        return worker

    def request(self, board, player, index, outcome) -> Optional[str]:
        """
        Request banter and record the result.

        Returns:
            The new message, or None if the request failed.
        """
        with self._lock:
            self.loading = True
            self.error = None
        self._notify()

        message = None
        try:
            message = self.client.send(board, player, index, outcome)
        except BanterError as exc:
            logger.warning("Banter failed: %s", exc)
            with self._lock:
                self.error = str(exc) or GENERIC_ERROR
        except Exception:
            logger.exception("Banter client crashed")
            with self._lock:
                self.error = GENERIC_ERROR
        else:
            with self._lock:
                self.messages.insert(0, ChatMessage(content=message))
                del self.messages[self.max_messages:]
        finally:
            with self._lock:
                self.loading = False
            self._notify()

        return message

    def clear(self):
        """Reset the transcript (on game restart)."""
        with self._lock:
            self.messages = []
            self.error = None
            self.loading = False
        self._notify()

    def _notify(self):
        if self.on_update is None:
            return
        try:
            self.on_update(self)
        except Exception:
            logger.exception("Banter update callback failed")
