"""
Banter module for Tic Tac Toe.
Handles the trash-talk chatbot: prompts, API client, and chat transcript.
"""

from .config import BanterConfig
from .client import (
    TrashTalkClient,
    BanterError,
    MissingCredentialError,
    RateLimitedError,
    UnauthorizedError,
    BanterTimeoutError,
)
from .channel import BanterChannel, ChatMessage
