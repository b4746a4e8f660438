"""
Banter configuration for Tic Tac Toe.
Settings for the trash-talk chatbot (text-generation API).

Set your key before launching:
    export OPENAI_API_KEY=sk-...
"""

import os
from typing import Optional


class BanterConfig:
    """
    Configuration for the banter chatbot.

    Class attributes are the defaults; the API key and run environment
    are read from the process environment unless passed in.
    """

    # ==================== API SETTINGS ====================
    API_URL = "https://api.openai.com/v1/chat/completions"
    MODEL = "gpt-3.5-turbo"
    MAX_TOKENS = 64
    TEMPERATURE = 0.9

    # Requests slower than this are abandoned (seconds)
    TIMEOUT_SECONDS = 10.0

    # ==================== ENVIRONMENT ====================
    API_KEY_ENV = "OPENAI_API_KEY"
    ENVIRONMENT_ENV = "TICTACTOE_ENV"
    TEST_ENVIRONMENT = "test"

    # ==================== CHAT PANEL ====================
    # Newest messages are kept, oldest dropped
    MAX_MESSAGES = 20

    def __init__(
        self,
        api_key: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        """
        Args:
            api_key: API key (default: $OPENAI_API_KEY).
            environment: Run environment (default: $TICTACTOE_ENV).
        """
        self.api_key = api_key if api_key is not None else os.getenv(self.API_KEY_ENV, "")
        self.environment = (
            environment if environment is not None
            else os.getenv(self.ENVIRONMENT_ENV, "")
        )

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @property
    def is_test(self) -> bool:
        return self.environment == self.TEST_ENVIRONMENT

    @property
    def enabled(self) -> bool:
        """Banter runs only with a key, and never in test mode."""
        return self.has_api_key and not self.is_test
