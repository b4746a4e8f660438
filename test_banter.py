"""
Tests for the banter chatbot: prompts, API client errors, and the chat channel.
"""

import json

import pytest
import requests

from logic.game_state import Mark
from logic.win_checker import Outcome
from banter import (
    BanterConfig,
    BanterChannel,
    TrashTalkClient,
    BanterError,
    MissingCredentialError,
    RateLimitedError,
    UnauthorizedError,
    BanterTimeoutError,
)
from banter.client import TEST_MODE_MESSAGE
from banter.channel import GENERIC_ERROR
from banter.prompt import (
    FALLBACK_MESSAGE,
    format_board,
    build_user_message,
    build_messages,
    extract_message,
)

X, O = Mark.X, Mark.O

BOARD = [X, O, None, None, X, None, O, None, None]
IN_PROGRESS = Outcome()


def make_response(status: int, body=None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    if body is not None:
        response._content = json.dumps(body).encode("utf-8")
    else:
        response._content = b"not json"
    return response


def completion(text: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


class FakeHttp:
    """Records post() calls and returns a canned response or raises."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def live_config():
    return BanterConfig(api_key="sk-test", environment="production")


# ==================== CONFIG ====================

def test_config_reads_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("TICTACTOE_ENV", "")
    config = BanterConfig()
    assert config.api_key == "sk-env"
    assert config.enabled


def test_config_disabled_without_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    assert not BanterConfig(environment="production").enabled


def test_config_disabled_in_test_mode():
    config = BanterConfig(api_key="sk-test", environment="test")
    assert config.is_test
    assert not config.enabled


# ==================== PROMPT ====================

def test_format_board():
    assert format_board(BOARD) == "R1: X|O|.\nR2: .|X|.\nR3: O|.|."


def test_user_message():
    message = build_user_message(BOARD, X, 4, IN_PROGRESS)
    lines = message.splitlines()

    assert lines[0] == "Tic Tac Toe current board:"
    assert lines[1:4] == ["R1: X|O|.", "R2: .|X|.", "R3: O|.|."]
    assert lines[4] == ""
    assert lines[5] == "Latest move: Player X to row 2, col 2 (index 4)."
    assert lines[6] == "Outcome: Game continues."
    assert "<= 20 words" in message


@pytest.mark.parametrize("outcome, text", [
    (Outcome(winner=O, line=(0, 4, 8)), "Outcome: O just won."),
    (Outcome(tied=True), "Outcome: The board is full (tie)."),
])
def test_user_message_outcome(outcome, text):
    assert text in build_user_message(BOARD, O, 8, outcome)


def test_user_message_last_cell_row_col():
    message = build_user_message(BOARD, O, 8, IN_PROGRESS)
    assert "row 3, col 3 (index 8)" in message


def test_messages_have_system_prompt():
    messages = build_messages(BOARD, X, 4, IN_PROGRESS)
    assert [m["role"] for m in messages] == ["system", "user"]
    assert "Tic Tac Toe" in messages[0]["content"]


def test_extract_message():
    assert extract_message(completion("  Nice try!  ")) == "Nice try!"
    assert extract_message({"choices": []}) == ""
    assert extract_message({}) == ""
    assert extract_message(None) == ""
    assert extract_message({"choices": [{"message": {"content": None}}]}) == ""


# ==================== CLIENT ====================

def test_send_posts_chat_completion():
    http = FakeHttp(make_response(200, completion("Corner grab? Bold.")))
    client = TrashTalkClient(live_config(), session=http)

    assert client.send(BOARD, X, 4, IN_PROGRESS) == "Corner grab? Bold."

    url, kwargs = http.calls[0]
    assert url == BanterConfig.API_URL
    assert kwargs["timeout"] == BanterConfig.TIMEOUT_SECONDS
    assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
    payload = kwargs["json"]
    assert payload["model"] == "gpt-3.5-turbo"
    assert payload["max_tokens"] == 64
    assert payload["temperature"] == 0.9
    assert len(payload["messages"]) == 2


def test_empty_reply_uses_fallback():
    http = FakeHttp(make_response(200, completion("   ")))
    client = TrashTalkClient(live_config(), session=http)
    assert client.send(BOARD, X, 4, IN_PROGRESS) == FALLBACK_MESSAGE


def test_missing_key():
    http = FakeHttp()
    client = TrashTalkClient(BanterConfig(api_key="", environment="production"), session=http)

    with pytest.raises(MissingCredentialError):
        client.send(BOARD, X, 4, IN_PROGRESS)
    assert http.calls == []


def test_test_mode_skips_network():
    http = FakeHttp()
    client = TrashTalkClient(BanterConfig(api_key="sk-test", environment="test"), session=http)

    assert client.send(BOARD, X, 4, IN_PROGRESS) == TEST_MODE_MESSAGE
    assert http.calls == []


@pytest.mark.parametrize("status, error", [
    (429, RateLimitedError),
    (401, UnauthorizedError),
])
def test_status_errors(status, error):
    http = FakeHttp(make_response(status, {"error": {"message": "nope"}}))
    client = TrashTalkClient(live_config(), session=http)

    with pytest.raises(error):
        client.send(BOARD, X, 4, IN_PROGRESS)


def test_error_detail_from_body():
    http = FakeHttp(make_response(500, {"error": {"message": "Server exploded"}}))
    client = TrashTalkClient(live_config(), session=http)

    with pytest.raises(BanterError, match="Server exploded"):
        client.send(BOARD, X, 4, IN_PROGRESS)


def test_error_without_body_reports_status():
    http = FakeHttp(make_response(503))
    client = TrashTalkClient(live_config(), session=http)

    with pytest.raises(BanterError, match="status 503"):
        client.send(BOARD, X, 4, IN_PROGRESS)


def test_timeout():
    http = FakeHttp(error=requests.Timeout("slow"))
    client = TrashTalkClient(live_config(), session=http)

    with pytest.raises(BanterTimeoutError):
        client.send(BOARD, X, 4, IN_PROGRESS)


def test_connection_error():
    http = FakeHttp(error=requests.ConnectionError("down"))
    client = TrashTalkClient(live_config(), session=http)

    with pytest.raises(BanterError):
        client.send(BOARD, X, 4, IN_PROGRESS)


@pytest.mark.parametrize("body", [
    {"choices": ["oops"]},
    {"choices": [{"message": "hi"}]},
    {"choices": [{"message": {"content": 42}}]},
    {"choices": {"message": {"content": "hi"}}},
    {"choices": [None]},
    ["not", "a", "dict"],
])
def test_extract_message_malformed_shapes(body):
    assert extract_message(body) == ""


@pytest.mark.parametrize("body", [
    {"choices": ["oops"]},
    {"choices": [{"message": "hi"}]},
])
def test_malformed_success_body_uses_fallback(body):
    http = FakeHttp(make_response(200, body))
    client = TrashTalkClient(live_config(), session=http)
    assert client.send(BOARD, X, 4, IN_PROGRESS) == FALLBACK_MESSAGE


def test_channel_survives_malformed_success_body():
    http = FakeHttp(make_response(200, {"choices": ["oops"]}))
    channel = BanterChannel(TrashTalkClient(live_config(), session=http))

    assert channel.request(BOARD, X, 4, IN_PROGRESS) == FALLBACK_MESSAGE
    assert channel.error is None


def test_unreadable_success_body():
    http = FakeHttp(make_response(200))
    client = TrashTalkClient(live_config(), session=http)

    with pytest.raises(BanterError):
        client.send(BOARD, X, 4, IN_PROGRESS)


def test_uses_requests_by_default(monkeypatch):
    calls = []

    def fake_post(url, **kwargs):
        calls.append(url)
        return make_response(200, completion("Hi"))

    monkeypatch.setattr(requests, "post", fake_post)
    client = TrashTalkClient(live_config())

    assert client.send(BOARD, X, 4, IN_PROGRESS) == "Hi"
    assert calls == [BanterConfig.API_URL]


# ==================== CHANNEL ====================

class ScriptedClient:
    """Client stand-in that returns or raises from a script."""

    def __init__(self, replies, enabled=True):
        self.replies = list(replies)
        self.config = BanterConfig(api_key="sk-test", environment="production")
        self._enabled = enabled

    @property
    def enabled(self):
        return self._enabled

    def send(self, board, player, index, outcome):
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def test_channel_records_newest_first():
    updates = []
    channel = BanterChannel(ScriptedClient(["one", "two"]), on_update=updates.append)

    channel.request(BOARD, X, 4, IN_PROGRESS)
    channel.request(BOARD, O, 0, IN_PROGRESS)

    assert [m.content for m in channel.messages] == ["two", "one"]
    assert channel.messages[0].id != channel.messages[1].id
    assert not channel.loading
    assert channel.error is None
    assert len(updates) == 4


def test_channel_caps_transcript():
    channel = BanterChannel(ScriptedClient([str(i) for i in range(5)]), max_messages=3)
    for _ in range(5):
        channel.request(BOARD, X, 4, IN_PROGRESS)

    assert [m.content for m in channel.messages] == ["4", "3", "2"]


def test_channel_default_cap_is_twenty():
    channel = BanterChannel(ScriptedClient([]))
    assert channel.max_messages == 20


def test_channel_records_errors_without_raising():
    channel = BanterChannel(ScriptedClient([RateLimitedError("slow down"), "ok"]))

    assert channel.request(BOARD, X, 4, IN_PROGRESS) is None
    assert channel.error == "slow down"
    assert not channel.loading

    # Next success clears the error
    channel.request(BOARD, X, 4, IN_PROGRESS)
    assert channel.error is None
    assert [m.content for m in channel.messages] == ["ok"]


def test_channel_loading_during_request():
    seen = []
    channel = BanterChannel(ScriptedClient(["hi"]), on_update=lambda c: seen.append(c.loading))
    channel.request(BOARD, X, 4, IN_PROGRESS)
    assert seen == [True, False]


def test_channel_trigger_runs_in_background():
    channel = BanterChannel(ScriptedClient(["hi"]))
    worker = channel.trigger(BOARD, X, 4, IN_PROGRESS)
    worker.join(timeout=5)

    assert [m.content for m in channel.messages] == ["hi"]


def test_channel_trigger_disabled_is_noop():
    channel = BanterChannel(ScriptedClient(["hi"], enabled=False))
    assert channel.trigger(BOARD, X, 4, IN_PROGRESS) is None
    assert channel.messages == []


@pytest.mark.parametrize("crash", [RuntimeError("bug"), KeyError("choices")])
def test_channel_records_unexpected_errors(crash):
    channel = BanterChannel(ScriptedClient([crash]))

    assert channel.request(BOARD, X, 4, IN_PROGRESS) is None
    assert channel.error == GENERIC_ERROR
    assert not channel.loading
    assert channel.messages == []


def test_channel_survives_failing_update_callback():
    def broken(channel):
        raise RuntimeError("window gone")

    channel = BanterChannel(ScriptedClient(["hi"]), on_update=broken)

    assert channel.request(BOARD, X, 4, IN_PROGRESS) == "hi"
    assert [m.content for m in channel.messages] == ["hi"]
    assert not channel.loading


def test_channel_explicit_zero_cap_is_kept():
    channel = BanterChannel(ScriptedClient(["hi"]), max_messages=0)
    assert channel.max_messages == 0

    channel.request(BOARD, X, 4, IN_PROGRESS)
    assert channel.messages == []


def test_channel_clear():
    channel = BanterChannel(ScriptedClient(["hi", BanterError("boom")]))
    channel.request(BOARD, X, 4, IN_PROGRESS)
    channel.request(BOARD, X, 4, IN_PROGRESS)
    channel.clear()

    assert channel.messages == []
    assert channel.error is None
    assert not channel.loading
