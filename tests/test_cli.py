"""Tests for the Typer command line interface."""
import pytest
from typer.testing import CliRunner

from aiagent.cli import app as cli_app
from aiagent.conversation import (
    HISTORY_KEY,
    SERVICE_FAILURE_MESSAGE,
    ConversationController,
    parse_history,
)
from aiagent.store import FileStore

runner = CliRunner()

STORED = '[{"role":"user","content":"hello"},{"role":"assistant","content":"hi there"}]'


@pytest.fixture
def store_dir(tmp_path, monkeypatch):
    """Point the CLI at an empty file store under tmp_path."""
    monkeypatch.setenv("CHAT_STORE", "file")
    monkeypatch.setenv("CHAT_STORE_PATH", str(tmp_path))
    monkeypatch.setenv("LLM_PROVIDER", "groq")
    for name in ("LLM_MODEL", "LLM_BASE_URL", "GROQ_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def use_service(monkeypatch, store_dir):
    """Route the CLI's controller through a given fake service."""
    def _use(service):
        def _get_controller(console=None, debug_callback=None):
            controller = ConversationController(
                service=service,
                store=FileStore(store_dir),
                system_prompt="You are a test assistant.",
            )
            controller.set_debug_callback(debug_callback)
            controller.initialize()
            return controller

        monkeypatch.setattr(cli_app, "get_controller", _get_controller)
    return _use


class TestHistoryCommand:
    """Tests for `aiagent history`."""

    def test_empty(self, store_dir):
        result = runner.invoke(cli_app.app, ["history"])

        assert result.exit_code == 0
        assert "No conversation stored" in result.output

    def test_lists_messages(self, store_dir):
        FileStore(store_dir).set(HISTORY_KEY, STORED)

        result = runner.invoke(cli_app.app, ["history"])

        assert result.exit_code == 0
        assert "hello" in result.output
        assert "hi there" in result.output

    def test_brackets_in_messages_are_shown(self, store_dir):
        FileStore(store_dir).set(
            HISTORY_KEY,
            '[{"role":"user","content":"a[0]"},{"role":"assistant","content":"x[/]"}]',
        )

        result = runner.invoke(cli_app.app, ["history"])

        assert result.exit_code == 0
        assert "a[0]" in result.output
        assert "x[/]" in result.output

    def test_limit(self, store_dir):
        FileStore(store_dir).set(HISTORY_KEY, STORED)

        result = runner.invoke(cli_app.app, ["history", "--limit", "1"])

        assert result.exit_code == 0
        assert "hi there" in result.output
        assert "hello" not in result.output

    def test_corrupt_history_warns(self, store_dir):
        FileStore(store_dir).set(HISTORY_KEY, "{corrupt")

        result = runner.invoke(cli_app.app, ["history"])

        assert result.exit_code == 0
        assert "Warning" in result.output
        assert "No conversation stored" in result.output


class TestClearCommand:
    """Tests for `aiagent clear`."""

    def test_clear_with_yes(self, store_dir):
        FileStore(store_dir).set(HISTORY_KEY, STORED)

        result = runner.invoke(cli_app.app, ["clear", "--yes"])

        assert result.exit_code == 0
        assert FileStore(store_dir).get(HISTORY_KEY) is None

    def test_clear_when_empty(self, store_dir):
        result = runner.invoke(cli_app.app, ["clear", "-y"])

        assert result.exit_code == 0
        assert "Conversation cleared." in result.output

    def test_clear_aborted(self, store_dir):
        FileStore(store_dir).set(HISTORY_KEY, STORED)

        result = runner.invoke(cli_app.app, ["clear"], input="n\n")

        assert "Aborted." in result.output
        assert FileStore(store_dir).get(HISTORY_KEY) == STORED


class TestSendCommand:
    """Tests for `aiagent send`."""

    def test_prints_reply_and_persists(self, store_dir, use_service, service):
        use_service(service)

        result = runner.invoke(cli_app.app, ["send", "hello"])

        assert result.exit_code == 0
        assert "hi there" in result.output
        stored = parse_history(FileStore(store_dir).get(HISTORY_KEY))
        assert [m.content for m in stored] == ["hello", "hi there"]
        assert service.closed is True

    def test_reply_brackets_printed_verbatim(self, store_dir, use_service, fake_service_cls):
        """Test that square brackets in a reply are not treated as markup."""
        use_service(fake_service_cls(reply="Use arr[i] then close with [/]"))

        result = runner.invoke(cli_app.app, ["send", "hello"])

        assert result.exit_code == 0
        assert "Use arr[i] then close with [/]" in result.output

    def test_user_text_with_brackets_is_kept(self, store_dir, use_service, service):
        use_service(service)

        result = runner.invoke(cli_app.app, ["send", "what does [bold]x[/bold] do?"])

        assert result.exit_code == 0
        stored = parse_history(FileStore(store_dir).get(HISTORY_KEY))
        assert stored[0].content == "what does [bold]x[/bold] do?"

    def test_failure_prints_sentinel(self, store_dir, use_service, failing_service):
        use_service(failing_service)

        result = runner.invoke(cli_app.app, ["send", "hello"])

        assert result.exit_code == 0
        assert SERVICE_FAILURE_MESSAGE in result.output

    def test_blank_text_rejected(self, store_dir, use_service, service):
        use_service(service)

        result = runner.invoke(cli_app.app, ["send", "   "])

        assert result.exit_code == 1
        assert service.calls == []

    @pytest.mark.parametrize("provider", ["groq", "openai", "anthropic"])
    def test_missing_key_warns_and_replies_with_sentinel(self, store_dir, monkeypatch, provider):
        """Test that a missing credential ends the turn with the failure sentinel."""
        monkeypatch.setenv("LLM_PROVIDER", provider)
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

        result = runner.invoke(cli_app.app, ["send", "hello"])

        assert result.exit_code == 0
        assert "not set" in result.output
        assert SERVICE_FAILURE_MESSAGE in result.output
        stored = parse_history(FileStore(store_dir).get(HISTORY_KEY))
        assert [m.content for m in stored] == ["hello", SERVICE_FAILURE_MESSAGE]

    def test_unknown_provider(self, store_dir, monkeypatch):
        monkeypatch.setenv("LLM_PROVIDER", "nonexistent")

        result = runner.invoke(cli_app.app, ["send", "hello"])

        assert result.exit_code == 1
        assert "Unsupported provider" in result.output


class TestChatCommand:
    """Tests for `aiagent chat`."""

    def test_one_turn_then_exit(self, store_dir, use_service, service):
        use_service(service)

        result = runner.invoke(cli_app.app, ["chat"], input="hello\nexit\n")

        assert result.exit_code == 0
        assert "Start chatting" in result.output
        assert "hi there" in result.output
        assert "Goodbye!" in result.output

    def test_replays_stored_history(self, store_dir, use_service, service):
        FileStore(store_dir).set(HISTORY_KEY, STORED)
        use_service(service)

        result = runner.invoke(cli_app.app, ["chat"], input="q\n")

        assert "hello" in result.output
        assert "hi there" in result.output
        assert service.calls == []

    def test_slash_clear(self, store_dir, use_service, service):
        FileStore(store_dir).set(HISTORY_KEY, STORED)
        use_service(service)

        result = runner.invoke(cli_app.app, ["chat"], input="/clear\nexit\n")

        assert "Conversation cleared." in result.output
        assert FileStore(store_dir).get(HISTORY_KEY) is None

    def test_end_of_input_exits(self, store_dir, use_service, service):
        use_service(service)

        result = runner.invoke(cli_app.app, ["chat"], input="")

        assert result.exit_code == 0
        assert "Goodbye!" in result.output


class TestHealthCommand:
    """Tests for `aiagent health`."""

    def test_healthy(self, store_dir, monkeypatch):
        monkeypatch.setenv("GROQ_API_KEY", "gsk_test")

        result = runner.invoke(cli_app.app, ["health"])

        assert result.exit_code == 0
        assert "llama-3.1-8b-instant" in result.output
        assert "GROQ_API_KEY: SET" in result.output
        assert "Store: file" in result.output

    def test_missing_key_reported(self, store_dir):
        result = runner.invoke(cli_app.app, ["health"])

        assert result.exit_code == 1
        assert "GROQ_API_KEY: NOT SET" in result.output

    def test_model_override(self, store_dir, monkeypatch):
        monkeypatch.setenv("GROQ_API_KEY", "gsk_test")
        monkeypatch.setenv("LLM_MODEL", "llama-3.3-70b-versatile")

        result = runner.invoke(cli_app.app, ["health"])

        assert "llama-3.3-70b-versatile" in result.output
