"""Conversation controller.

Owns the message history, the pending input and the busy flag, and runs
one turn: append the user message, call the completion service, append the
reply (or a sentinel), persisting after each append.
"""

from typing import Any

from ..diagnostics import DebugCallback
from ..llm import ChatMessage, CompletionError, CompletionService, Role
from ..store import KeyValueStore
from .codec import HistoryParseError, parse_history, serialize_history
from .payload import build_request_payload

HISTORY_KEY = "chatHistory"

NO_RESPONSE_MESSAGE = "no response from model"
SERVICE_FAILURE_MESSAGE = "unable to reach the completion service"


class ConversationController:
    """One chat session.

    Hidden design decisions:
    - Storage key and history encoding
    - When the system prompt is injected
    - How failures become inline sentinel messages

    Hosts construct one instance per session. ``submit`` is the only
    suspension point; while it is outstanding ``busy`` is True and further
    submits are ignored.
    """

    def __init__(
        self,
        service: CompletionService,
        store: KeyValueStore,
        model: str | None = None,
        system_prompt: str | None = None,
        history_key: str = HISTORY_KEY,
    ):
        """Initialize the controller.

        Args:
            service: Completion service answering each turn
            store: Key-value store holding the serialized history
            model: Model identifier sent with each request
                (None uses the service's default)
            system_prompt: Persona prompt (None loads the packaged one)
            history_key: Store key of the history slot
        """
        self._service = service
        self._store = store
        self._model = model
        self._system_prompt = system_prompt
        self._history_key = history_key
        self._history: list[ChatMessage] = []
        self._busy = False
        self._debug_callback: DebugCallback | None = None
        self.pending_input = ""

    @property
    def history(self) -> list[ChatMessage]:
        """Snapshot of the conversation, oldest first."""
        return list(self._history)

    @property
    def busy(self) -> bool:
        """True while a completion call is outstanding."""
        return self._busy

    @property
    def model(self) -> str:
        """Model identifier sent with each request."""
        return self._model or self._service.model

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the debug callback for diagnostic logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    def initialize(self) -> None:
        """Load history from the store.

        Absent or unparseable history leaves the conversation empty.
        """
        raw = self._store.get(self._history_key)
        if raw is None:
            self._debug("debug", "Store", "No stored history")
            return

        try:
            self._history = parse_history(raw)
        except HistoryParseError as e:
            self._debug("warning", "Store", f"Ignoring stored history: {e}")
            self._history = []
            return

        self._debug("info", "Store", f"Loaded {len(self._history)} message(s)")

    def _append(self, message: ChatMessage) -> None:
        self._history.append(message)

    def _persist(self) -> None:
        if not self._history:
            return
        self._store.set(self._history_key, serialize_history(self._history))

    async def submit(self, text: str | None = None, **request_kwargs: Any) -> ChatMessage | None:
        """Run one conversation turn.

        Args:
            text: Message text (None submits ``pending_input``)
            **request_kwargs: Extra parameters for the completion request

        Returns:
            The assistant message appended for this turn, or None when the
            text was blank or a call was already outstanding
        """
        if text is None:
            text = self.pending_input
        if not text.strip():
            return None
        if self._busy:
            self._debug("warning", "Chat", "Submit ignored: a request is already in flight")
            return None

        user_message = ChatMessage(role=Role.USER, content=text)
        self._append(user_message)
        self._persist()
        self.pending_input = ""
        self._busy = True

        try:
            messages = build_request_payload(
                self._history, user_message, system_prompt=self._system_prompt
            )
            self._debug("debug", "LLM", f"Sending {len(messages)} message(s) to {self.model}")

            try:
                response = await self._service.chat_completion(
                    messages, model=self.model, **request_kwargs
                )
            except CompletionError as e:
                self._debug("error", "LLM", f"Completion failed: {e}")
                reply = ChatMessage(role=Role.ASSISTANT, content=SERVICE_FAILURE_MESSAGE)
            except Exception as e:
                # Services outside this package may raise anything; the turn
                # still ends with the sentinel
                self._debug("error", "LLM", f"Completion failed: {type(e).__name__}: {e}")
                reply = ChatMessage(role=Role.ASSISTANT, content=SERVICE_FAILURE_MESSAGE)
            else:
                if response.message is not None and response.message.content:
                    reply = response.message
                else:
                    self._debug("warning", "LLM", "Completion returned no message")
                    reply = ChatMessage(role=Role.ASSISTANT, content=NO_RESPONSE_MESSAGE)

            self._append(reply)
            self._persist()
            return reply
        finally:
            self._busy = False

    def clear(self) -> None:
        """Forget the conversation and remove it from the store."""
        self._store.remove(self._history_key)
        self._history = []
        self._debug("info", "Store", "History cleared")

    async def close(self) -> None:
        """Close resources."""
        await self._service.close()
