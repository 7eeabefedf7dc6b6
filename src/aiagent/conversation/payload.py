"""Outbound request construction.

Kept free of I/O so the system-prompt injection can be tested directly.
"""

from ..llm.models import ChatMessage, Role


def build_request_payload(
    history: list[ChatMessage],
    user_message: ChatMessage | None = None,
    system_prompt: str | None = None,
) -> list[ChatMessage]:
    """Build the message list sent to the completion service.

    The system prompt is synthesized fresh on every call and never stored
    in history.

    Args:
        history: Conversation so far, oldest first
        user_message: Message to send; skipped when it is already the last
            history entry (the controller appends before building)
        system_prompt: Persona prompt (None loads the packaged one)

    Returns:
        ``[system] + history (+ user_message)``
    """
    if system_prompt is None:
        from ..prompts import get_persona_prompt
        system_prompt = get_persona_prompt()

    messages = [ChatMessage(role=Role.SYSTEM, content=system_prompt), *history]
    if user_message is not None and (not history or history[-1] is not user_message):
        messages.append(user_message)
    return messages
