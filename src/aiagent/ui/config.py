"""UI configuration constants.

Centralizes display strings and limits for the UI module.
"""

# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# Chat display strings
EMPTY_PLACEHOLDER = "👋 Start chatting with your AI assistant!"
INPUT_PLACEHOLDER = "Ask me anything..."
THINKING_TEXT = "💭 Thinking..."

APP_TITLE = "AI Agent"
