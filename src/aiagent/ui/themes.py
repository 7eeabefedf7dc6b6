"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Slate background with cyan accents
SLATE_CYAN = Theme(
    name="slate-cyan",
    primary="#22d3ee",      # Cyan 400 - titles, focus
    secondary="#0891b2",    # Cyan 600 - user bubbles
    accent="#67e8f9",       # Cyan 300 - highlights
    foreground="#f1f5f9",   # Slate 100 - text
    background="#0f172a",   # Slate 900 - screen
    success="#06b6d4",      # Cyan 500 - send button
    warning="#fbbf24",      # Amber 400
    error="#ef4444",        # Red 500 - clear button, errors
    surface="#1e293b",      # Slate 800 - chat panel
    panel="#334155",        # Slate 700 - assistant bubbles
    dark=True,
    variables={
        "input-cursor-background": "#f1f5f9",
        "input-cursor-foreground": "#0f172a",
        "input-selection-background": "#22d3ee 30%",
        "border": "#475569",
        "border-blurred": "#334155",
        "scrollbar": "#475569",
        "scrollbar-hover": "#64748b",
        "scrollbar-active": "#22d3ee",
        "scrollbar-background": "#1e293b",
        "footer-key-foreground": "#22d3ee",
        "footer-description-foreground": "#94a3b8",
    },
)
