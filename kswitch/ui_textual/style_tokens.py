"""Shared styling tokens for the picker and CLI output."""

# =============================================================================
# Colors - All UI colors should be defined here for consistency
# =============================================================================

# Core semantic colors
ACCENT = "#00d4ff"  # Logo, highlighted row
ERROR = "#ff5555"
SUCCESS = "#50fa7b"
WARNING = "#f1fa8c"
GREY = "#999999"  # Normal rows
DIM_GREY = "#555555"  # Separators, placeholders, hints
COUNTER_GREY = "#666666"
LABEL_GREY = "#888888"

# Decorations
ALIAS = "#bd93f9"  # @alias tags
PIN = "#ffb86c"  # Pinned star
SEARCH = "#f1fa8c"  # Active search text

# =============================================================================
# Icons/prefixes
# =============================================================================

POINTER = "❯"
ACTIVE_DOT = "●"
PIN_ICON = "★"
CURSOR_BLOCK = "█"
SCROLL_UP = "▲"
SCROLL_DOWN = "▼"
SEPARATOR = "─" * 41
ARROW = "→"

STATUS_ICONS = {
    "success": "✔",
    "error": "✗",
    "info": "·",
}

SEARCH_PLACEHOLDER = "type to search..."
KEY_HELP = "↑↓ navigate · enter select · ^p pin · ^o pinned · esc clear · ^c quit"
