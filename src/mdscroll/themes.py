#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdscroll/themes.py
"""Color themes for the terminal viewer.

A theme maps every UI element name (``heading_1``, ``text``, ``link``,
``code_inline``, ``blockquote``, ``list_marker``, ...) to a ``#rrggbb``
color. The renderer reads the Markdown slots; the remaining slots are for the
surrounding UI (borders, status bar, outline panel, help overlay).

"""

from __future__ import annotations

from dataclasses import dataclass, fields

from rich.style import Style

from mdscroll.constants import DEFAULT_THEME
from mdscroll.exceptions import ValidationError


@dataclass(frozen=True)
class Theme:
    """Named set of UI colors."""

    name: str

    # UI borders
    border_focused: str
    border_unfocused: str

    # Header
    header_title: str
    header_filename: str
    header_bg: str

    # Status bar
    status_mode_bg: str
    status_mode_fg: str
    status_help: str
    status_bg: str

    # Search highlights
    highlight_match_bg: str
    highlight_match_fg: str

    # Markdown elements
    heading_1: str
    heading_2: str
    heading_3: str
    heading_other: str
    code_block_bg: str
    code_inline: str
    link: str
    emphasis: str
    strong: str
    blockquote: str
    list_marker: str
    horizontal_rule: str

    # Outline panel
    outline_selected: str
    outline_heading: str
    outline_current: str

    # General text
    text: str
    text_muted: str

    # Empty states / messages
    empty_state: str
    warning_message: str

    # Help overlay
    help_border: str
    help_bg: str

    def color(self, element: str) -> str:
        """Return the color assigned to a UI element.

        Parameters
        ----------
        element : str
            Slot name such as ``"link"`` or ``"heading_2"``

        Returns
        -------
        str
            ``#rrggbb`` color string

        Raises
        ------
        ValidationError
            If the element is not a theme slot

        """
        if element == "name" or element not in _SLOT_NAMES:
            raise ValidationError(f"Unknown theme element: {element}", parameter_name="element")
        return str(getattr(self, element))

    def style(self, element: str) -> Style:
        """Return a foreground ``Style`` for a UI element."""
        return Style(color=self.color(element))

    def heading_color(self, level: int) -> str:
        """Return the heading color for a level; 4-6 share ``heading_other``."""
        if level == 1:
            return self.heading_1
        if level == 2:
            return self.heading_2
        if level == 3:
            return self.heading_3
        return self.heading_other


_SLOT_NAMES = frozenset(f.name for f in fields(Theme)) - {"name"}

BUILTIN_THEMES: dict[str, Theme] = {
    "default": Theme(
        name="default",
        border_focused="#63b3ed",
        border_unfocused="#4a5568",
        header_title="#81e6d9",
        header_filename="#63b3ed",
        header_bg="#1a202c",
        status_mode_bg="#81e6d9",
        status_mode_fg="#1a202c",
        status_help="#718096",
        status_bg="#1a202c",
        highlight_match_bg="#facc15",
        highlight_match_fg="#1a202c",
        heading_1="#f687b3",
        heading_2="#81e6d9",
        heading_3="#facc15",
        heading_other="#b794f4",
        code_block_bg="#2d3748",
        code_inline="#f59e0b",
        link="#63b3ed",
        emphasis="#f687b3",
        strong="#f7fafc",
        blockquote="#718096",
        list_marker="#81e6d9",
        horizontal_rule="#4a5568",
        outline_selected="#facc15",
        outline_heading="#e2e8f0",
        outline_current="#81e6d9",
        text="#e2e8f0",
        text_muted="#718096",
        empty_state="#718096",
        warning_message="#facc15",
        help_border="#b794f4",
        help_bg="#1a202c",
    ),
    "dracula": Theme(
        name="dracula",
        border_focused="#bd93f9",
        border_unfocused="#44475a",
        header_title="#50fa7b",
        header_filename="#8be9fd",
        header_bg="#282a36",
        status_mode_bg="#bd93f9",
        status_mode_fg="#282a36",
        status_help="#6272a4",
        status_bg="#282a36",
        highlight_match_bg="#ffb86c",
        highlight_match_fg="#282a36",
        heading_1="#ff79c6",
        heading_2="#bd93f9",
        heading_3="#8be9fd",
        heading_other="#50fa7b",
        code_block_bg="#44475a",
        code_inline="#ffb86c",
        link="#8be9fd",
        emphasis="#ff79c6",
        strong="#f8f8f2",
        blockquote="#6272a4",
        list_marker="#ff79c6",
        horizontal_rule="#44475a",
        outline_selected="#ffb86c",
        outline_heading="#f8f8f2",
        outline_current="#bd93f9",
        text="#f8f8f2",
        text_muted="#6272a4",
        empty_state="#6272a4",
        warning_message="#ffb86c",
        help_border="#ff79c6",
        help_bg="#282a36",
    ),
    "gruvbox": Theme(
        name="gruvbox",
        border_focused="#d79921",
        border_unfocused="#665c54",
        header_title="#b8bb26",
        header_filename="#83a598",
        header_bg="#282828",
        status_mode_bg="#d79921",
        status_mode_fg="#282828",
        status_help="#928374",
        status_bg="#282828",
        highlight_match_bg="#fe8019",
        highlight_match_fg="#282828",
        heading_1="#fb4934",
        heading_2="#d79921",
        heading_3="#b8bb26",
        heading_other="#83a598",
        code_block_bg="#3c3836",
        code_inline="#fe8019",
        link="#83a598",
        emphasis="#d3869b",
        strong="#ebdbb2",
        blockquote="#928374",
        list_marker="#d79921",
        horizontal_rule="#665c54",
        outline_selected="#fe8019",
        outline_heading="#ebdbb2",
        outline_current="#d79921",
        text="#ebdbb2",
        text_muted="#928374",
        empty_state="#928374",
        warning_message="#fe8019",
        help_border="#d3869b",
        help_bg="#282828",
    ),
    "nord": Theme(
        name="nord",
        border_focused="#88c0d0",
        border_unfocused="#4c566a",
        header_title="#a3be8c",
        header_filename="#88c0d0",
        header_bg="#2e3440",
        status_mode_bg="#88c0d0",
        status_mode_fg="#2e3440",
        status_help="#4c566a",
        status_bg="#2e3440",
        highlight_match_bg="#d08770",
        highlight_match_fg="#2e3440",
        heading_1="#bf616a",
        heading_2="#d08770",
        heading_3="#ebcb8b",
        heading_other="#a3be8c",
        code_block_bg="#3b4252",
        code_inline="#d08770",
        link="#81a1c1",
        emphasis="#b48ead",
        strong="#eceff4",
        blockquote="#4c566a",
        list_marker="#88c0d0",
        horizontal_rule="#4c566a",
        outline_selected="#ebcb8b",
        outline_heading="#eceff4",
        outline_current="#88c0d0",
        text="#eceff4",
        text_muted="#4c566a",
        empty_state="#4c566a",
        warning_message="#ebcb8b",
        help_border="#b48ead",
        help_bg="#2e3440",
    ),
    "solarized-dark": Theme(
        name="solarized-dark",
        border_focused="#268bd2",
        border_unfocused="#586e75",
        header_title="#859900",
        header_filename="#2aa198",
        header_bg="#002b36",
        status_mode_bg="#268bd2",
        status_mode_fg="#002b36",
        status_help="#586e75",
        status_bg="#002b36",
        highlight_match_bg="#b58900",
        highlight_match_fg="#002b36",
        heading_1="#dc322f",
        heading_2="#cb4b16",
        heading_3="#b58900",
        heading_other="#859900",
        code_block_bg="#073642",
        code_inline="#cb4b16",
        link="#268bd2",
        emphasis="#6c71c4",
        strong="#93a1a1",
        blockquote="#586e75",
        list_marker="#2aa198",
        horizontal_rule="#586e75",
        outline_selected="#b58900",
        outline_heading="#93a1a1",
        outline_current="#268bd2",
        text="#93a1a1",
        text_muted="#586e75",
        empty_state="#586e75",
        warning_message="#b58900",
        help_border="#6c71c4",
        help_bg="#002b36",
    ),
    "solarized-light": Theme(
        name="solarized-light",
        border_focused="#268bd2",
        border_unfocused="#93a1a1",
        header_title="#859900",
        header_filename="#2aa198",
        header_bg="#eee8d5",
        status_mode_bg="#268bd2",
        status_mode_fg="#fdf6e3",
        status_help="#93a1a1",
        status_bg="#eee8d5",
        highlight_match_bg="#b58900",
        highlight_match_fg="#fdf6e3",
        heading_1="#dc322f",
        heading_2="#cb4b16",
        heading_3="#b58900",
        heading_other="#859900",
        code_block_bg="#fdf6e3",
        code_inline="#cb4b16",
        link="#268bd2",
        emphasis="#6c71c4",
        strong="#586e75",
        blockquote="#93a1a1",
        list_marker="#2aa198",
        horizontal_rule="#93a1a1",
        outline_selected="#b58900",
        outline_heading="#586e75",
        outline_current="#268bd2",
        text="#586e75",
        text_muted="#93a1a1",
        empty_state="#93a1a1",
        warning_message="#b58900",
        help_border="#6c71c4",
        help_bg="#eee8d5",
    ),
    "monokai": Theme(
        name="monokai",
        border_focused="#f92672",
        border_unfocused="#75715e",
        header_title="#a6e22e",
        header_filename="#66d9ef",
        header_bg="#272822",
        status_mode_bg="#f92672",
        status_mode_fg="#272822",
        status_help="#75715e",
        status_bg="#272822",
        highlight_match_bg="#fd971f",
        highlight_match_fg="#272822",
        heading_1="#f92672",
        heading_2="#fd971f",
        heading_3="#e6db74",
        heading_other="#a6e22e",
        code_block_bg="#34352e",
        code_inline="#fd971f",
        link="#66d9ef",
        emphasis="#ae81ff",
        strong="#f8f8f2",
        blockquote="#75715e",
        list_marker="#f92672",
        horizontal_rule="#75715e",
        outline_selected="#fd971f",
        outline_heading="#f8f8f2",
        outline_current="#f92672",
        text="#f8f8f2",
        text_muted="#75715e",
        empty_state="#75715e",
        warning_message="#fd971f",
        help_border="#ae81ff",
        help_bg="#272822",
    ),
    "catppuccin": Theme(
        name="catppuccin",
        border_focused="#cba6f7",
        border_unfocused="#585b70",
        header_title="#a6e3a1",
        header_filename="#89dceb",
        header_bg="#1e1e2e",
        status_mode_bg="#cba6f7",
        status_mode_fg="#1e1e2e",
        status_help="#6c7086",
        status_bg="#1e1e2e",
        highlight_match_bg="#fab387",
        highlight_match_fg="#1e1e2e",
        heading_1="#f38ba8",
        heading_2="#cba6f7",
        heading_3="#f9e2af",
        heading_other="#a6e3a1",
        code_block_bg="#313244",
        code_inline="#fab387",
        link="#89b4fa",
        emphasis="#f5c2e7",
        strong="#cdd6f4",
        blockquote="#6c7086",
        list_marker="#f38ba8",
        horizontal_rule="#585b70",
        outline_selected="#fab387",
        outline_heading="#cdd6f4",
        outline_current="#cba6f7",
        text="#cdd6f4",
        text_muted="#6c7086",
        empty_state="#6c7086",
        warning_message="#fab387",
        help_border="#f38ba8",
        help_bg="#1e1e2e",
    ),
    "tokyo-night": Theme(
        name="tokyo-night",
        border_focused="#7aa2f7",
        border_unfocused="#414868",
        header_title="#9ece6a",
        header_filename="#7dcfff",
        header_bg="#1a1b26",
        status_mode_bg="#7aa2f7",
        status_mode_fg="#1a1b26",
        status_help="#565f89",
        status_bg="#1a1b26",
        highlight_match_bg="#ff9e64",
        highlight_match_fg="#1a1b26",
        heading_1="#f7768e",
        heading_2="#bb9af7",
        heading_3="#e0af68",
        heading_other="#9ece6a",
        code_block_bg="#292e42",
        code_inline="#ff9e64",
        link="#7aa2f7",
        emphasis="#bb9af7",
        strong="#c0caf5",
        blockquote="#565f89",
        list_marker="#7dcfff",
        horizontal_rule="#414868",
        outline_selected="#ff9e64",
        outline_heading="#c0caf5",
        outline_current="#7aa2f7",
        text="#c0caf5",
        text_muted="#565f89",
        empty_state="#565f89",
        warning_message="#e0af68",
        help_border="#bb9af7",
        help_bg="#1a1b26",
    ),
    "onedark": Theme(
        name="onedark",
        border_focused="#61afef",
        border_unfocused="#5c6370",
        header_title="#98c379",
        header_filename="#56b6c2",
        header_bg="#282c34",
        status_mode_bg="#61afef",
        status_mode_fg="#282c34",
        status_help="#5c6370",
        status_bg="#282c34",
        highlight_match_bg="#d19a66",
        highlight_match_fg="#282c34",
        heading_1="#e06c75",
        heading_2="#c678dd",
        heading_3="#e5c07b",
        heading_other="#98c379",
        code_block_bg="#323741",
        code_inline="#d19a66",
        link="#61afef",
        emphasis="#c678dd",
        strong="#abb2bf",
        blockquote="#5c6370",
        list_marker="#56b6c2",
        horizontal_rule="#5c6370",
        outline_selected="#d19a66",
        outline_heading="#abb2bf",
        outline_current="#61afef",
        text="#abb2bf",
        text_muted="#5c6370",
        empty_state="#5c6370",
        warning_message="#e5c07b",
        help_border="#c678dd",
        help_bg="#282c34",
    ),
    "matrix": Theme(
        name="matrix",
        border_focused="#00ff00",
        border_unfocused="#005000",
        header_title="#00ff00",
        header_filename="#00c800",
        header_bg="#000000",
        status_mode_bg="#00ff00",
        status_mode_fg="#000000",
        status_help="#006400",
        status_bg="#000000",
        highlight_match_bg="#00ff00",
        highlight_match_fg="#000000",
        heading_1="#00ff00",
        heading_2="#00dc00",
        heading_3="#00b400",
        heading_other="#009600",
        code_block_bg="#001400",
        code_inline="#64ff64",
        link="#00c864",
        emphasis="#00b400",
        strong="#00ff00",
        blockquote="#006400",
        list_marker="#00ff00",
        horizontal_rule="#005000",
        outline_selected="#00ff00",
        outline_heading="#00c800",
        outline_current="#00ff00",
        text="#00c800",
        text_muted="#006400",
        empty_state="#005000",
        warning_message="#96ff00",
        help_border="#00ff00",
        help_bg="#000000",
    ),
}

_ALIASES = {
    "solarized": "solarized-dark",
    "tokyonight": "tokyo-night",
    "one-dark": "onedark",
}


def available_themes() -> list[str]:
    """Return built-in theme names in cycling order."""
    return list(BUILTIN_THEMES)


def get_theme(name: str) -> Theme:
    """Look up a built-in theme.

    Names are case-insensitive and a few aliases are accepted. Unknown names
    fall back to the default theme.

    Parameters
    ----------
    name : str
        Theme name

    Returns
    -------
    Theme
        The matching theme

    """
    key = name.lower()
    key = _ALIASES.get(key, key)
    return BUILTIN_THEMES.get(key, BUILTIN_THEMES[DEFAULT_THEME])


def next_theme(name: str) -> Theme:
    """Return the theme following ``name`` in cycling order."""
    names = available_themes()
    current = get_theme(name).name
    index = names.index(current) if current in names else 0
    return BUILTIN_THEMES[names[(index + 1) % len(names)]]
