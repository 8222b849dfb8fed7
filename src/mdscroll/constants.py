#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mdscroll library.

Constants are organized by category:
1. Type Definitions - Literal types shared across modules
2. Rendering - markers and widths used by the terminal renderer
3. Viewport - scroll steps and pane limits
4. Configuration - file names and environment variables
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

CodeBlockKind = Literal["fenced", "indented"]
SplitDirection = Literal["none", "vertical", "horizontal"]

# =============================================================================
# Rendering
# =============================================================================

DEFAULT_RULE_WIDTH = 40
DEFAULT_CODE_INDENT = 2
DEFAULT_BULLET = "• "
QUOTE_BAR = "│ "
RULE_CHAR = "─"
CODE_FENCE = "```"
LIST_INDENT = "  "

DEFAULT_HIGHLIGHT_STYLE = "monokai"

# =============================================================================
# Viewport
# =============================================================================

DEFAULT_HORIZONTAL_STEP = 4
MAX_PANES = 2

# =============================================================================
# Configuration
# =============================================================================

DEFAULT_THEME = "default"
DEFAULT_OUTLINE_WIDTH = 24

CONFIG_FILENAMES = [".mdscroll.toml", ".mdscroll.yaml", ".mdscroll.yml", ".mdscroll.json"]
PYPROJECT_SECTION = "mdscroll"

ENV_THEME = "MDSCROLL_THEME"
ENV_LINE_WRAP = "MDSCROLL_LINE_WRAP"
ENV_OUTLINE = "MDSCROLL_OUTLINE"
ENV_LINE_NUMBERS = "MDSCROLL_LINE_NUMBERS"
ENV_HIGHLIGHT = "MDSCROLL_HIGHLIGHT"
TRUTHY_VALUES = frozenset({"1", "true", "yes"})

# =============================================================================
# Links
# =============================================================================

MARKDOWN_SUFFIXES = (".md", ".MD")
REMOTE_MARKDOWN_SUFFIXES = (".md", ".MD", ".markdown")
REMOTE_MARKDOWN_HOSTS = ("github.com", "raw.githubusercontent.com")
