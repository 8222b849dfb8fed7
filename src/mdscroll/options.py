#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for rendering and viewing.

Options are frozen dataclasses. Use ``create_updated`` to derive a modified
copy instead of mutating an instance. Field metadata carries the help text
shown by the CLI.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from mdscroll.constants import (
    DEFAULT_BULLET,
    DEFAULT_CODE_INDENT,
    DEFAULT_HIGHLIGHT_STYLE,
    DEFAULT_HORIZONTAL_STEP,
    DEFAULT_OUTLINE_WIDTH,
    DEFAULT_RULE_WIDTH,
    DEFAULT_THEME,
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class RendererOptions(CloneFrozenMixin):
    """Layout settings for the terminal renderer.

    Parameters
    ----------
    rule_width : int
        Width in cells of a horizontal rule line
    code_indent : int
        Spaces inserted before every code block line
    bullet : str
        Marker used for unordered list items

    """

    rule_width: int = field(
        default=DEFAULT_RULE_WIDTH,
        metadata={"help": "Width of horizontal rule lines", "type": int, "importance": "advanced"},
    )
    code_indent: int = field(
        default=DEFAULT_CODE_INDENT,
        metadata={"help": "Indentation applied to code block lines", "type": int, "importance": "advanced"},
    )
    bullet: str = field(
        default=DEFAULT_BULLET,
        metadata={"help": "Marker for unordered list items", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.rule_width <= 0:
            raise ValueError(f"rule_width must be positive, got {self.rule_width}")
        if self.code_indent < 0:
            raise ValueError(f"code_indent must be non-negative, got {self.code_indent}")


@dataclass(frozen=True)
class ViewerOptions(CloneFrozenMixin):
    """Display preferences for a viewer session."""

    theme: str = field(
        default=DEFAULT_THEME,
        metadata={"help": "Color theme name", "importance": "core"},
    )
    line_wrap: bool = field(
        default=True,
        metadata={"help": "Wrap long lines instead of scrolling horizontally", "importance": "core"},
    )
    show_outline: bool = field(
        default=True,
        metadata={"help": "Show the heading outline panel", "importance": "core"},
    )
    outline_width: int = field(
        default=DEFAULT_OUTLINE_WIDTH,
        metadata={"help": "Width of the outline panel", "type": int, "importance": "advanced"},
    )
    show_line_numbers: bool = field(
        default=False,
        metadata={"help": "Show rendered line numbers", "importance": "core"},
    )
    syntax_highlighting: bool = field(
        default=True,
        metadata={"help": "Highlight code blocks with pygments", "importance": "core"},
    )
    highlight_style: str = field(
        default=DEFAULT_HIGHLIGHT_STYLE,
        metadata={"help": "Pygments style used for code highlighting", "importance": "advanced"},
    )
    horizontal_step: int = field(
        default=DEFAULT_HORIZONTAL_STEP,
        metadata={"help": "Columns moved per horizontal scroll step", "type": int, "importance": "advanced"},
    )
    renderer: RendererOptions = field(
        default_factory=RendererOptions,
        metadata={"help": "Renderer layout settings", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges and the pygments style name.

        Raises
        ------
        ValueError
            If a numeric field is out of range or the style is unknown.

        """
        if self.outline_width <= 0:
            raise ValueError(f"outline_width must be positive, got {self.outline_width}")
        if self.horizontal_step <= 0:
            raise ValueError(f"horizontal_step must be positive, got {self.horizontal_step}")

        from pygments.styles import get_all_styles

        if self.highlight_style not in set(get_all_styles()):
            raise ValueError(f"Unknown highlight style: {self.highlight_style}")
