#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdscroll/renderers/highlight.py
"""Syntax highlighting collaborator for code blocks.

The terminal renderer depends only on the ``Highlighter`` protocol: a single
``highlight(code, language)`` call returning, per source line, a sequence of
``(TokenStyle, text)`` runs. ``PygmentsHighlighter`` is the stock
implementation backed by pygments lexers and styles.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence

from mdscroll.constants import DEFAULT_HIGHLIGHT_STYLE
from mdscroll.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenStyle:
    """Style of one highlighted token run.

    Parameters
    ----------
    color : str or None, default = None
        Foreground color as ``#rrggbb``; None keeps the default code color
    bold : bool, default = False
    italic : bool, default = False
    underline : bool, default = False

    """

    color: Optional[str] = None
    bold: bool = False
    italic: bool = False
    underline: bool = False


TokenRun = tuple[TokenStyle, str]


class Highlighter(Protocol):
    """Anything that can split code into styled token runs per line."""

    def highlight(self, code: str, language: Optional[str]) -> Sequence[Sequence[TokenRun]]:
        """Return one sequence of token runs per line of ``code``."""
        ...


class PygmentsHighlighter:
    """Highlighter backed by pygments.

    Parameters
    ----------
    style : str, default = "monokai"
        Name of a pygments style

    Raises
    ------
    ValidationError
        If the style name is unknown to pygments

    Examples
    --------
        >>> lines = PygmentsHighlighter().highlight("x = 1", "python")
        >>> "".join(text for _style, text in lines[0])
        'x = 1'

    """

    def __init__(self, style: str = DEFAULT_HIGHLIGHT_STYLE):
        """Resolve the pygments style up front so bad names fail early."""
        from pygments.styles import get_style_by_name
        from pygments.util import ClassNotFound

        try:
            self._style = get_style_by_name(style)
        except ClassNotFound as e:
            raise ValidationError(f"Unknown highlight style: {style}", parameter_name="style", original_error=e) from e
        self.style_name = style
        self._lexers: dict[Optional[str], Any] = {}
        self._token_styles: dict[Any, TokenStyle] = {}

    def highlight(self, code: str, language: Optional[str]) -> list[list[TokenRun]]:
        """Highlight code and split the token stream into lines.

        Parameters
        ----------
        code : str
            Source code to highlight
        language : str or None
            Language name or alias; None or unknown names use plain text

        Returns
        -------
        list of list of TokenRun
            Token runs for each line; a trailing newline adds no empty line

        """
        from pygments import lex

        lines: list[list[TokenRun]] = [[]]
        for token_type, value in lex(code, self._lexer_for(language)):
            style = self._token_style(token_type)
            for index, piece in enumerate(value.split("\n")):
                if index:
                    lines.append([])
                if piece:
                    lines[-1].append((style, piece))

        if code.endswith("\n") and not lines[-1]:
            lines.pop()
        return lines

    def _lexer_for(self, language: Optional[str]) -> Any:
        if language in self._lexers:
            return self._lexers[language]

        from pygments.lexers import TextLexer, get_lexer_by_name
        from pygments.util import ClassNotFound

        lexer: Any
        if not language:
            lexer = TextLexer(stripnl=False, ensurenl=False)
        else:
            try:
                lexer = get_lexer_by_name(language, stripnl=False, ensurenl=False)
            except ClassNotFound:
                logger.debug("No lexer for language %r, using plain text", language)
                lexer = TextLexer(stripnl=False, ensurenl=False)

        self._lexers[language] = lexer
        return lexer

    def _token_style(self, token_type: Any) -> TokenStyle:
        cached = self._token_styles.get(token_type)
        if cached is not None:
            return cached

        token_spec = self._style.style_for_token(token_type)
        color = token_spec.get("color")
        style = TokenStyle(
            color=f"#{color}" if color else None,
            bold=bool(token_spec.get("bold")),
            italic=bool(token_spec.get("italic")),
            underline=bool(token_spec.get("underline")),
        )
        self._token_styles[token_type] = style
        return style
