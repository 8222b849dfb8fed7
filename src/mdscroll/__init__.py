"""mdscroll - Markdown rendered as styled terminal text.

mdscroll turns Markdown into a flat buffer of styled lines that a terminal
viewer can scroll, split and search. The pipeline has three stages:

1. ``iter_events`` tokenizes the source with mistune into a flat stream of
   start/end/text events
2. ``BlockAssembler`` folds the events into a ``Document`` of blocks, with a
   heading outline and a link index
3. ``TerminalRenderer`` turns the document into ``rich.text.Text`` lines,
   optionally highlighting code blocks with pygments

``Viewer`` ties the stages to per-pane scroll and search state.

Examples
--------
Render a document and search it:

    >>> from mdscroll import Viewer
    >>> viewer = Viewer()
    >>> viewer.load_text("# Notes\\n\\nSee [the docs](docs.md).")
    >>> viewer.apply_search("docs")
    1

"""

__version__ = "0.1.0"

from mdscroll.ast import Document, HeadingInfo, Link, StyledSpan
from mdscroll.config import load_config
from mdscroll.exceptions import (
    ConfigError,
    DocumentLoadError,
    InvalidPatternError,
    MdScrollError,
    SearchError,
    ValidationError,
)
from mdscroll.options import RendererOptions, ViewerOptions
from mdscroll.parsers import BlockAssembler, iter_events, parse_markdown
from mdscroll.renderers import PygmentsHighlighter, RenderResult, TerminalRenderer, render_document
from mdscroll.search import SearchMatch, SearchState, search_lines
from mdscroll.themes import Theme, available_themes, get_theme
from mdscroll.viewer import LinkAction, LinkKind, PaneState, Viewer

__all__ = [
    "__version__",
    "BlockAssembler",
    "ConfigError",
    "Document",
    "DocumentLoadError",
    "HeadingInfo",
    "InvalidPatternError",
    "Link",
    "LinkAction",
    "LinkKind",
    "MdScrollError",
    "PaneState",
    "PygmentsHighlighter",
    "RenderResult",
    "RendererOptions",
    "SearchError",
    "SearchMatch",
    "SearchState",
    "StyledSpan",
    "TerminalRenderer",
    "Theme",
    "ValidationError",
    "Viewer",
    "ViewerOptions",
    "available_themes",
    "get_theme",
    "iter_events",
    "load_config",
    "parse_markdown",
    "render_document",
    "search_lines",
]
