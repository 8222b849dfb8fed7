#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdscroll/cli.py
"""Command-line entry point for mdscroll.

Renders a Markdown file to the terminal with the same buffer the viewer
scrolls through, or prints one of its derived views: the heading outline,
the link index, or the search matches for a query.
"""

import argparse
import logging
import sys
from typing import Optional, Union

from rich.console import Console
from rich.style import Style
from rich.text import Text

from mdscroll import __version__
from mdscroll.config import load_config
from mdscroll.exceptions import ConfigError, DocumentLoadError, MdScrollError, ValidationError
from mdscroll.logging_utils import configure_logging
from mdscroll.options import ViewerOptions
from mdscroll.themes import available_themes
from mdscroll.viewer.session import Viewer

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_USAGE_ERROR = 2


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mdscroll",
        description="Render Markdown as styled terminal text.",
    )
    parser.add_argument("input", nargs="?", help="Markdown file to render (use '-' for stdin)")
    parser.add_argument("--theme", help="Color theme (see --list-themes)")
    parser.add_argument("--no-highlight", action="store_true", help="Disable code syntax highlighting")
    parser.add_argument("--style", help="Pygments style for code highlighting")
    parser.add_argument("--no-wrap", action="store_true", help="Crop long lines instead of wrapping")
    parser.add_argument("--line-numbers", action="store_true", help="Prefix lines with their buffer index")

    views = parser.add_mutually_exclusive_group()
    views.add_argument("--search", metavar="QUERY", help="Print the lines matching QUERY")
    views.add_argument("--outline", action="store_true", help="Print the heading outline")
    views.add_argument("--links", action="store_true", help="Print the links and their lines")
    views.add_argument("--list-themes", action="store_true", help="List the built-in themes and exit")

    parser.add_argument("--regex", action="store_true", help="Treat --search QUERY as a regular expression")
    parser.add_argument("-i", "--ignore-case", action="store_true", help="Case-insensitive --search")
    parser.add_argument("--config", metavar="PATH", help="Configuration file (disables discovery)")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", metavar="PATH", help="Also append log messages to PATH")
    parser.add_argument(
        "--trace", action="store_true", help="Log at DEBUG with timestamps and logger names (overrides --log-level)"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def read_source(source: str) -> str:
    """Read Markdown from a path, or stdin for ``-``.

    Raises
    ------
    DocumentLoadError
        If the file cannot be read or decoded

    """
    if source == "-":
        return sys.stdin.read()
    try:
        with open(source, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentLoadError(f"Cannot read {source}: {e}", source, e) from e


def _apply_arguments(options: ViewerOptions, parsed: argparse.Namespace) -> ViewerOptions:
    updates = {}
    if parsed.theme:
        updates["theme"] = parsed.theme
    if parsed.no_highlight:
        updates["syntax_highlighting"] = False
    if parsed.style:
        updates["highlight_style"] = parsed.style
    if parsed.no_wrap:
        updates["line_wrap"] = False
    if parsed.line_numbers:
        updates["show_line_numbers"] = True
    return options.create_updated(**updates) if updates else options


def _number(line: Text, index: int, width: int, style: Union[str, Style]) -> Text:
    return Text(f"{index:>{width}} ", style=style) + line


def print_buffer(console: Console, viewer: Viewer) -> None:
    width = len(str(max(viewer.line_count, 1)))
    muted = viewer.theme.style("text_muted")
    for index, line in enumerate(viewer.lines):
        if viewer.show_line_numbers:
            line = _number(line, index + 1, width, muted)
        if viewer.line_wrap:
            console.print(line)
        else:
            console.print(line, no_wrap=True, overflow="crop")


def print_outline(console: Console, viewer: Viewer) -> None:
    assert viewer.document is not None
    for heading, label in zip(viewer.document.headings, viewer.outline_labels()):
        text = Text(label, style=Style(color=viewer.theme.heading_color(heading.level)))
        text.append(f"  :{heading.rendered_line + 1}", style="dim")
        console.print(text)


def print_links(console: Console, viewer: Viewer) -> None:
    assert viewer.document is not None
    for link in viewer.document.links:
        text = Text(f"{link.logical_line + 1:>4} ", style="dim")
        text.append(link.text or link.url, style=viewer.theme.style("link"))
        if link.text and link.text != link.url:
            text.append(f" <{link.url}>", style="dim")
        console.print(text)


def print_matches(console: Console, viewer: Viewer) -> None:
    for match in viewer.pane.search_matches:
        line = viewer.lines[match.line].copy()
        line.stylize(
            Style(color=viewer.theme.highlight_match_fg, bgcolor=viewer.theme.highlight_match_bg),
            match.start,
            match.end,
        )
        console.print(_number(line, match.line + 1, 4, "dim"))


def main(args: Optional[list[str]] = None) -> int:
    """Run the command line interface.

    Returns
    -------
    int
        0 on success, 1 on runtime errors, 2 on invalid usage or input

    """
    parser = create_parser()
    try:
        parsed = parser.parse_args(args)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else EXIT_ERROR

    try:
        configure_logging(parsed.log_level, log_file=parsed.log_file, trace_mode=parsed.trace)
    except ConfigError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    console = Console(highlight=False)

    if parsed.list_themes:
        for name in available_themes():
            console.print(name)
        return EXIT_SUCCESS

    if not parsed.input:
        print("Error: Input file is required", file=sys.stderr)
        return EXIT_USAGE_ERROR

    try:
        options = _apply_arguments(load_config(parsed.config), parsed)
    except ConfigError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_USAGE_ERROR
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    try:
        text = read_source(parsed.input)
        viewer = Viewer(options)
        if parsed.regex:
            viewer.toggle_regex()
        viewer.pane.search.ignore_case = parsed.ignore_case
        viewer.load_text(text, source=None if parsed.input == "-" else parsed.input)
    except (DocumentLoadError, ValidationError) as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_USAGE_ERROR
    except MdScrollError as e:
        logger.debug("Render failed", exc_info=True)
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_ERROR

    if parsed.outline:
        print_outline(console, viewer)
    elif parsed.links:
        print_links(console, viewer)
    elif parsed.search is not None:
        count = viewer.apply_search(parsed.search)
        if count is None:
            print(f"Error: {viewer.status_message or 'Empty query'}", file=sys.stderr)
            return EXIT_USAGE_ERROR
        print_matches(console, viewer)
        print(viewer.status_message, file=sys.stderr)
    else:
        print_buffer(console, viewer)

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
