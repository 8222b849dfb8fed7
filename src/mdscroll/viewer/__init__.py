"""Viewer session, pane state and link handling."""

from mdscroll.viewer.links import LinkAction, LinkKind, classify_link, resolve_link
from mdscroll.viewer.pane import PaneState, clamp_line
from mdscroll.viewer.session import FetchOutcome, Viewer

__all__ = [
    "FetchOutcome",
    "LinkAction",
    "LinkKind",
    "PaneState",
    "Viewer",
    "clamp_line",
    "classify_link",
    "resolve_link",
]
