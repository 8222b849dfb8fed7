#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdscroll/viewer/links.py
"""Classification of link targets for link following.

The viewer resolves in-document anchors itself. Everything else is handed
back to the caller as a ``LinkAction`` describing what to open.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import PurePath
from typing import Optional

from mdscroll.constants import MARKDOWN_SUFFIXES, REMOTE_MARKDOWN_HOSTS, REMOTE_MARKDOWN_SUFFIXES


class LinkKind(Enum):
    """Enumerate the kinds of link target."""

    ANCHOR = auto()
    LOCAL_MARKDOWN = auto()
    REMOTE_MARKDOWN = auto()
    EXTERNAL = auto()
    UNKNOWN = auto()


@dataclass(frozen=True)
class LinkAction:
    """What following a link should do.

    Parameters
    ----------
    kind : LinkKind
        Target classification
    url : str
        Link destination as written
    target : str or None, default = None
        Resolved target: a path for local Markdown, the anchor text for
        anchors, the URL for remote targets

    """

    kind: LinkKind
    url: str
    target: Optional[str] = None


def classify_link(url: str) -> LinkKind:
    """Classify a link destination.

    Examples
    --------
        >>> classify_link("docs/intro.md")
        <LinkKind.LOCAL_MARKDOWN: 2>
        >>> classify_link("https://example.com")
        <LinkKind.EXTERNAL: 4>

    """
    if url.startswith(("http://", "https://")):
        if url.endswith(REMOTE_MARKDOWN_SUFFIXES) or any(host in url for host in REMOTE_MARKDOWN_HOSTS):
            return LinkKind.REMOTE_MARKDOWN
        return LinkKind.EXTERNAL
    if url.endswith(MARKDOWN_SUFFIXES):
        return LinkKind.LOCAL_MARKDOWN
    if url.startswith("#"):
        return LinkKind.ANCHOR
    return LinkKind.UNKNOWN


def resolve_link(url: str, source: Optional[str] = None) -> LinkAction:
    """Classify ``url`` and resolve its target relative to ``source``.

    Parameters
    ----------
    url : str
        Link destination
    source : str or None, default = None
        Path of the document containing the link; relative local links are
        resolved against its directory

    Returns
    -------
    LinkAction
        Classification and resolved target

    """
    kind = classify_link(url)
    if kind is LinkKind.ANCHOR:
        return LinkAction(kind=kind, url=url, target=url[1:])
    if kind is LinkKind.LOCAL_MARKDOWN:
        path = PurePath(url)
        if source and not path.is_absolute():
            path = PurePath(source).parent / path
        return LinkAction(kind=kind, url=url, target=str(path))
    if kind in (LinkKind.REMOTE_MARKDOWN, LinkKind.EXTERNAL):
        return LinkAction(kind=kind, url=url, target=url)
    return LinkAction(kind=kind, url=url)
