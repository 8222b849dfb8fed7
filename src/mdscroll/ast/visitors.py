#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdscroll/ast/visitors.py
"""Visitor base class for block traversal.

Renderers subclass ``BlockVisitor`` and implement one ``visit_*`` method per
block type. ``Block.accept`` dispatches to the matching method.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from mdscroll.ast.nodes import BlockQuote, CodeBlock, Heading, HorizontalRule, List, Paragraph


class BlockVisitor(ABC):
    """Abstract base class for block visitors.

    Examples
    --------
    Counting code blocks:

        >>> class CodeCounter(BlockVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_code_block(self, node):
        ...         self.count += 1
        ...     def visit_heading(self, node): pass
        ...     def visit_paragraph(self, node): pass
        ...     def visit_list(self, node): pass
        ...     def visit_block_quote(self, node): pass
        ...     def visit_horizontal_rule(self, node): pass

    """

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading block."""
        pass

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph block."""
        pass

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock block."""
        pass

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List block."""
        pass

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote block."""
        pass

    @abstractmethod
    def visit_horizontal_rule(self, node: HorizontalRule) -> Any:
        """Visit a HorizontalRule block."""
        pass
