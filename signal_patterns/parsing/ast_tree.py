"""
AST Tree wrapper for Tree-sitter
"""

from collections.abc import Iterator

from tree_sitter import Node as TSNode
from tree_sitter import Tree as TSTree

from signal_patterns.errors import ParsingError
from signal_patterns.models import Span
from signal_patterns.parsing.parser_registry import get_registry
from signal_patterns.parsing.source_file import SourceFile


class AstTree:
    """
    Wrapper for Tree-sitter AST.

    Provides convenient methods for traversing and analyzing the AST.
    """

    def __init__(self, source: SourceFile, tree: TSTree):
        """
        Initialize AST tree.

        Args:
            source: Source file
            tree: Tree-sitter tree
        """
        self.source = source
        self.tree = tree
        self._root = tree.root_node
        self._span_cache: dict[int, Span] = {}

    @classmethod
    def parse(cls, source: SourceFile) -> "AstTree":
        """
        Parse source file into AST.

        Args:
            source: Source file to parse

        Returns:
            AstTree instance

        Raises:
            ParsingError: If language not supported or parsing fails
        """
        parser = get_registry().get_parser(source.language)

        if parser is None:
            raise ParsingError(f"Language not supported: {source.language}", file_path=source.file_path)

        tree = parser.parse(source.data)

        if tree is None:
            raise ParsingError(f"Failed to parse file: {source.file_path}", file_path=source.file_path)

        return cls(source, tree)

    @property
    def root(self) -> TSNode:
        """Get root node"""
        return self._root

    def events(self, node: TSNode | None = None) -> Iterator[tuple[TSNode, bool]]:
        """
        Depth-first enter/exit events: (node, True) on enter, (node, False) on exit.

        Iterative, so pathologically nested code cannot overflow the stack.
        """
        if node is None:
            node = self._root

        stack: list[tuple[TSNode, bool]] = [(node, True)]
        while stack:
            current, entering = stack.pop()
            yield current, entering
            if entering:
                stack.append((current, False))
                stack.extend((child, True) for child in reversed(current.children))

    def walk(self, node: TSNode | None = None) -> Iterator[TSNode]:
        """Walk AST in depth-first pre-order"""
        for current, entering in self.events(node):
            if entering:
                yield current

    def find_by_type(self, node_type: str, node: TSNode | None = None) -> list[TSNode]:
        """
        Find all nodes of specific type.

        Args:
            node_type: Node type to find (e.g., "member_expression")
            node: Starting node (defaults to root)

        Returns:
            List of matching nodes in document order
        """
        return [n for n in self.walk(node) if n.type == node_type]

    def get_text(self, node: TSNode) -> str:
        """
        Get text content of a node.

        Args:
            node: Tree-sitter node

        Returns:
            Node text
        """
        return self.source.text_at(node.start_byte, node.end_byte)

    def get_span(self, node: TSNode) -> Span:
        """
        Convert Tree-sitter node to Span.

        Args:
            node: Tree-sitter node

        Returns:
            Span (1-indexed lines, 0-indexed columns)
        """
        node_id = node.id
        if node_id in self._span_cache:
            return self._span_cache[node_id]

        # Tree-sitter uses 0-indexed lines
        span = Span(
            start_line=node.start_point[0] + 1,
            start_col=node.start_point[1],
            end_line=node.end_point[0] + 1,
            end_col=node.end_point[1],
        )

        self._span_cache[node_id] = span
        return span

    def has_error(self) -> bool:
        """Check if AST has any error nodes"""
        return self._root.has_error

    def get_errors(self, node: TSNode | None = None) -> list[TSNode]:
        """
        Get all error nodes.

        Args:
            node: Starting node (defaults to root)

        Returns:
            List of error nodes
        """
        return [n for n in self.walk(node) if n.type == "ERROR" or n.is_missing]

    def __repr__(self) -> str:
        return f"AstTree(file={self.source.file_path}, language={self.source.language})"
