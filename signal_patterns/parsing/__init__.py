"""
Parsing Layer

Tree-sitter based parsing for JavaScript, TypeScript and TSX.

Components:
- parser_registry: Language parser management
- source_file: Source file representation
- ast_tree: AST tree wrapper with traversal helpers
"""

from signal_patterns.parsing.ast_tree import AstTree
from signal_patterns.parsing.parser_registry import ParserRegistry, get_registry
from signal_patterns.parsing.source_file import SourceFile

__all__ = [
    "ParserRegistry",
    "get_registry",
    "SourceFile",
    "AstTree",
]
