"""
Parser Registry for Tree-sitter

Manages the JavaScript-family parsers and provides a unified interface.
"""

import threading
from pathlib import Path

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Parser

from signal_patterns.observability import get_logger

logger = get_logger(__name__)


class ParserRegistry:
    """
    Registry for language parsers.

    Supports:
    - JavaScript (JSX included in the grammar)
    - TypeScript
    - TSX
    """

    EXTENSION_MAP = {
        ".js": "javascript",
        ".jsx": "javascript",
        ".mjs": "javascript",
        ".cjs": "javascript",
        ".ts": "typescript",
        ".mts": "typescript",
        ".cts": "typescript",
        ".tsx": "tsx",
    }

    def __init__(self):
        self._parsers: dict[str, Parser] = {}
        self._languages: dict[str, Language] = {}
        self._setup_languages()

    def _register_language(self, name: str, language_ptr: object, aliases: list[str] | None = None) -> None:
        """
        Register a language and its aliases.

        Args:
            name: Language name (e.g., "javascript", "tsx")
            language_ptr: Grammar capsule returned by the grammar package
            aliases: Optional list of aliases (e.g., ["js"] for javascript)
        """
        lang = Language(language_ptr)
        self._languages[name] = lang

        for alias in aliases or []:
            self._languages[alias] = lang

        logger.debug("parser_loaded", language=name, aliases=aliases or [])

    def _setup_languages(self):
        """Setup Tree-sitter languages"""
        self._register_language("javascript", tree_sitter_javascript.language(), ["js", "jsx"])
        self._register_language("typescript", tree_sitter_typescript.language_typescript(), ["ts"])
        self._register_language("tsx", tree_sitter_typescript.language_tsx())

    def get_parser(self, language: str) -> Parser | None:
        """
        Get parser for the specified language.

        Parser objects are not shared between threads: each thread gets
        its own cached instance.

        Args:
            language: Language name (javascript, typescript, tsx)

        Returns:
            Parser instance or None if language not supported
        """
        language = language.lower()
        lang = self._languages.get(language)
        if lang is None:
            return None

        key = f"{language}:{threading.get_ident()}"
        parser = self._parsers.get(key)
        if parser is None:
            parser = Parser(lang)
            self._parsers[key] = parser
        return parser

    def detect_language(self, file_path: str | Path) -> str | None:
        """
        Detect language from file extension.

        Args:
            file_path: Path to source file

        Returns:
            Language name or None if not supported
        """
        return self.EXTENSION_MAP.get(Path(file_path).suffix.lower())

    @property
    def supported_extensions(self) -> list[str]:
        return sorted(self.EXTENSION_MAP)

# Global registry instance
_registry_lock = threading.Lock()
_registry: ParserRegistry | None = None


def get_registry() -> ParserRegistry:
    """Get global parser registry instance"""
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = ParserRegistry()
    return _registry
