"""
Source File representation
"""

from dataclasses import dataclass, field
from pathlib import Path

from signal_patterns.errors import ParsingError, UnsupportedLanguageError


@dataclass
class SourceFile:
    """
    Represents a source code file.

    Attributes:
        file_path: Path as given by the caller (used in reports)
        content: File content as string
        language: Grammar name (javascript, typescript, tsx)
        encoding: File encoding (default: utf-8)
    """

    file_path: str
    content: str
    language: str
    encoding: str = "utf-8"
    _data: bytes | None = field(default=None, init=False, repr=False)

    @classmethod
    def from_file(
        cls,
        file_path: str | Path,
        language: str | None = None,
        encoding: str = "utf-8",
    ) -> "SourceFile":
        """
        Load source file from disk.

        Args:
            file_path: Path to file
            language: Language override (auto-detected if None)
            encoding: File encoding

        Returns:
            SourceFile instance

        Raises:
            UnsupportedLanguageError: If the extension has no grammar
            ParsingError: If the file cannot be read
        """
        path = Path(file_path)

        if language is None:
            language = cls.detect_language(path)

        try:
            content = path.read_bytes().decode(encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise ParsingError(f"Cannot read {path}: {e}", file_path=str(path)) from e

        return cls(file_path=str(file_path), content=content, language=language, encoding=encoding)

    @classmethod
    def from_content(
        cls,
        file_path: str,
        content: str,
        language: str | None = None,
        encoding: str = "utf-8",
    ) -> "SourceFile":
        """
        Create source file from content string.

        Args:
            file_path: File path (used for language detection and reports)
            content: Source code content
            language: Language override (auto-detected if None)
            encoding: File encoding

        Returns:
            SourceFile instance
        """
        if language is None:
            language = cls.detect_language(file_path)
        return cls(file_path=file_path, content=content, language=language, encoding=encoding)

    @staticmethod
    def detect_language(file_path: str | Path) -> str:
        from .parser_registry import get_registry

        language = get_registry().detect_language(file_path)
        if language is None:
            raise UnsupportedLanguageError(f"Could not detect language for: {file_path}", file_path=str(file_path))
        return language

    @property
    def data(self) -> bytes:
        """Encoded content; tree-sitter offsets index into this"""
        if self._data is None:
            self._data = self.content.encode(self.encoding)
        return self._data

    def text_at(self, start_byte: int, end_byte: int) -> str:
        """Decode the source text of a byte range"""
        return self.data[start_byte:end_byte].decode(self.encoding)
