"""
Standardized Error Handling for signal-patterns

Hierarchical exception classes with error codes and context.

Only two kinds of failures ever leave the package:
    1. Configuration problems, raised before any file is analysed
    2. Engine-level faults, one per file, never mixed with diagnostics

Findings about the analysed code are diagnostics, not exceptions.
"""

from typing import Any


class SignalPatternsError(Exception):
    """Base exception for all signal-patterns errors.

    Includes error code for programmatic handling and context for debugging.

    Example:
        raise SignalPatternsError(
            code="ANALYSIS_ERROR",
            message="Render region exited more often than entered",
            file_path="App.tsx",
        )
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")

    def __repr__(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r}, {ctx_str})"


# ==============================================================================
# Configuration Errors
# ==============================================================================


class ConfigurationError(SignalPatternsError):
    """Invalid configuration (unknown rule, bad severity, bad rule option)."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="CONFIGURATION_ERROR", message=message, **context)


# ==============================================================================
# Parsing Errors
# ==============================================================================


class ParsingError(SignalPatternsError):
    """Source could not be read or parsed at all."""

    def __init__(self, message: str, code: str = "PARSING_ERROR", **context: Any) -> None:
        super().__init__(code=code, message=message, **context)


class UnsupportedLanguageError(ParsingError):
    """File extension / language has no registered grammar."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, code="UNSUPPORTED_LANGUAGE", **context)


# ==============================================================================
# Analysis Errors
# ==============================================================================


class AnalysisError(SignalPatternsError):
    """Internal fault while walking one file (malformed tree, rule crash)."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(code="ANALYSIS_ERROR", message=message, **context)


__all__ = [
    "SignalPatternsError",
    "ConfigurationError",
    "ParsingError",
    "UnsupportedLanguageError",
    "AnalysisError",
]
