"""
Result models shared by the engine, the rules and the linter.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Rule severity (ESLint-compatible spelling)"""

    OFF = "off"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Span:
    """
    Source code location (immutable).

    Attributes:
        start_line: Starting line number (1-indexed)
        start_col: Starting column (0-indexed)
        end_line: Ending line number (1-indexed)
        end_col: Ending column (0-indexed)
    """

    start_line: int
    start_col: int
    end_line: int
    end_col: int


@dataclass(frozen=True, slots=True)
class Fix:
    """
    Textual patch: replace source bytes [start_byte, end_byte) with text.
    """

    start_byte: int
    end_byte: int
    text: str


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """
    One reported problem.

    Attributes:
        rule_id: Reporting rule (e.g. "no-implicit-boolean-signal")
        message_id: Stable message key within the rule
        message: Human-readable message
        severity: Effective severity from the configuration
        span: Location of the reported node
        start_byte: Start offset of the reported node
        end_byte: End offset of the reported node
        fix: Optional automated rewrite
        data: Extra facts about the finding (e.g. how a signal was detected)
    """

    rule_id: str
    message_id: str
    message: str
    severity: Severity
    span: Span
    start_byte: int
    end_byte: int
    fix: Fix | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def fixable(self) -> bool:
        return self.fix is not None

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation (used by the CLI json formatter)"""
        result: dict[str, Any] = {
            "ruleId": self.rule_id,
            "messageId": self.message_id,
            "message": self.message,
            "severity": self.severity.value,
            "line": self.span.start_line,
            "column": self.span.start_col,
            "endLine": self.span.end_line,
            "endColumn": self.span.end_col,
        }
        if self.fix is not None:
            result["fix"] = {
                "range": [self.fix.start_byte, self.fix.end_byte],
                "text": self.fix.text,
            }
        if self.data:
            result["data"] = dict(self.data)
        return result


@dataclass(slots=True)
class LintResult:
    """
    Outcome of linting one file.

    `error` is set when the analysis of the file failed as a whole
    (engine-level fault); diagnostics are then empty.
    """

    file_path: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    parse_error_count: int = 0
    fixed_source: str | None = None
    error: Exception | None = None

    @property
    def is_partial(self) -> bool:
        return self.parse_error_count > 0

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.WARN)

    @property
    def fixable_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.fixable)

    def to_dict(self) -> dict[str, Any]:
        return {
            "filePath": self.file_path,
            "messages": [d.to_dict() for d in self.diagnostics],
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
            "fixableCount": self.fixable_count,
            "parseErrorCount": self.parse_error_count,
            "fatal": str(self.error) if self.error is not None else None,
        }
