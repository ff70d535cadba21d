"""
signal-patterns: static checks for Preact signal usage in JS/TS/JSX/TSX.

    from signal_patterns import Linter, LintConfig

    linter = Linter(LintConfig.from_preset("recommended"))
    result = linter.lint_source(code, "Counter.tsx", fix=True)
"""

from signal_patterns.config import LintConfig, RuleSetting, Settings, discover_config, load_config
from signal_patterns.errors import (
    AnalysisError,
    ConfigurationError,
    ParsingError,
    SignalPatternsError,
    UnsupportedLanguageError,
)
from signal_patterns.fixer import FixOutcome, apply_fixes
from signal_patterns.linter import Linter, discover_files
from signal_patterns.models import Diagnostic, Fix, LintResult, Severity, Span
from signal_patterns.presets import PRESETS, Preset, get_preset
from signal_patterns.rules import PLUGIN_NAME, RULES, get_rule

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Linter",
    "discover_files",
    "LintConfig",
    "RuleSetting",
    "Settings",
    "load_config",
    "discover_config",
    "apply_fixes",
    "FixOutcome",
    "PLUGIN_NAME",
    "RULES",
    "get_rule",
    "PRESETS",
    "Preset",
    "get_preset",
    "Diagnostic",
    "Fix",
    "LintResult",
    "Severity",
    "Span",
    "SignalPatternsError",
    "ConfigurationError",
    "ParsingError",
    "UnsupportedLanguageError",
    "AnalysisError",
]
