"""
Lint test helpers.

Helper functions for picking nodes and diagnostics in tests.
"""

from tree_sitter import Node

from signal_patterns.models import Diagnostic, LintResult
from signal_patterns.parsing import AstTree

OUTSIDE_HOOKS = "no-signal-value-outside-hooks"
IN_JSX = "no-signal-value-in-jsx"
IMPLICIT_BOOLEAN = "no-implicit-boolean-signal"


def identifiers(tree: AstTree, name: str) -> list[Node]:
    """All `identifier` nodes spelled `name`, in document order"""
    return [n for n in tree.find_by_type("identifier") if tree.get_text(n) == name]


def by_rule(result: LintResult, rule_id: str) -> list[Diagnostic]:
    return [d for d in result.diagnostics if d.rule_id == rule_id]


def lines(diagnostics: list[Diagnostic]) -> list[int]:
    return [d.span.start_line for d in diagnostics]
