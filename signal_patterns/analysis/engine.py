"""
Analysis Engine

One depth-first enter/exit traversal per file:

    enter node
      ├─ push the scope the node owns
      ├─ run the origin rules on bindings the node declares (registry)
      ├─ open render region / tracked computation
      └─ classify reads and hand them to the enabled rules
    exit node
      └─ close what was opened, in reverse order

All state (scope stack, region tracker, registry, diagnostic sink) belongs
to one Engine instance and is never shared, so files can be analysed in
parallel by independent engines.
"""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from tree_sitter import Node as TSNode

from signal_patterns.analysis import syntax
from signal_patterns.analysis.context import ContextClassifier
from signal_patterns.analysis.registry import Detection, SignalRegistry
from signal_patterns.analysis.regions import TRACKED_CALLEES, RegionTracker
from signal_patterns.analysis.scope import Scope, ScopeAnalyzer, ScopeTree
from signal_patterns.errors import AnalysisError
from signal_patterns.models import Diagnostic, Fix, Severity
from signal_patterns.observability import get_logger
from signal_patterns.parsing import AstTree

if TYPE_CHECKING:
    from signal_patterns.rules.base import Rule

logger = get_logger(__name__)


class RuleContext:
    """
    Per-file, per-rule reporting handle.

    Wraps the diagnostic sink with the rule's id, severity and messages,
    and exposes the signal detection chain at the current traversal point.
    """

    def __init__(self, rule: "Rule", severity: Severity, engine: "Engine"):
        self.rule = rule
        self.severity = severity
        self._engine = engine

    @property
    def file_path(self) -> str:
        return self._engine.tree.source.file_path

    @property
    def options(self) -> BaseModel:
        return self.rule.options

    def detect_signal(self, identifier: TSNode) -> Detection | None:
        """Signal detection for an identifier in the current scope"""
        return self._engine.detect_signal(identifier)

    def replace_text(self, node: TSNode, text: str) -> Fix:
        return Fix(start_byte=node.start_byte, end_byte=node.end_byte, text=text)

    def report(
        self,
        node: TSNode,
        message_id: str,
        fix: Fix | None = None,
        data: dict[str, Any] | None = None,
    ) -> Diagnostic:
        meta = self.rule.meta
        if message_id not in meta.messages:
            raise KeyError(f"Unknown message id {message_id!r} for rule {meta.rule_id}")

        diagnostic = Diagnostic(
            rule_id=meta.rule_id,
            message_id=message_id,
            message=meta.messages[message_id],
            severity=self.severity,
            span=self._engine.tree.get_span(node),
            start_byte=node.start_byte,
            end_byte=node.end_byte,
            fix=fix if meta.fixable else None,
            data=data or {},
        )
        self._engine.sink.append(diagnostic)
        return diagnostic


class Engine:
    """
    Single-run analysis of one parsed file.

    Usage:
        engine = Engine(tree, [(NoImplicitBooleanSignal(), Severity.ERROR)])
        diagnostics = engine.run()

    Thread-Safety: one instance per file and per thread.
    """

    def __init__(
        self,
        tree: AstTree,
        rules: list[tuple["Rule", Severity]],
        naming_convention: bool = True,
        tracked_callees: frozenset[str] = TRACKED_CALLEES,
        scope_tree: ScopeTree | None = None,
    ):
        self.tree = tree
        self.scope_tree = scope_tree
        self.registry = SignalRegistry(naming_convention=naming_convention)
        self.tracker = RegionTracker(tracked_callees)
        self.classifier = ContextClassifier(self.tracker)
        self.sink: list[Diagnostic] = []

        self._contexts = [
            RuleContext(rule, severity, self) for rule, severity in rules if severity != Severity.OFF
        ]
        self._scopes: list[Scope] = []
        self._tracked_calls: list[TSNode] = []
        self._done = False

    @property
    def current_scope(self) -> Scope | None:
        return self._scopes[-1] if self._scopes else None

    def detect_signal(self, identifier: TSNode) -> Detection | None:
        return self.registry.classify(syntax.node_text(identifier), self.current_scope)

    def run(self) -> list[Diagnostic]:
        """
        Walk the tree once and return diagnostics in document order.

        Raises:
            AnalysisError: On any internal fault (one error for the whole file)
        """
        if self._done:
            raise AnalysisError("Engine instances are single-use", file_path=self.tree.source.file_path)
        self._done = True

        if not self._contexts:
            return []

        if self.scope_tree is None:
            self.scope_tree = ScopeAnalyzer(self.tree).analyze()

        node: TSNode | None = None
        try:
            for node, entering in self.tree.events():
                if entering:
                    self._enter(node)
                else:
                    self._exit(node)
            self.tracker.assert_balanced()
        except AnalysisError as e:
            e.context.setdefault("file_path", self.tree.source.file_path)
            if node is not None:
                e.context.setdefault("line", node.start_point[0] + 1)
            raise
        except Exception as e:
            raise AnalysisError(
                f"Internal error while analysing: {e}",
                file_path=self.tree.source.file_path,
                line=node.start_point[0] + 1 if node is not None else None,
                node_type=node.type if node is not None else None,
            ) from e

        logger.debug(
            "analysis_done",
            file_path=self.tree.source.file_path,
            diagnostics=len(self.sink),
            signals=sorted(self.registry.names),
        )
        return self.sink

    # ============================================================
    # Traversal events
    # ============================================================

    def _enter(self, node: TSNode) -> None:
        scope = self.scope_tree.scope_owned_by(node)
        if scope is not None:
            self._scopes.append(scope)

        for binding in self.scope_tree.declared_at(node):
            self.registry.observe(binding)

        if syntax.is_render_region(node):
            self.tracker.enter_render()

        if node.type == "call_expression":
            name = syntax.callee_name(node)
            if self.tracker.is_tracked_callee(name):
                self.tracker.enter_tracked(name)
                self._tracked_calls.append(node)

        if node.type == "member_expression":
            read = self.classifier.value_read(node)
            if read is not None:
                for ctx in self._contexts:
                    self._dispatch(ctx, ctx.rule.check_value_read, read, node)

        elif node.type == "identifier" and self._is_reference(node):
            read = self.classifier.container_read(node)
            for ctx in self._contexts:
                self._dispatch(ctx, ctx.rule.check_container_read, read, node)

    def _exit(self, node: TSNode) -> None:
        if self._tracked_calls and self._tracked_calls[-1] == node:
            self._tracked_calls.pop()
            self.tracker.exit_tracked(syntax.callee_name(node))

        if syntax.is_render_region(node):
            self.tracker.exit_render()

        if self._scopes and self._scopes[-1].node == node:
            self._scopes.pop()

    def _is_reference(self, node: TSNode) -> bool:
        """Identifier that reads a variable (not a declaration, member object or write target)"""
        if self.scope_tree.is_binding_site(node):
            return False
        parent = node.parent
        if parent is not None and parent.type in syntax.NON_REFERENCE_PARENTS:
            return False
        if syntax.is_member_object(node):
            return False
        return not syntax.is_write_target(node)

    def _dispatch(self, ctx: RuleContext, hook, read, node: TSNode) -> None:
        try:
            hook(read, ctx)
        except AnalysisError:
            raise
        except Exception as e:
            raise AnalysisError(
                f"Rule {ctx.rule.meta.rule_id} failed: {e}",
                rule_id=ctx.rule.meta.rule_id,
                file_path=self.tree.source.file_path,
                line=node.start_point[0] + 1,
            ) from e
