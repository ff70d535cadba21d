"""
Scope Model

Lexical scope tree for one parsed file, built in a single pre-pass
(the equivalent of an ESLint scope manager), plus the shadowing lookup
the rules rely on.

Resolution contract:
    Scope.resolve(name) walks the scope chain outward and returns the
    FIRST binding with that name, whatever its origin. A local
    non-signal binding therefore hides an outer signal of the same name.
"""

from dataclasses import dataclass
from enum import Enum

from tree_sitter import Node as TSNode

from signal_patterns.analysis import syntax
from signal_patterns.observability import get_logger
from signal_patterns.parsing import AstTree

logger = get_logger(__name__)


class ScopeKind(str, Enum):
    MODULE = "module"
    FUNCTION = "function"
    BLOCK = "block"
    FOR = "for"
    CATCH = "catch"


class BindingKind(str, Enum):
    IMPORT = "import"
    VARIABLE = "variable"
    PARAMETER = "parameter"
    FUNCTION = "function"
    CLASS = "class"
    CATCH = "catch"


@dataclass(eq=False, slots=True)
class Binding:
    """
    A declared name within one scope.

    Compared and hashed by identity: two bindings with the same name in
    different scopes are different bindings.

    Attributes:
        name: Declared name
        kind: Declaration origin
        node: Identifier node at the binding site
        scope: Owning scope
        declaration: Declaring node (variable_declarator, import_statement, ...)
        import_source: Module specifier for import bindings
        callee: Callee name when a variable is initialised by `callee(...)`
    """

    name: str
    kind: BindingKind
    node: TSNode
    scope: "Scope"
    declaration: TSNode | None = None
    import_source: str | None = None
    callee: str | None = None

    def __repr__(self) -> str:
        line = self.node.start_point[0] + 1
        return f"Binding({self.name!r}, {self.kind.value}, line={line})"


class Scope:
    """Lexical scope: local bindings plus a link to the enclosing scope"""

    def __init__(self, kind: ScopeKind, node: TSNode, parent: "Scope | None" = None):
        self.kind = kind
        self.node = node
        self.parent = parent
        self.bindings: dict[str, Binding] = {}
        self.children: list[Scope] = []
        if parent is not None:
            parent.children.append(self)

    def declare(self, binding: Binding) -> Binding:
        """Add a binding; the first declaration of a name in a scope wins"""
        existing = self.bindings.get(binding.name)
        if existing is not None:
            return existing
        self.bindings[binding.name] = binding
        return binding

    def lookup_local(self, name: str) -> Binding | None:
        return self.bindings.get(name)

    def resolve(self, name: str) -> Binding | None:
        """
        Innermost binding for `name`, or None when no scope declares it.

        Stops at the first match even if that binding is not a signal.
        """
        scope: Scope | None = self
        while scope is not None:
            binding = scope.bindings.get(name)
            if binding is not None:
                return binding
            scope = scope.parent
        return None

    @property
    def variable_scope(self) -> "Scope":
        """Nearest function or module scope (target of `var` declarations)"""
        scope = self
        while scope.kind not in (ScopeKind.FUNCTION, ScopeKind.MODULE) and scope.parent is not None:
            scope = scope.parent
        return scope

    def __repr__(self) -> str:
        return f"Scope({self.kind.value}, line={self.node.start_point[0] + 1}, names={sorted(self.bindings)})"


class ScopeTree:
    """
    Result of scope analysis for one file.

    Scopes are keyed by the id of their owning node; the engine pushes
    and pops them as it enters and exits those nodes.
    """

    def __init__(self, module: Scope):
        self.module = module
        self._scopes: dict[int, Scope] = {}
        self._declarations: dict[int, list[Binding]] = {}
        self._binding_sites: set[int] = set()

    def register_scope(self, scope: Scope) -> None:
        self._scopes[scope.node.id] = scope

    def register_binding(self, binding: Binding, declared: bool = True) -> None:
        self._binding_sites.add(binding.node.id)
        if declared and binding.declaration is not None:
            self._declarations.setdefault(binding.declaration.id, []).append(binding)

    def scope_owned_by(self, node: TSNode) -> Scope | None:
        return self._scopes.get(node.id)

    def scope_for(self, node: TSNode) -> Scope:
        """Innermost scope containing `node` (ancestor walk)"""
        current: TSNode | None = node
        while current is not None:
            scope = self._scopes.get(current.id)
            if scope is not None:
                return scope
            current = current.parent
        return self.module

    def declared_at(self, node: TSNode) -> list[Binding]:
        """Bindings introduced by a declaring node"""
        return self._declarations.get(node.id, [])

    def is_binding_site(self, node: TSNode) -> bool:
        return node.id in self._binding_sites

    def all_scopes(self) -> list[Scope]:
        return list(self._scopes.values())


class ScopeAnalyzer:
    """
    Builds the ScopeTree of a parsed file.

    Declarations are collected before any rule runs, so a reference that
    appears before its declaration (hoisting, later top-level const used
    inside an earlier function) still resolves.
    """

    def __init__(self, tree: AstTree):
        self.tree = tree

    def analyze(self) -> ScopeTree:
        root = self.tree.root
        module = Scope(ScopeKind.MODULE, root)
        result = ScopeTree(module)
        result.register_scope(module)

        stack: list[Scope] = [module]

        for node, entering in self.tree.events():
            if node == root:
                continue

            if not entering:
                if stack[-1].node == node:
                    stack.pop()
                continue

            current = stack[-1]
            new_scope = self._open_scope(node, current)

            self._declare(node, current, new_scope, result)

            if new_scope is not None:
                result.register_scope(new_scope)
                stack.append(new_scope)

        logger.debug(
            "scope_analysis_done",
            file_path=self.tree.source.file_path,
            scopes=len(result.all_scopes()),
        )
        return result

    # ============================================================
    # Private Methods
    # ============================================================

    def _open_scope(self, node: TSNode, current: Scope) -> Scope | None:
        if not node.is_named:
            return None

        t = node.type
        if syntax.is_function(node):
            return Scope(ScopeKind.FUNCTION, node, current)
        if t in syntax.FOR_SCOPE_TYPES:
            return Scope(ScopeKind.FOR, node, current)
        if t == "catch_clause":
            return Scope(ScopeKind.CATCH, node, current)
        if t in syntax.BLOCK_SCOPE_TYPES:
            if syntax.is_function_body(node) or syntax.is_catch_body(node):
                return None
            return Scope(ScopeKind.BLOCK, node, current)
        return None

    def _declare(self, node: TSNode, current: Scope, own: Scope | None, result: ScopeTree) -> None:
        t = node.type

        if t == "variable_declarator":
            self._declare_variable(node, current, result)

        elif t == "import_statement":
            self._declare_imports(node, current.variable_scope, result)

        elif syntax.is_function(node) and own is not None:
            name = node.child_by_field_name("name")
            if name is not None and name.type == "identifier":
                # declarations bind outside, named expressions bind inside
                target = current if t in syntax.HOISTED_FUNCTION_TYPES else own
                self._bind(target, name, BindingKind.FUNCTION, node, result)
            for param in syntax.function_parameters(node):
                self._bind(own, param, BindingKind.PARAMETER, node, result)

        elif t == "class_declaration":
            name = node.child_by_field_name("name")
            if name is not None and name.type in ("identifier", "type_identifier"):
                self._bind(current, name, BindingKind.CLASS, node, result)

        elif t == "catch_clause" and own is not None:
            for ident in syntax.pattern_identifiers(node.child_by_field_name("parameter")):
                self._bind(own, ident, BindingKind.CATCH, node, result)

        elif t == "for_in_statement" and own is not None:
            kind = node.child_by_field_name("kind")
            if kind is not None:
                target = own.variable_scope if kind.type == "var" else own
                for ident in syntax.pattern_identifiers(node.child_by_field_name("left")):
                    self._bind(target, ident, BindingKind.VARIABLE, node, result)

    def _declare_variable(self, declarator: TSNode, current: Scope, result: ScopeTree) -> None:
        declaration = declarator.parent
        is_var = declaration is not None and declaration.type == "variable_declaration"
        target = current.variable_scope if is_var else current

        name = declarator.child_by_field_name("name")
        value = declarator.child_by_field_name("value")

        # Only `name = callee(...)` carries a callee; destructured names do not
        callee = None
        if name is not None and name.type == "identifier" and value is not None:
            callee = syntax.callee_name(value)

        for ident in syntax.pattern_identifiers(name):
            self._bind(target, ident, BindingKind.VARIABLE, declarator, result, callee=callee)

    def _declare_imports(self, statement: TSNode, module: Scope, result: ScopeTree) -> None:
        source_node = statement.child_by_field_name("source")
        source = syntax.string_value(source_node) if source_node is not None else None

        for clause in statement.named_children:
            if clause.type != "import_clause":
                continue
            for item in clause.named_children:
                if item.type == "identifier":
                    # import x from "..."
                    self._bind(module, item, BindingKind.IMPORT, statement, result, import_source=source)
                elif item.type == "namespace_import":
                    # import * as x from "..."
                    for ident in item.named_children:
                        if ident.type == "identifier":
                            self._bind(module, ident, BindingKind.IMPORT, statement, result, import_source=source)
                elif item.type == "named_imports":
                    # import { a, b as c } from "..."
                    for spec in item.named_children:
                        if spec.type != "import_specifier":
                            continue
                        local = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
                        if local is not None and local.type == "identifier":
                            self._bind(module, local, BindingKind.IMPORT, statement, result, import_source=source)

    def _bind(
        self,
        scope: Scope,
        ident: TSNode,
        kind: BindingKind,
        declaration: TSNode,
        result: ScopeTree,
        import_source: str | None = None,
        callee: str | None = None,
    ) -> None:
        binding = Binding(
            name=syntax.node_text(ident),
            kind=kind,
            node=ident,
            scope=scope,
            declaration=declaration,
            import_source=import_source,
            callee=callee,
        )
        # Redeclared names still count as binding sites, never as reads
        declared = scope.declare(binding) is binding
        result.register_binding(binding, declared=declared)
