"""
Context Classifier

Classifies a read by the shape of its parent node.

| Parent shape                                   | Context  |
|------------------------------------------------|----------|
| operand of `!`                                 | BOOLEAN  |
| test of if / ?: / while / do-while / for       | BOOLEAN  |
| operand of `&&` / `||`                         | BOOLEAN  |
| operand of `??`                                | NULLISH  |
| inside a render region (JSX)                   | RENDER   |
| inside a tracked computation                   | TRACKED  |
| anything else                                  | NONE     |

Parentheses are transparent: `if ((x))` and `!(x)` classify like `if (x)` / `!x`.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from tree_sitter import Node as TSNode

from signal_patterns.analysis import syntax
from signal_patterns.analysis.regions import RegionTracker


class ReadContext(str, Enum):
    BOOLEAN = "boolean"
    NULLISH = "nullish"
    RENDER = "render"
    TRACKED = "tracked"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class ValueRead:
    """
    `name.value` read (never an assignment / update target).

    Attributes:
        node: The member_expression
        object_node: Identifier holding the (possible) signal
        property_node: The `value` property identifier
        name: Object identifier text
        context: Single classification (coercion shape first, then region)
        region: RENDER / TRACKED / NONE only
    """

    node: TSNode
    object_node: TSNode
    property_node: TSNode
    name: str
    context: ReadContext
    region: ReadContext


@dataclass(frozen=True, slots=True)
class ContainerRead:
    """
    Bare identifier reference (the container itself, not its value).

    Attributes:
        node: The identifier
        name: Identifier text
        context: Single classification
        coercion: BOOLEAN / NULLISH / NONE only
    """

    node: TSNode
    name: str
    context: ReadContext
    coercion: ReadContext


def _test_position(child: TSNode, parent: TSNode) -> ReadContext | None:
    if parent.child_by_field_name("condition") == child:
        return ReadContext.BOOLEAN
    return None


def _for_test_statement(child: TSNode, parent: TSNode) -> ReadContext | None:
    # Older grammars wrap the for condition in an expression_statement
    grandparent = parent.parent
    if grandparent is not None and grandparent.type == "for_statement":
        return _test_position(parent, grandparent)
    return None


def _negation(child: TSNode, parent: TSNode) -> ReadContext | None:
    if syntax.operator_of(parent) == "!":
        return ReadContext.BOOLEAN
    return None


def _logical(child: TSNode, parent: TSNode) -> ReadContext | None:
    operator = syntax.operator_of(parent)
    if operator in ("&&", "||"):
        return ReadContext.BOOLEAN
    if operator == "??":
        return ReadContext.NULLISH
    return None


_COERCION_SHAPES: dict[str, Callable[[TSNode, TSNode], ReadContext | None]] = {
    "unary_expression": _negation,
    "if_statement": _test_position,
    "ternary_expression": _test_position,
    "while_statement": _test_position,
    "do_statement": _test_position,
    "for_statement": _test_position,
    "expression_statement": _for_test_statement,
    "binary_expression": _logical,
}


class ContextClassifier:
    """
    Maps a read node to its ReadContext.

    Coercion shapes come from the parent-shape table above (unknown shapes
    give NONE); regions come from the shared RegionTracker.
    """

    def __init__(self, tracker: RegionTracker):
        self.tracker = tracker

    def coercion(self, node: TSNode) -> ReadContext:
        child, parent = syntax.unwrap_parens(node)
        if parent is None:
            return ReadContext.NONE

        handler = _COERCION_SHAPES.get(parent.type)
        if handler is None:
            return ReadContext.NONE
        return handler(child, parent) or ReadContext.NONE

    def region(self) -> ReadContext:
        if self.tracker.in_render:
            return ReadContext.RENDER
        if self.tracker.in_tracked:
            return ReadContext.TRACKED
        return ReadContext.NONE

    def classify(self, node: TSNode) -> ReadContext:
        coercion = self.coercion(node)
        if coercion != ReadContext.NONE:
            return coercion
        return self.region()

    def value_read(self, node: TSNode) -> ValueRead | None:
        """Build a ValueRead for `name.value`, None for anything else"""
        if not syntax.is_value_access(node) or syntax.is_write_target(node):
            return None

        obj = syntax.strip_parens(node.child_by_field_name("object"))
        prop = node.child_by_field_name("property")
        return ValueRead(
            node=node,
            object_node=obj,
            property_node=prop,
            name=syntax.node_text(obj),
            context=self.classify(node),
            region=self.region(),
        )

    def container_read(self, node: TSNode) -> ContainerRead:
        coercion = self.coercion(node)
        return ContainerRead(
            node=node,
            name=syntax.node_text(node),
            context=coercion if coercion != ReadContext.NONE else self.region(),
            coercion=coercion,
        )
