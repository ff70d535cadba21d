"""
Node-shape helpers over the tree-sitter JavaScript / TypeScript grammars.

Everything that knows grammar node type names or field names lives here,
so the scope analyzer, the classifier and the engine stay grammar-agnostic.
"""

from tree_sitter import Node as TSNode

# ============================================================
# Constants (node types)
# ============================================================

FUNCTION_TYPES = frozenset(
    [
        "function_declaration",
        "generator_function_declaration",
        "function_expression",
        "function",  # older grammars name function expressions "function"
        "generator_function",
        "arrow_function",
        "method_definition",
    ]
)

# Function-like nodes whose name is bound in the enclosing scope
HOISTED_FUNCTION_TYPES = frozenset(["function_declaration", "generator_function_declaration"])

BLOCK_SCOPE_TYPES = frozenset(["statement_block", "switch_body", "class_body"])

FOR_SCOPE_TYPES = frozenset(["for_statement", "for_in_statement"])

# JSX nodes that open a render region
RENDER_REGION_TYPES = frozenset(
    [
        "jsx_element",
        "jsx_self_closing_element",
        "jsx_fragment",
        "jsx_expression",
    ]
)

ASSIGNMENT_TYPES = frozenset(["assignment_expression", "augmented_assignment_expression"])

# Destructuring targets: every slot is written
DESTRUCTURING_PATTERN_TYPES = frozenset(["array_pattern", "object_pattern", "rest_pattern"])

# `target = default` inside a pattern: only `left` is written
DEFAULT_PATTERN_TYPES = frozenset(["assignment_pattern", "object_assignment_pattern"])

# Parents whose identifier children name something instead of reading it
NON_REFERENCE_PARENTS = frozenset(
    [
        "import_specifier",
        "import_clause",
        "namespace_import",
        "export_specifier",
        "namespace_export",
        "labeled_statement",
        "break_statement",
        "continue_statement",
    ]
)

VALUE_PROPERTY = "value"


def node_text(node: TSNode) -> str:
    """Source text of a node (trees are never edited, so node.text is valid)"""
    text = node.text
    return text.decode("utf-8", errors="replace") if text is not None else ""


def is_function(node: TSNode) -> bool:
    return node.is_named and node.type in FUNCTION_TYPES


def is_function_body(node: TSNode) -> bool:
    """statement_block that is the body of a function (shares the function scope)"""
    parent = node.parent
    if parent is None or not is_function(parent):
        return False
    return parent.child_by_field_name("body") == node


def is_catch_body(node: TSNode) -> bool:
    parent = node.parent
    return parent is not None and parent.type == "catch_clause" and parent.child_by_field_name("body") == node


def is_render_region(node: TSNode) -> bool:
    return node.type in RENDER_REGION_TYPES


def callee_name(call: TSNode) -> str | None:
    """
    Name of a call's callee when it is a plain identifier.

    signal(0)       → "signal"
    x.signal(0)     → None
    signal<T>(0)    → "signal" (TypeScript type arguments are a separate field)
    """
    if call.type != "call_expression":
        return None
    function = call.child_by_field_name("function")
    if function is None or function.type != "identifier":
        return None
    return node_text(function)


def string_value(node: TSNode) -> str:
    """Contents of a string literal without its quotes"""
    text = node_text(node)
    if len(text) >= 2 and text[0] in "'\"`" and text[-1] == text[0]:
        return text[1:-1]
    return text


def unwrap_parens(node: TSNode) -> tuple[TSNode, TSNode | None]:
    """
    Skip enclosing parenthesized_expression nodes.

    Returns:
        (outermost parenthesized wrapper or the node itself, its parent)
    """
    child = node
    parent = node.parent
    while parent is not None and parent.type == "parenthesized_expression":
        child = parent
        parent = parent.parent
    return child, parent


def strip_parens(node: TSNode) -> TSNode:
    """Innermost expression of `((x))`; other nodes are returned unchanged"""
    while node.type == "parenthesized_expression" and node.named_child_count == 1:
        node = node.named_children[0]
    return node


def is_value_access(node: TSNode) -> bool:
    """
    `name.value` or `(name).value` where `name` is a plain identifier.

    Computed access (`name["value"]`) is a subscript_expression and never matches.
    """
    if node.type != "member_expression":
        return False
    obj = node.child_by_field_name("object")
    prop = node.child_by_field_name("property")
    if obj is None or prop is None:
        return False
    return (
        strip_parens(obj).type == "identifier"
        and prop.type == "property_identifier"
        and node_text(prop) == VALUE_PROPERTY
    )


def is_write_target(node: TSNode) -> bool:
    """
    Left side of =, +=, ..., operand of ++ / --, or a slot of a destructuring
    target (`[a.value] = xs`, `({ k: a.value } = o)`, `for (a.value of xs)`).

    Default values and computed keys inside a pattern stay reads.
    """
    child, parent = unwrap_parens(node)
    while parent is not None:
        if parent.type in ASSIGNMENT_TYPES or parent.type == "for_in_statement":
            return parent.child_by_field_name("left") == child
        if parent.type == "update_expression":
            return parent.child_by_field_name("argument") == child
        if parent.type == "pair_pattern":
            if parent.child_by_field_name("value") != child:
                return False
        elif parent.type in DEFAULT_PATTERN_TYPES:
            if parent.child_by_field_name("left") != child:
                return False
        elif parent.type not in DESTRUCTURING_PATTERN_TYPES:
            return False
        child, parent = unwrap_parens(parent)
    return False


def is_member_object(node: TSNode) -> bool:
    """`node` is the object of a property access (node.prop / node?.prop / (node).prop)"""
    child, parent = unwrap_parens(node)
    return (
        parent is not None
        and parent.type == "member_expression"
        and parent.child_by_field_name("object") == child
    )


def operator_of(node: TSNode) -> str | None:
    op = node.child_by_field_name("operator")
    return op.type if op is not None else None


def pattern_identifiers(node: TSNode | None) -> list[TSNode]:
    """
    Identifiers bound by a declaration pattern.

    const { a, b: [c, d = 1], ...rest } = x   → a, c, d, rest
    """
    if node is None:
        return []

    t = node.type
    if t in ("identifier", "shorthand_property_identifier_pattern"):
        return [node]
    if t == "pair_pattern":
        return pattern_identifiers(node.child_by_field_name("value"))
    if t in ("assignment_pattern", "object_assignment_pattern"):
        return pattern_identifiers(node.child_by_field_name("left"))
    if t in ("required_parameter", "optional_parameter"):
        return pattern_identifiers(node.child_by_field_name("pattern"))
    if t in ("object_pattern", "array_pattern", "rest_pattern"):
        found: list[TSNode] = []
        for child in node.named_children:
            found.extend(pattern_identifiers(child))
        return found
    return []


def function_parameters(function: TSNode) -> list[TSNode]:
    """Identifiers bound by a function's parameter list"""
    single = function.child_by_field_name("parameter")
    if single is not None:
        return pattern_identifiers(single)

    params = function.child_by_field_name("parameters")
    if params is None:
        return []

    found: list[TSNode] = []
    for param in params.named_children:
        found.extend(pattern_identifiers(param))
    return found
