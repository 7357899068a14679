"""Find the first undocumented declaration in a TypeScript buffer.

The walk is a pre-order traversal that stops at the first eligible match, so a
declaration nested inside an earlier match is never returned. Callers that
document one declaration at a time therefore see outer declarations first.
"""

from tree_sitter import Node

from docsplice.core.parsing import node_text, parse_source
from docsplice.models import DeclarationKind, DeclarationNode

_DECLARATION_KINDS = {
    "method_definition": DeclarationKind.METHOD,
    "abstract_method_signature": DeclarationKind.METHOD,
    "method_signature": DeclarationKind.METHOD,
    "function_declaration": DeclarationKind.FUNCTION,
    "generator_function_declaration": DeclarationKind.FUNCTION,
    "function_signature": DeclarationKind.FUNCTION,
    "class_declaration": DeclarationKind.CLASS,
    "abstract_class_declaration": DeclarationKind.CLASS,
    "interface_declaration": DeclarationKind.INTERFACE,
    "type_alias_declaration": DeclarationKind.TYPE_ALIAS,
}

_KIND_FILTERS = {
    "method": {DeclarationKind.METHOD, DeclarationKind.FUNCTION},
    "function": {DeclarationKind.METHOD, DeclarationKind.FUNCTION},
    "class": {DeclarationKind.CLASS},
    "interface": {DeclarationKind.INTERFACE},
    "type": {DeclarationKind.TYPE_ALIAS},
}

# Nodes whose syntax belongs to the declaration they wrap (export, declare).
_WRAPPER_TYPES = frozenset({"export_statement", "ambient_declaration"})

RESERVED_PREFIXES = ("lc_", "_")
RESERVED_NAMES = frozenset({"serialize", "deserialize"})


def _declaration_kind(node: Node) -> DeclarationKind | None:
    kind = _DECLARATION_KINDS.get(node.type)
    if kind is None:
        return None
    if node.type == "method_signature":
        # Overload signatures in a class body; interface members are not methods.
        parent = node.parent
        return kind if parent is not None and parent.type == "class_body" else None
    if node.type == "method_definition":
        if any(not child.is_named and child.type in ("get", "set") for child in node.children):
            return None
        name = node.child_by_field_name("name")
        if name is not None and node_text(name) == "constructor":
            return None
    return kind


def _anchor(node: Node) -> Node:
    """Return the outermost node that still belongs to *node*'s own syntax."""
    anchor = node
    previous = anchor.prev_named_sibling
    while previous is not None and previous.type == "decorator":
        anchor = previous
        previous = anchor.prev_named_sibling
    while anchor.parent is not None and anchor.parent.type in _WRAPPER_TYPES:
        anchor = anchor.parent
    return anchor


def _has_leading_comment(anchor: Node) -> bool:
    previous = anchor.prev_sibling
    if previous is None or previous.type != "comment":
        return False
    before = previous.prev_sibling
    # A comment on the same line as the preceding token trails that token.
    return before is None or before.end_point[0] < previous.start_point[0]


def _leading_start(anchor: Node) -> int:
    previous = anchor.prev_sibling
    if previous is not None:
        return previous.end_byte
    parent = anchor.parent
    # The root node starts after leading whitespace, not at byte 0.
    if parent is None or parent.parent is None:
        return 0
    return parent.start_byte


def is_reserved_name(name: str) -> bool:
    return name.startswith(RESERVED_PREFIXES) or name in RESERVED_NAMES


def _match(node: Node, name: str | None, kinds: set[DeclarationKind] | None) -> DeclarationNode | None:
    kind = _declaration_kind(node)
    if kind is None or (kinds is not None and kind not in kinds):
        return None
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return None
    declared_name = node_text(name_node)
    if name is not None and declared_name != name:
        return None
    if is_reserved_name(declared_name):
        return None
    anchor = _anchor(node)
    if _has_leading_comment(anchor):
        return None
    return DeclarationNode(
        kind=kind,
        name=declared_name,
        start_byte=anchor.start_byte,
        end_byte=node.end_byte,
        leading_start_byte=_leading_start(anchor),
        start_row=anchor.start_point[0],
    )


def find_declaration(root: Node, name: str | None = None, kind: str | None = None) -> DeclarationNode | None:
    """Return the first eligible declaration under *root* in pre-order, or None."""
    kinds: set[DeclarationKind] | None = None
    if kind is not None:
        if kind not in _KIND_FILTERS:
            raise ValueError(f"Unsupported declaration kind '{kind}'. Supported: {sorted(_KIND_FILTERS)}")
        kinds = _KIND_FILTERS[kind]
    stack = [root]
    while stack:
        node = stack.pop()
        found = _match(node, name, kinds)
        if found is not None:
            return found
        stack.extend(reversed(node.children))
    return None


def locate_declaration(
    source: bytes,
    name: str | None = None,
    kind: str | None = None,
    language: str = "typescript",
) -> DeclarationNode | None:
    """Parse *source* and return its first undocumented declaration matching the filters."""
    tree = parse_source(source, language)
    return find_declaration(tree.root_node, name, kind)
