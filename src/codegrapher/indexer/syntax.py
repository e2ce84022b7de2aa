"""Node categories of the tree-sitter Swift grammar and text rendering helpers."""
from __future__ import annotations

from typing import List, Optional

from tree_sitter import Node

# struct, enum, extension and actor share the class_declaration node type and
# are told apart by their declaration_kind field.
TYPE_DECLARATION_NODE_TYPES = {
    "class_declaration",
    "protocol_declaration",
}

PROPERTY_NODE_TYPES = {
    "property_declaration",
    "protocol_property_declaration",
}

FUNCTION_NODE_TYPES = {
    "function_declaration",
    "protocol_function_declaration",
}

# a generic constructor call such as Foo<Int>() is a constructor_expression
CALL_NODE_TYPES = {"call_expression", "constructor_expression"}
CALL_SUFFIX_NODE_TYPES = {"call_suffix", "constructor_suffix"}
PARAMETER_NODE_TYPE = "parameter"
PATTERN_NODE_TYPE = "pattern"
TYPE_ANNOTATION_NODE_TYPE = "type_annotation"
INHERITANCE_NODE_TYPE = "inheritance_specifier"
COMMENT_NODE_TYPES = {"comment", "multiline_comment"}


def node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8")


def field_text(node: Node, field_name: str, source: bytes) -> Optional[str]:
    """Trimmed text of the first child tagged with ``field_name``.

    Some releases of the Swift grammar tag several siblings with one field
    (a function's ``name`` also covers its return type), so only the first
    tagged child is trusted.
    """
    tagged = node.child_by_field_name(field_name)
    if tagged is None:
        return None
    return node_text(tagged, source).strip()


def span_text(nodes: List[Node], source: bytes) -> Optional[str]:
    """Render consecutive sibling nodes as one trimmed string.

    ``String`` and ``!`` of an implicitly unwrapped type are two siblings.
    """
    if not nodes:
        return None
    rendered = source[nodes[0].start_byte : nodes[-1].end_byte].decode("utf-8")
    return rendered.strip() or None
