from __future__ import annotations

from typing import List, Optional, Tuple

from tree_sitter import Node

from ..models.records import EntityRecord
from .syntax import INHERITANCE_NODE_TYPE, field_text, node_text

EXTENSION_PREFIX = "Extension_of_"

# declaration keyword -> entity kind; actors are reported as classes
DECLARATION_KEYWORDS = {
    "class": "class",
    "actor": "class",
    "struct": "struct",
    "enum": "enum",
    "protocol": "protocol",
    "extension": "extension",
}


def build_entity(node: Node, source: bytes) -> Optional[EntityRecord]:
    """Read a type declaration node into an empty entity record.

    Returns ``None`` for a declaration the parser could not give a name to.
    """
    kind = declaration_kind(node)
    declared_name = field_text(node, "name", source)
    if not declared_name:
        return None
    names = inherited_type_names(node, source)
    if kind == "extension":
        # an extension cannot add a superclass, only conformances
        name = f"{EXTENSION_PREFIX}{declared_name}"
        inherited, conformed = [], names
    else:
        name = declared_name
        inherited, conformed = partition_inheritance(names)
    return EntityRecord(
        name=name,
        kind=kind,
        inherited_types=inherited,
        conformed_protocols=conformed,
    )


def declaration_kind(node: Node) -> str:
    if node.type == "protocol_declaration":
        return "protocol"
    for child in node.children:
        kind = DECLARATION_KEYWORDS.get(child.type)
        if kind:
            return kind
    return node.type.replace("_declaration", "")


def inherited_type_names(node: Node, source: bytes) -> List[str]:
    names: List[str] = []
    for child in node.children:
        if child.type != INHERITANCE_NODE_TYPE:
            continue
        rendered = field_text(child, "inherits_from", source)
        if rendered is None:
            rendered = node_text(child, source).strip()
        if rendered:
            names.append(rendered)
    return names


def partition_inheritance(names: List[str]) -> Tuple[List[str], List[str]]:
    """Split an inheritance clause into (superclasses, protocols) by position.

    The first entry is taken to be a superclass and every other entry a
    protocol. Swift does not mark the difference syntactically, so a clause
    that lists only protocols has its first protocol reported as a superclass.
    """
    if not names:
        return [], []
    return [names[0]], list(names[1:])
