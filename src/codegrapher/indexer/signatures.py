from __future__ import annotations

from typing import List, Optional

from tree_sitter import Node

from ..models.records import UNKNOWN_TYPE, MethodRecord, ParameterRecord, PropertyRecord
from .syntax import (
    COMMENT_NODE_TYPES,
    PARAMETER_NODE_TYPE,
    PATTERN_NODE_TYPE,
    TYPE_ANNOTATION_NODE_TYPE,
    field_text,
    node_text,
    span_text,
)

# children of a function declaration that end its return clause
RETURN_CLAUSE_END_TYPES = {"function_body", "type_constraints", "{", ";"}


def build_method(node: Node, source: bytes) -> Optional[MethodRecord]:
    name = field_text(node, "name", source)
    if not name:
        return None
    return MethodRecord(
        name=name,
        parameters=extract_parameters(node, source),
        return_type=extract_return_type(node, source),
    )


def extract_parameters(node: Node, source: bytes) -> List[ParameterRecord]:
    """Read the parameter clause of a function declaration.

    ``func move(from start: Int, to: Int)`` gives ``start`` with external
    name ``from`` and ``to`` without one.
    """
    params: List[ParameterRecord] = []
    for child in node.children:
        if child.type != PARAMETER_NODE_TYPE:
            continue
        param = _read_parameter(child, source)
        if param is not None:
            params.append(param)
    return params


def _read_parameter(node: Node, source: bytes) -> Optional[ParameterRecord]:
    # names come before the colon, the type (and a trailing "!") after it
    names: List[Node] = []
    type_nodes: List[Node] = []
    after_colon = False
    for child in node.children:
        if child.type in COMMENT_NODE_TYPES:
            continue
        if after_colon:
            type_nodes.append(child)
        elif child.type == ":":
            after_colon = True
        else:
            names.append(child)
    if not names:
        return None
    external = node_text(names[0], source).strip() if len(names) > 1 else None
    return ParameterRecord(
        external_name=external,
        internal_name=node_text(names[-1], source).strip(),
        type=span_text(type_nodes, source),
    )


def extract_return_type(node: Node, source: bytes) -> Optional[str]:
    """Text between ``->`` and the body; absent, never "", without a clause."""
    type_nodes: List[Node] = []
    in_clause = False
    for child in node.children:
        if child.type == "->":
            in_clause = True
        elif in_clause:
            if child.type in RETURN_CLAUSE_END_TYPES:
                break
            if child.type not in COMMENT_NODE_TYPES:
                type_nodes.append(child)
    return span_text(type_nodes, source)


def extract_properties(node: Node, source: bytes) -> List[PropertyRecord]:
    """Read every identifier bound by a ``var``/``let`` declaration.

    ``var x = 10, y: Int = 2`` yields ``x`` (type Unknown) and ``y`` (Int).
    Destructuring patterns such as ``let (a, b) = pair`` bind no single
    identifier and are skipped.
    """
    properties: List[PropertyRecord] = []
    current: Optional[PropertyRecord] = None
    for child in node.children:
        if child.type == PATTERN_NODE_TYPE:
            current = None
            name = _bound_identifier(child, source)
            if name:
                current = PropertyRecord(name=name)
                properties.append(current)
        elif child.type == TYPE_ANNOTATION_NODE_TYPE and current is not None:
            current.type = _annotation_text(child, source) or UNKNOWN_TYPE
    return properties


def _bound_identifier(pattern: Node, source: bytes) -> Optional[str]:
    if any(child.type == "(" for child in pattern.children):
        return None
    bound = pattern.child_by_field_name("bound_identifier")
    if bound is None:
        identifiers = [c for c in pattern.named_children if c.type == "simple_identifier"]
        if len(identifiers) != 1:
            return None
        bound = identifiers[0]
    return node_text(bound, source).strip() or None


def _annotation_text(annotation: Node, source: bytes) -> Optional[str]:
    type_nodes: List[Node] = []
    after_colon = False
    for child in annotation.children:
        if after_colon:
            type_nodes.append(child)
        elif child.type == ":":
            after_colon = True
    return span_text(type_nodes, source)
