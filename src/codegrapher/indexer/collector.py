from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from tree_sitter import Node

from ..graph import GraphStore
from ..models.records import EntityRecord
from .calls import callee_text
from .entities import build_entity
from .signatures import build_method, extract_properties
from .syntax import (
    CALL_NODE_TYPES,
    FUNCTION_NODE_TYPES,
    PROPERTY_NODE_TYPES,
    TYPE_DECLARATION_NODE_TYPES,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _EntityFrame:
    node_id: int
    entity: EntityRecord
    # (function node id, index into entity.methods), innermost last
    open_methods: List[Tuple[int, int]] = field(default_factory=list)


class DependencyCollector:
    """Walk a Swift syntax tree and record entities into a graph store.

    The walk is depth-first and pre-order with an exit event for every node.
    Open type declarations form a stack of frames and each frame keeps its own
    stack of open functions, so members and calls always go to the
    immediately enclosing declaration and the outer context comes back when a
    nested one closes.
    """

    def __init__(self, store: GraphStore) -> None:
        self.store = store
        self._frames: List[_EntityFrame] = []

    def walk(self, root: Node, source: bytes) -> GraphStore:
        cursor = root.walk()
        children_done = False
        while True:
            if not children_done:
                self._enter(cursor.node, source)
                if cursor.goto_first_child():
                    continue
            self._exit(cursor.node)
            if cursor.goto_next_sibling():
                children_done = False
            elif cursor.goto_parent():
                children_done = True
            else:
                break
        self._frames.clear()
        return self.store

    # --- events ---
    def _enter(self, node: Node, source: bytes) -> None:
        node_type = node.type
        if node_type in TYPE_DECLARATION_NODE_TYPES:
            self._open_entity(node, source)
        elif node_type in PROPERTY_NODE_TYPES:
            self._record_properties(node, source)
        elif node_type in FUNCTION_NODE_TYPES:
            self._open_method(node, source)
        elif node_type in CALL_NODE_TYPES:
            self._record_call(node, source)

    def _exit(self, node: Node) -> None:
        frame = self._current_frame()
        if frame is None:
            return
        if frame.open_methods and frame.open_methods[-1][0] == node.id:
            frame.open_methods.pop()
        elif frame.node_id == node.id:
            self._frames.pop()

    # --- handlers ---
    def _open_entity(self, node: Node, source: bytes) -> None:
        entity = build_entity(node, source)
        if entity is None:
            logger.debug("Skipping unnamed %s at byte %d", node.type, node.start_byte)
            return
        target = self.store.register(entity)
        self._frames.append(_EntityFrame(node_id=node.id, entity=target))

    def _record_properties(self, node: Node, source: bytes) -> None:
        frame = self._current_frame()
        if frame is None:
            return
        frame.entity.properties.extend(extract_properties(node, source))

    def _open_method(self, node: Node, source: bytes) -> None:
        frame = self._current_frame()
        if frame is None:
            return
        method = build_method(node, source)
        if method is None:
            return
        frame.entity.methods.append(method)
        frame.open_methods.append((node.id, len(frame.entity.methods) - 1))

    def _record_call(self, node: Node, source: bytes) -> None:
        frame = self._current_frame()
        if frame is None or not frame.open_methods:
            return
        callee = callee_text(node, source)
        if callee is None:
            return
        _, index = frame.open_methods[-1]
        frame.entity.methods[index].calls.append(callee)

    def _current_frame(self) -> Optional[_EntityFrame]:
        return self._frames[-1] if self._frames else None
