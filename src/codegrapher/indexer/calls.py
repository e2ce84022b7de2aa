from __future__ import annotations

from typing import Optional

from tree_sitter import Node

from .syntax import CALL_SUFFIX_NODE_TYPES, COMMENT_NODE_TYPES, node_text


def callee_text(node: Node, source: bytes) -> Optional[str]:
    """Render the callee of a call expression exactly as written.

    ``player.play(sound)`` gives ``player.play`` and ``Box<Int>()`` gives
    ``Box<Int>``. The argument list is not part of the reference and nothing
    is resolved against declared types.
    """
    for child in node.children:
        if child.type in CALL_SUFFIX_NODE_TYPES:
            break
        if child.is_named and child.type not in COMMENT_NODE_TYPES:
            return node_text(child, source).strip() or None
    return None
