"""JSON encoding of a finished code graph."""
from __future__ import annotations

import json
import logging
from pathlib import Path

from .errors import OutputError
from .graph import GraphStore

logger = logging.getLogger(__name__)


def encode_graph(store: GraphStore) -> str:
    """Encode the graph as one JSON object keyed by entity name.

    Keys are sorted so the output does not depend on file processing order.
    """
    try:
        return json.dumps(store.to_dict(), indent=2, ensure_ascii=False) + "\n"
    except (TypeError, ValueError) as exc:
        raise OutputError(f"Failed to encode graph: {exc}") from exc


def write_graph(store: GraphStore, output_path: Path) -> Path:
    payload = encode_graph(store)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise OutputError(f"Failed to write {output_path}: {exc}") from exc
    logger.info("Wrote %d entities to %s", len(store), output_path)
    return output_path
