from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional

from .config import DuplicatePolicy
from .models.records import EntityRecord

logger = logging.getLogger(__name__)


def _union(existing: List[str], incoming: List[str]) -> None:
    for name in incoming:
        if name not in existing:
            existing.append(name)


class GraphStore:
    """Mapping from entity name to entity, accumulated over one run.

    Entities are never removed. A second entity registered under a name that
    is already present is handled by ``policy``: ``replace`` drops the earlier
    record wholesale, ``merge`` folds the newcomer into it.
    """

    def __init__(self, policy: DuplicatePolicy = DuplicatePolicy.REPLACE) -> None:
        self.policy = policy
        self._entities: Dict[str, EntityRecord] = {}

    def register(self, entity: EntityRecord) -> EntityRecord:
        """Store ``entity`` and return the record that members must go to."""
        existing = self._entities.get(entity.name)
        if existing is None:
            self._entities[entity.name] = entity
            return entity
        if self.policy is DuplicatePolicy.MERGE:
            self._merge_into(existing, entity)
            return existing
        logger.debug("Replacing previously recorded entity %s", entity.name)
        self._entities[entity.name] = entity
        return entity

    def merge_from(self, other: "GraphStore") -> None:
        for entity in other:
            self.register(entity)

    def get(self, name: str) -> Optional[EntityRecord]:
        return self._entities.get(name)

    def names(self) -> List[str]:
        return sorted(self._entities)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {name: self._entities[name].to_dict() for name in self.names()}

    def _merge_into(self, existing: EntityRecord, incoming: EntityRecord) -> None:
        _union(existing.inherited_types, incoming.inherited_types)
        _union(existing.conformed_protocols, incoming.conformed_protocols)
        existing.properties.extend(incoming.properties)
        existing.methods.extend(incoming.methods)

    def __contains__(self, name: object) -> bool:
        return name in self._entities

    def __iter__(self) -> Iterator[EntityRecord]:
        return iter(list(self._entities.values()))

    def __len__(self) -> int:
        return len(self._entities)
