from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Tuple

from tree_sitter import Node


class ParserAdapter(ABC):
    language: str
    file_extensions: Tuple[str, ...]

    @abstractmethod
    def parse(self, source: bytes, path: Path) -> Node:
        """Return the root syntax node for the given UTF-8 source."""


class ParserRegistry:
    def __init__(self) -> None:
        self._registry: dict[str, ParserAdapter] = {}

    def register(self, adapter: ParserAdapter) -> None:
        self._registry[adapter.language] = adapter

    def for_path(self, path: Path) -> ParserAdapter:
        for adapter in self._registry.values():
            if path.suffix in adapter.file_extensions:
                return adapter
        raise ValueError(f"No parser registered for {path.suffix or path.name}")

    def extensions(self) -> Tuple[str, ...]:
        found: list[str] = []
        for adapter in self._registry.values():
            found.extend(adapter.file_extensions)
        return tuple(found)
