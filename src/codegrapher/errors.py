"""Exceptions raised while building a code graph."""
from __future__ import annotations

from pathlib import Path


class GraphError(Exception):
    """Base class for every failure the grapher reports."""


class DiscoveryError(GraphError):
    """The root directory could not be enumerated."""


class SourceReadError(GraphError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to read {path}: {reason}")
        self.path = path
        self.reason = reason


class SourceParseError(GraphError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to parse {path}: {reason}")
        self.path = path
        self.reason = reason


class OutputError(GraphError):
    """The graph could not be encoded or written."""
