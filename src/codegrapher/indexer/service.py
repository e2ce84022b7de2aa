from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from ..config import Settings
from ..errors import GraphError, SourceReadError
from ..graph import GraphStore
from ..models.records import FileFailure
from .base import ParserRegistry
from .collector import DependencyCollector
from .discovery import discover_sources
from .swift_parser import SwiftParser

logger = logging.getLogger(__name__)

_Extraction = Tuple[Optional[GraphStore], Optional[GraphError]]


@dataclass
class BuildResult:
    store: GraphStore
    files: List[Path] = field(default_factory=list)
    failures: List[FileFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class GraphService:
    """Discover, parse and walk source files into one run-owned graph.

    Each file is walked into its own store. Per-file stores are merged into
    the run store by the calling thread only, in sorted file order, so the
    duplicate-name policy gives the same result with or without workers.
    """

    def __init__(self, settings: Settings, registry: ParserRegistry | None = None) -> None:
        self.settings = settings
        self.registry = registry or build_registry(settings)

    # --- public API ---
    def build(self, root: Path) -> BuildResult:
        root = root.expanduser().resolve()
        files = discover_sources(root, self.settings, self.registry.extensions())
        logger.info("Found %d source files under %s", len(files), root)
        return self.build_files(files)

    def build_files(self, files: Sequence[Path]) -> BuildResult:
        result = BuildResult(store=self.new_store(), files=list(files))
        for path, (file_store, error) in zip(result.files, self._extract_all(result.files)):
            if error is not None:
                if self.settings.fail_fast:
                    raise error
                logger.warning("Skipping %s: %s", path, error)
                result.failures.append(FileFailure(path=str(path), reason=str(error)))
                continue
            result.store.merge_from(file_store)
        return result

    def extract_source(self, source: bytes, path: Path) -> GraphStore:
        adapter = self.registry.for_path(path)
        root = adapter.parse(source, path)
        collector = DependencyCollector(self.new_store())
        return collector.walk(root, source)

    def new_store(self) -> GraphStore:
        return GraphStore(self.settings.duplicate_policy)

    # --- helpers ---
    def _extract_all(self, files: List[Path]) -> Iterable[_Extraction]:
        if self.settings.workers <= 1 or len(files) <= 1:
            for path in files:
                yield self._extract_path(path)
            return
        with ThreadPoolExecutor(max_workers=self.settings.workers) as executor:
            futures = [executor.submit(self._extract_path, path) for path in files]
            try:
                for future in futures:
                    yield future.result()
            finally:
                for future in futures:
                    future.cancel()

    def _extract_path(self, path: Path) -> _Extraction:
        logger.debug("Parsing %s", path)
        try:
            source = _read_source(path)
            return self.extract_source(source, path), None
        except GraphError as exc:
            return None, exc


def _read_source(path: Path) -> bytes:
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise SourceReadError(path, exc.strerror or str(exc)) from exc
    try:
        data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SourceReadError(path, f"not valid UTF-8 ({exc.reason})") from exc
    return data


def build_registry(settings: Settings) -> ParserRegistry:
    registry = ParserRegistry()
    registry.register(SwiftParser(strict=settings.strict_parse))
    return registry
