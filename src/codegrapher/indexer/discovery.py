from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List

from ..config import DiscoveryMode, Settings
from ..errors import DiscoveryError
from .git_utils import open_repo, tracked_source_files


def discover_sources(root: Path, settings: Settings, extensions: Iterable[str]) -> List[Path]:
    """Return the source files under ``root`` in a stable (sorted) order."""
    if not root.is_dir():
        raise DiscoveryError(f"Not a directory: {root}")
    extensions = tuple(extensions)
    if settings.discovery is DiscoveryMode.GIT:
        repo = open_repo(root)
        return tracked_source_files(repo, root, extensions)
    return walk_source_files(root, extensions, settings.exclude_dirs)


def walk_source_files(root: Path, extensions: Iterable[str], exclude_dirs: Iterable[str]) -> List[Path]:
    extensions = tuple(extensions)
    excluded = set(exclude_dirs)
    files: List[Path] = []

    def _raise(error: OSError) -> None:
        raise DiscoveryError(f"Cannot list {error.filename}: {error.strerror}") from error

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames[:] = [name for name in dirnames if name not in excluded]
        for filename in filenames:
            if filename.endswith(extensions):
                files.append(Path(dirpath) / filename)
    return sorted(files)
