from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from git import InvalidGitRepositoryError, NoSuchPathError, Repo

from ..errors import DiscoveryError


def open_repo(path: Path) -> Repo:
    try:
        return Repo(str(path), search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as exc:
        raise DiscoveryError(f"{path} is not inside a git repository") from exc


def tracked_source_files(repo: Repo, root: Path, extensions: Iterable[str]) -> List[Path]:
    """Absolute paths of files under ``root`` that git tracks, sorted."""
    if repo.working_tree_dir is None:
        raise DiscoveryError("Bare repositories have no working tree to scan")
    work_tree = Path(repo.working_tree_dir).resolve()
    patterns = [f"*{ext}" for ext in extensions]
    listing = repo.git.ls_files("--", *patterns)
    root = root.resolve()
    files: List[Path] = []
    for line in listing.splitlines():
        rel_path = line.strip()
        if not rel_path:
            continue
        candidate = work_tree / rel_path
        if candidate.is_relative_to(root) and candidate.is_file():
            files.append(candidate)
    return sorted(files)
