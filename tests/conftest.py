"""Shared helpers for code grapher tests."""
from pathlib import Path
from typing import Dict

import pytest

from codegrapher.config import DuplicatePolicy, Settings
from codegrapher.graph import GraphStore
from codegrapher.indexer.service import GraphService

FIXTURES = Path(__file__).parent / "fixtures" / "swift"


def load_fixture(name: str) -> str:
    return (FIXTURES / name).read_text()


def extract(source: str, policy: DuplicatePolicy = DuplicatePolicy.REPLACE) -> GraphStore:
    """Walk a single Swift snippet into a fresh graph store."""
    service = GraphService(Settings(duplicate_policy=policy))
    return service.extract_source(source.encode("utf-8"), Path("Snippet.swift"))


def write_sources(root: Path, files: Dict[str, str]) -> Dict[str, Path]:
    written: Dict[str, Path] = {}
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        written[rel_path] = path
    return written


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root
