from __future__ import annotations

import logging
import threading
from pathlib import Path

from tree_sitter import Language, Node, Parser
from tree_sitter_swift import language as swift_language

from ..errors import SourceParseError
from .base import ParserAdapter

logger = logging.getLogger(__name__)

SWIFT_LANGUAGE = Language(swift_language())


class SwiftParser(ParserAdapter):
    language = "swift"
    file_extensions = (".swift",)

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict
        # tree-sitter parsers are not shareable between threads
        self._local = threading.local()

    def parse(self, source: bytes, path: Path) -> Node:
        tree = self._parser().parse(source)
        root = tree.root_node
        if root.has_error:
            if self.strict:
                raise SourceParseError(path, "syntax tree contains error nodes")
            logger.warning("Parsed tree for %s contains syntax errors", path)
        return root

    def _parser(self) -> Parser:
        parser = getattr(self._local, "parser", None)
        if parser is None:
            parser = Parser(SWIFT_LANGUAGE)
            self._local.parser = parser
        return parser
