"""Tree-sitter Gateway - parses TSX/JSX into SourceFile objects."""

import logging
from typing import Optional

import tree_sitter_typescript
from tree_sitter import Language, Parser

from next_a11y.domain.protocols import FileSystemProtocol, SourceParserProtocol
from next_a11y.domain.source import SourceFile

TSX_LANGUAGE = Language(tree_sitter_typescript.language_tsx())


class TreeSitterGateway(SourceParserProtocol):
    """Infrastructure implementation of SourceParserProtocol using the TSX grammar."""

    def __init__(self, filesystem: FileSystemProtocol) -> None:
        self._fs = filesystem
        self._parser = Parser(TSX_LANGUAGE)

    def parse_text(self, path: str, text: str) -> Optional[SourceFile]:
        """Parse text; None when the syntax tree contains errors."""
        tree = self._parser.parse(text.encode("utf-8"))
        if tree.root_node.has_error:
            logging.warning("Skipping %s: parse error", path)
            return None
        return SourceFile(path=path, text=text, tree=tree)

    def parse_file(self, path: str) -> Optional[SourceFile]:
        try:
            text = self._fs.read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            logging.warning("Skipping %s: %s", path, exc)
            return None
        return self.parse_text(path, text)
