"""Tree-sitter front-end turning TypeScript source into syntax trees."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from ..models import SourceUnit


class IOFailure(RuntimeError):
    """Raised when a source file cannot be read from disk."""


class ParseFailure(RuntimeError):
    """Raised when a source file cannot be turned into a usable syntax tree."""


def load_source(root: Path, rel_path: str) -> SourceUnit:
    """Read ``rel_path`` below ``root`` into a :class:`SourceUnit`."""
    path = root / rel_path
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise IOFailure(f"Unable to read {rel_path}: {exc}") from exc
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ParseFailure(f"{rel_path} is not valid UTF-8: {exc}") from exc
    return SourceUnit(path=rel_path, text=text)


def node_text(node: Optional[Node], source_bytes: bytes) -> str:
    if node is None:
        return ""
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


class SourceParser:
    """Parses TypeScript units with a lazily created tree-sitter parser."""

    def __init__(self) -> None:
        self._parser: Optional[Parser] = None

    def parse(self, unit: SourceUnit) -> Tree:
        tree = self._get_parser().parse(unit.source_bytes)
        if tree.root_node.has_error:
            line = _first_error_line(tree.root_node)
            where = f" near line {line}" if line else ""
            raise ParseFailure(f"Syntax error in {unit.path}{where}")
        return tree

    def _get_parser(self) -> Parser:
        if self._parser is None:
            self._parser = Parser(Language(tree_sitter_typescript.language_typescript()))
        return self._parser


def _first_error_line(node: Node) -> Optional[int]:
    if node.type == "ERROR" or node.is_missing:
        return node.start_point[0] + 1
    for child in node.children:
        if child.has_error:
            found = _first_error_line(child)
            if found is not None:
                return found
    return None


__all__ = ["IOFailure", "ParseFailure", "SourceParser", "load_source", "node_text"]
