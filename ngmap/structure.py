"""Directory listing rendered for the project structure section."""

from __future__ import annotations

from pathlib import Path
from typing import List

from .repo_scanner import is_hidden_or_vendored

_BRANCH = "├── "
_LAST = "└── "
_PIPE = "│   "
_SPACE = "    "


def render_structure(root: Path) -> str:
    """Return a box-drawing tree of everything below ``root``."""
    lines: List[str] = []
    _render_dir(root, "", lines)
    return "\n".join(lines) + ("\n" if lines else "")


def _render_dir(directory: Path, prefix: str, lines: List[str]) -> None:
    try:
        entries = sorted(
            (entry for entry in directory.iterdir() if not is_hidden_or_vendored(entry.name)),
            key=lambda entry: entry.name,
        )
    except OSError:
        return

    for index, entry in enumerate(entries):
        is_last = index == len(entries) - 1
        lines.append(f"{prefix}{_LAST if is_last else _BRANCH}{entry.name}")
        if entry.is_dir() and not entry.is_symlink():
            _render_dir(entry, prefix + (_SPACE if is_last else _PIPE), lines)


__all__ = ["render_structure"]
