"""Readers for package.json, tsconfig.json and environment files."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from .logging import get_logger
from .models import Diagnostic, DiagnosticKind, ProjectFiles

logger = get_logger("project_files")

# Strings are matched first so comment markers inside them survive.
_JSONC_TOKENS = re.compile(
    r'("(?:\\.|[^"\\])*")|(//[^\n]*)|(/\*.*?\*/)',
    re.DOTALL,
)
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")


def load_project_files(root: Path, diagnostics: List[Diagnostic]) -> ProjectFiles:
    """Collect auxiliary documents; problems are appended to ``diagnostics``."""
    project = ProjectFiles()

    package_json = _load_json(root / "package.json", diagnostics)
    if isinstance(package_json, dict):
        project.dependencies = _extract_versions(package_json.get("dependencies"))
        project.dev_dependencies = _extract_versions(package_json.get("devDependencies"))

    tsconfig = _load_json(root / "tsconfig.json", diagnostics)
    if isinstance(tsconfig, dict):
        project.compiler_options = tsconfig

    env_dir = root / "src" / "environments"
    if env_dir.is_dir():
        project.environments = sorted(
            entry.name
            for entry in env_dir.iterdir()
            if entry.name.startswith("environment") and entry.name.endswith(".ts")
        )

    return project


def strip_json_comments(text: str) -> str:
    """Drop ``//`` and ``/* */`` comments plus trailing commas from JSONC text."""

    def _keep_strings(match: re.Match[str]) -> str:
        return match.group(1) or ""

    without_comments = _JSONC_TOKENS.sub(_keep_strings, text)
    return _TRAILING_COMMA.sub(r"\1", without_comments)


def _load_json(path: Path, diagnostics: List[Diagnostic]) -> Optional[Any]:
    if not path.exists():
        return None
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        _note(diagnostics, DiagnosticKind.IO_FAILURE, path, f"Unable to read {path.name}: {exc}")
        return None

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    try:
        return json.loads(strip_json_comments(text))
    except json.JSONDecodeError as exc:
        _note(diagnostics, DiagnosticKind.PARSE_FAILURE, path, f"Invalid JSON in {path.name}: {exc}")
        return None


def _extract_versions(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(name): str(version) for name, version in value.items()}


def _note(diagnostics: List[Diagnostic], kind: DiagnosticKind, path: Path, message: str) -> None:
    logger.warning(message)
    diagnostics.append(Diagnostic(kind=kind, file=path.name, message=message))


__all__ = ["load_project_files", "strip_json_comments"]
