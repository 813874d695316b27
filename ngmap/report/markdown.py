"""Markdown and JSON renderers for analysis reports."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Sequence

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

from ..models import AnalysisResult
from .sections import ReportSection, build_sections


class MarkdownRenderer:
    """Renders report sections through jinja2 templates."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self._env = self._create_env(templates_dir)

    def render(self, result: AnalysisResult, sections: Sequence[str] | None = None) -> str:
        built = build_sections(result, sections)
        rendered: List[Dict[str, Any]] = [
            {"name": section.name, "title": section.title, "body": self._render_section(section)}
            for section in built
        ]
        template = self._env.get_template("report.md.j2")
        text = template.render(project_name=Path(result.root).name, sections=rendered)
        return re.sub(r"\n{3,}", "\n\n", text).strip() + "\n"

    def render_tree(self, result: AnalysisResult) -> str:
        """Render just the component tree as an indented bullet list."""
        section = build_sections(result, ["component_tree"])[0]
        return self._render_section(section).strip() + "\n"

    def _render_section(self, section: ReportSection) -> str:
        try:
            template = self._env.get_template(f"sections/{section.name}.j2")
        except TemplateNotFound:
            template = self._env.get_template("sections/default.j2")
        return template.render(data=section.data, metadata=section.metadata).rstrip()

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories: List[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        loader = FileSystemLoader(directories)
        env = Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)
        env.filters["pretty_json"] = _pretty_json
        return env


def _pretty_json(value: Any) -> str:
    """Dump ``value`` as indented JSON, keeping key order and raw characters."""
    return json.dumps(value, indent=2, ensure_ascii=False)


def render_json(result: AnalysisResult, sections: Sequence[str] | None = None) -> str:
    """Serialize report sections to a JSON document keyed by section name."""
    payload = {
        "project": Path(result.root).name,
        "sections": {
            section.name: {"title": section.title, "data": section.data, **section.metadata}
            for section in build_sections(result, sections)
        },
    }
    return json.dumps(payload, indent=2) + "\n"


__all__ = ["MarkdownRenderer", "render_json"]
