"""Report assembly: structured sections plus Markdown/JSON rendering."""

from .markdown import MarkdownRenderer, render_json
from .sections import DEFAULT_SECTIONS, SECTION_TITLES, ReportSection, build_sections

__all__ = [
    "DEFAULT_SECTIONS",
    "MarkdownRenderer",
    "ReportSection",
    "SECTION_TITLES",
    "build_sections",
    "render_json",
]
