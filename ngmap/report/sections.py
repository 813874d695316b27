"""Turns an analysis result into ordered, structured report sections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from ..models import AnalysisResult

SECTION_TITLES: Dict[str, str] = {
    "structure": "Project Structure Overview",
    "component_tree": "Component Tree",
    "components": "Components",
    "services": "Services",
    "modules": "Modules",
    "pipes": "Pipes",
    "dependencies": "Dependencies",
    "routes": "Routing Configuration",
    "environments": "Environment Configurations",
    "third_party": "Third-party Dependencies",
    "tsconfig": "TypeScript Configuration",
    "diagnostics": "Diagnostics",
}

DEFAULT_SECTIONS: Sequence[str] = tuple(SECTION_TITLES)


@dataclass
class ReportSection:
    """One titled block of report data, free of any output formatting."""

    name: str
    title: str
    data: Any
    metadata: Dict[str, Any] = field(default_factory=dict)


def build_sections(
    result: AnalysisResult, sections: Sequence[str] | None = None
) -> List[ReportSection]:
    """Return report sections in canonical order, optionally filtered by name."""
    wanted = set(sections) if sections else set(DEFAULT_SECTIONS)
    unknown = wanted.difference(SECTION_TITLES)
    if unknown:
        raise ValueError(f"Unknown report sections requested: {', '.join(sorted(unknown))}")

    builders = {
        "structure": lambda: result.structure,
        "component_tree": lambda: [
            {"name": line.name, "depth": line.depth} for line in result.tree
        ],
        "components": lambda: [
            {
                "name": record.name,
                "file": record.file,
                "selector": record.selector,
                "template_url": record.template_url,
                "children": list(record.children),
            }
            for record in result.components.values()
        ],
        "services": lambda: sorted(result.services),
        "modules": lambda: sorted(result.modules),
        "pipes": lambda: [
            {"name": pipe.name, "file": pipe.file, "pipe_name": pipe.pipe_name}
            for pipe in result.pipes.values()
        ],
        "dependencies": lambda: [
            {"file": path, "specifiers": sorted(specs)}
            for path, specs in sorted(result.dependencies.items())
        ],
        "routes": lambda: [
            {"path": path, "component": component}
            for path, component in result.routes.items()
        ],
        "environments": lambda: list(result.project.environments),
        "third_party": lambda: {
            "dependencies": dict(result.project.dependencies),
            "devDependencies": dict(result.project.dev_dependencies),
        },
        "tsconfig": lambda: result.project.compiler_options,
        "diagnostics": lambda: [
            {"kind": diag.kind.value, "file": diag.file, "message": diag.message}
            for diag in result.diagnostics
        ],
    }

    built: List[ReportSection] = []
    for name in DEFAULT_SECTIONS:
        if name not in wanted:
            continue
        metadata: Dict[str, Any] = {}
        if name == "component_tree":
            metadata["roots"] = list(result.roots)
        built.append(
            ReportSection(name=name, title=SECTION_TITLES[name], data=builders[name](), metadata=metadata)
        )
    return built


__all__ = ["DEFAULT_SECTIONS", "ReportSection", "SECTION_TITLES", "build_sections"]
