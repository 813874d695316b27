"""Core data models shared across ngmap components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set


@dataclass
class FileMeta:
    """Metadata for an individual project file."""

    path: str


@dataclass
class RepoManifest:
    """Normalized view of the project tree for the analysis engine."""

    root: str
    files: List[FileMeta]


@dataclass
class SourceUnit:
    """One TypeScript file queued for classification."""

    path: str
    text: str

    @property
    def source_bytes(self) -> bytes:
        return self.text.encode("utf-8")


class DeclarationKind(str, Enum):
    """Roles a class can play, keyed by its structural annotation."""

    COMPONENT = "component"
    SERVICE = "service"
    MODULE = "module"
    PIPE = "pipe"


@dataclass(frozen=True)
class Declaration:
    """Outcome of classifying a single annotated class."""

    kind: DeclarationKind
    name: str
    file: str
    metadata: Dict[str, str] = field(default_factory=dict)


@dataclass
class ComponentRecord:
    """A UI component and the inline markup it renders."""

    name: str
    file: str
    selector: str = ""
    template: str = ""
    template_url: str = ""
    children: List[str] = field(default_factory=list)


@dataclass
class PipeRecord:
    """A value-transform pipe and where it was declared."""

    name: str
    file: str
    pipe_name: str = ""


@dataclass(frozen=True)
class RouteEntry:
    """Route path mapped to the raw component reference serving it."""

    path: str
    component: str


class DiagnosticKind(str, Enum):
    IO_FAILURE = "io_failure"
    PARSE_FAILURE = "parse_failure"
    MALFORMED_METADATA = "malformed_metadata"


@dataclass(frozen=True)
class Diagnostic:
    """Non-blocking note about a file that was skipped or degraded."""

    kind: DiagnosticKind
    file: str
    message: str


@dataclass(frozen=True)
class TreeLine:
    """One emitted node of the component tree walk."""

    name: str
    depth: int


@dataclass
class ProjectFiles:
    """Auxiliary project documents forwarded untouched to the report."""

    dependencies: Dict[str, str] = field(default_factory=dict)
    dev_dependencies: Dict[str, str] = field(default_factory=dict)
    compiler_options: Optional[Dict[str, Any]] = None
    environments: List[str] = field(default_factory=list)


@dataclass
class AnalysisResult:
    """Everything a report renderer needs from one analysis run."""

    root: str
    structure: str
    components: Dict[str, ComponentRecord]
    services: Set[str]
    modules: Set[str]
    pipes: Dict[str, PipeRecord]
    routes: Dict[str, str]
    dependencies: Dict[str, Set[str]]
    tree: List[TreeLine]
    roots: List[str]
    project: ProjectFiles = field(default_factory=ProjectFiles)
    diagnostics: List[Diagnostic] = field(default_factory=list)
